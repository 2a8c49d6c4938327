"""
Tests for price_forecaster/demand/insights.py.

What we test
------------
identify_market_opportunities():
  - Strong growth reported as an opportunity with "Next 30 days" timeframe.
  - Declining categories reported, stable ones dropped.
  - Categories with fewer than seven points or no history skipped.
  - Sorted by growth rate, highest first.
  - An imminent festival flags an otherwise stable category.
  - A festival beyond the lookahead window flags nothing.

calculate_optimal_inventory():
  - Stock and reorder point cover lead time plus safety days, rounded up.
  - Empty history → all-zero plan.

generate_demand_insights():
  - Festival within 30 days takes priority and is listed as an event.
  - A festival 31-60 days out still beats "stable", but not a trend signal.
  - The lookahead window bounds which festival is considered.
  - Growing/low, growing/high, declining and stable recommendations.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from price_forecaster.demand.insights import (
    calculate_optimal_inventory,
    generate_demand_insights,
    identify_market_opportunities,
)
from price_forecaster.models.demand import DemandPoint
from price_forecaster.taxonomy.signals import DemandTrend, SeasonalityStrength, VolatilityLevel


# ── Helpers ────────────────────────────────────────────────────────────────────

def _demand(values: list[float], start: date = date(2026, 5, 1)) -> list[DemandPoint]:
    return [DemandPoint(obs_date=start + timedelta(days=i), demand=v) for i, v in enumerate(values)]


def _rising(n: int = 14) -> list[DemandPoint]:
    return _demand([100.0 + 10 * i for i in range(n)])


def _falling(n: int = 14) -> list[DemandPoint]:
    return _demand([100.0 + 10 * i for i in reversed(range(n))])


# ── identify_market_opportunities ─────────────────────────────────────────────

def test_growing_category_is_an_opportunity(quiet_as_of):
    result = identify_market_opportunities(["toys"], {"toys": _rising()}, as_of=quiet_as_of)

    assert len(result) == 1
    opp = result[0]
    assert opp.category == "toys"
    assert opp.current_demand == pytest.approx(230.0)
    assert opp.projected_demand == pytest.approx(304.0, abs=0.01)
    assert opp.growth_rate > 30
    assert opp.reasoning.startswith("Strong demand growth")
    assert opp.timeframe == "Next 30 days"


def test_declining_reported_stable_dropped(quiet_as_of):
    history = {
        "toys": _rising(),
        "books": _falling(),
        "food": _demand([100.0] * 14),
    }
    result = identify_market_opportunities(["food", "books", "toys"], history, as_of=quiet_as_of)

    assert [o.category for o in result] == ["toys", "books"]
    assert result[1].growth_rate < -15
    assert result[1].reasoning.startswith("Demand declining")


def test_short_or_missing_history_skipped(quiet_as_of):
    history = {"toys": _rising(5)}
    assert identify_market_opportunities(["toys", "books"], history, as_of=quiet_as_of) == []


def test_imminent_festival_flags_stable_category(pre_sale_as_of):
    history = {"electronics": _demand([100.0] * 14, start=date(2026, 5, 1))}
    result = identify_market_opportunities(["electronics"], history, as_of=pre_sale_as_of)

    assert len(result) == 1
    assert "Black Friday approaching in 14 days." in result[0].reasoning


def test_festival_beyond_lookahead_not_flagged(pre_sale_as_of):
    history = {"electronics": _demand([100.0] * 14, start=date(2026, 5, 1))}
    result = identify_market_opportunities(
        ["electronics"], history, as_of=pre_sale_as_of, lookahead_days=10,
    )
    assert result == []


# ── calculate_optimal_inventory ───────────────────────────────────────────────

def test_inventory_for_flat_demand(flat_demand):
    plan = calculate_optimal_inventory("food", flat_demand, lead_time_days=7, safety_stock_days=5)
    assert plan.average_daily_demand == pytest.approx(100.0)
    assert plan.peak_daily_demand == pytest.approx(95.0)
    assert plan.reorder_point == 1200
    assert plan.recommended_stock == 1140


def test_inventory_rounds_up_to_whole_units():
    plan = calculate_optimal_inventory("food", _demand([33.3] * 10))
    assert plan.reorder_point == 400       # 33.3 · 12 = 399.6
    assert plan.recommended_stock == 380   # ~31.64 · 12
    assert isinstance(plan.recommended_stock, int)


def test_inventory_empty_history():
    plan = calculate_optimal_inventory("food", [])
    assert plan.recommended_stock == 0
    assert plan.reorder_point == 0
    assert plan.average_daily_demand == 0.0
    assert plan.peak_daily_demand == 0.0


# ── generate_demand_insights ──────────────────────────────────────────────────

def test_festival_takes_priority(pre_sale_as_of):
    insights = generate_demand_insights("electronics", _rising(), as_of=pre_sale_as_of)
    assert insights.recommendation == "Prepare for Black Friday. Stock up now."
    assert insights.upcoming_events == ("Black Friday in 14 days (50% off expected)",)


def test_steady_growth_low_volatility(quiet_as_of):
    insights = generate_demand_insights(
        "toys", _demand([1000.0 + 15 * i for i in range(14)]), as_of=quiet_as_of,
    )
    assert insights.trend == DemandTrend.GROWING
    assert insights.volatility == VolatilityLevel.LOW
    assert insights.seasonality == SeasonalityStrength.STRONG
    assert insights.upcoming_events == ()
    assert insights.recommendation.startswith("Steady growth with low volatility")


def test_growing_but_volatile(quiet_as_of):
    insights = generate_demand_insights(
        "toys", _demand([10.0 * (i + 1) for i in range(14)]), as_of=quiet_as_of,
    )
    assert insights.trend == DemandTrend.GROWING
    assert insights.volatility == VolatilityLevel.HIGH
    assert insights.recommendation.startswith("Growing but volatile")


def test_declining(quiet_as_of):
    insights = generate_demand_insights("toys", _falling(), as_of=quiet_as_of)
    assert insights.trend == DemandTrend.DECLINING
    assert insights.volatility == VolatilityLevel.MEDIUM
    assert insights.recommendation.startswith("Declining demand")


def test_stable(quiet_as_of, flat_demand):
    insights = generate_demand_insights("toys", flat_demand, as_of=quiet_as_of)
    assert insights.trend == DemandTrend.STABLE
    assert insights.volatility == VolatilityLevel.LOW
    assert insights.seasonality == SeasonalityStrength.WEAK
    assert insights.recommendation == "Stable demand. Maintain current inventory levels."


def test_empty_history_is_stable(quiet_as_of):
    insights = generate_demand_insights("toys", [], as_of=quiet_as_of)
    assert insights.trend == DemandTrend.STABLE
    assert insights.volatility == VolatilityLevel.LOW


def test_distant_festival_beats_stable():
    # Independence Day is 56 days after 2026-06-20.
    insights = generate_demand_insights(
        "electronics", _demand([100.0] * 30), as_of=date(2026, 6, 20),
    )
    assert insights.trend == DemandTrend.STABLE
    assert insights.upcoming_events == ("Independence Day in 56 days (35% off expected)",)
    assert insights.recommendation == "Prepare for Independence Day. Stock up now."


def test_distant_festival_yields_to_declining_trend():
    insights = generate_demand_insights("electronics", _falling(), as_of=date(2026, 6, 20))
    assert insights.upcoming_events == ("Independence Day in 56 days (35% off expected)",)
    assert insights.recommendation.startswith("Declining demand")


def test_lookahead_bounds_festival_search():
    insights = generate_demand_insights(
        "electronics", _demand([100.0] * 30), as_of=date(2026, 6, 20), lookahead_days=30,
    )
    assert insights.upcoming_events == ()
    assert insights.recommendation == "Stable demand. Maintain current inventory levels."
