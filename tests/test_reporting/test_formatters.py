"""Tests for price_forecaster.reporting.formatters."""

from __future__ import annotations

from datetime import date, timedelta

from price_forecaster.demand.forecaster import forecast_demand
from price_forecaster.demand.insights import calculate_optimal_inventory, generate_demand_insights
from price_forecaster.forecasting.price import predict_prices
from price_forecaster.models.demand import DemandPoint, MarketOpportunity
from price_forecaster.models.price import PricePoint
from price_forecaster.recommendations.deal_scorer import score_deal
from price_forecaster.recommendations.engine import generate_buy_recommendation
from price_forecaster.reporting.formatters import (
    format_deal_score,
    format_demand_forecast_table,
    format_demand_insights,
    format_festival_table,
    format_inventory_plan,
    format_opportunities,
    format_price_forecast_table,
    format_recommendation,
    format_seasonal_patterns,
)
from price_forecaster.seasonality.calendar import festivals_for_year
from price_forecaster.seasonality.patterns import detect_seasonal_pattern


# ── Helpers ────────────────────────────────────────────────────────────────────

def _prices(values: list[float]) -> list[PricePoint]:
    start = date(2026, 5, 1)
    return [PricePoint(obs_date=start + timedelta(days=i), price=v) for i, v in enumerate(values)]


def _demand(values: list[float]) -> list[DemandPoint]:
    start = date(2026, 5, 1)
    return [DemandPoint(obs_date=start + timedelta(days=i), demand=v) for i, v in enumerate(values)]


# ── Price forecasts ───────────────────────────────────────────────────────────

def test_price_forecast_table_rows():
    preds = predict_prices(_prices([500.0] * 5), 3)
    out = format_price_forecast_table(preds)
    lines = out.splitlines()
    assert "Predicted" in lines[0]
    assert len(lines) == 2 + 3
    assert "2026-05-06" in lines[2]
    assert "500.00" in lines[2]


def test_price_forecast_table_empty():
    assert "No predictions" in format_price_forecast_table([])


# ── Recommendations and deals ─────────────────────────────────────────────────

def test_recommendation_block_without_festival():
    rec = generate_buy_recommendation(
        _prices([1000.0] * 10 + [800.0]), [], as_of=date(2026, 5, 15),
    )
    out = format_recommendation(rec)
    assert out.startswith("[BUY NOW] (85% confidence)")
    assert "Price position:       low" in out
    assert "Festival:" not in out


def test_recommendation_block_with_festival():
    rec = generate_buy_recommendation(
        _prices([1000.0, 1100.0] * 5 + [1050.0]), [], as_of=date(2026, 11, 10),
    )
    out = format_recommendation(rec)
    assert out.startswith("[WAIT]")
    assert "Black Friday in 14d" in out
    assert "2026-11-21 to 2026-11-26" in out


def test_deal_score_line():
    out = format_deal_score(score_deal(1000, 1500, 990, True))
    assert out.strip() == "HOT DEAL | score 100/100 | rating excellent"


# ── Festivals and seasonality ─────────────────────────────────────────────────

def test_festival_table_lists_catalog():
    out = format_festival_table(festivals_for_year(2026))
    assert len(out.splitlines()) == 2 + 15
    assert "Diwali" in out
    assert "2026-10-12..11-08" in out


def test_festival_table_empty():
    assert format_festival_table([]) == "  No festivals."


def test_seasonal_patterns_table():
    history = _prices([100.0] * 20)
    out = format_seasonal_patterns(detect_seasonal_pattern(history))
    lines = out.splitlines()
    assert len(lines) == 2 + 12
    assert lines[2].lstrip().startswith("Jan")
    assert "1.000" in lines[6]   # May


def test_seasonal_patterns_empty():
    assert "No seasonal patterns" in format_seasonal_patterns([])


# ── Demand ────────────────────────────────────────────────────────────────────

def test_demand_forecast_table():
    out = format_demand_forecast_table(forecast_demand("food", _demand([100.0] * 10), 2))
    lines = out.splitlines()
    assert len(lines) == 4
    assert "95.00" in lines[2]


def test_demand_forecast_table_empty():
    assert "No demand forecasts" in format_demand_forecast_table([])


def test_inventory_plan_block():
    out = format_inventory_plan(calculate_optimal_inventory("food", _demand([100.0] * 10)))
    assert "Recommended stock:    1140" in out
    assert "Reorder point:        1200" in out


def test_demand_insights_block_with_event():
    insights = generate_demand_insights("electronics", _demand([100.0] * 10), as_of=date(2026, 11, 10))
    out = format_demand_insights(insights)
    assert "Upcoming:     Black Friday in 14 days (50% off expected)" in out
    assert "Advice:       Prepare for Black Friday. Stock up now." in out


def test_opportunities_block():
    opp = MarketOpportunity(
        category="toys",
        current_demand=230.0,
        projected_demand=304.0,
        growth_rate=32.17,
        confidence=0.4,
        reasoning="Strong demand growth of 32% expected.",
        timeframe="Next 30 days",
    )
    out = format_opportunities([opp])
    assert "toys: 230.00 -> 304.00 (+32.17%" in out
    assert "Strong demand growth" in out


def test_opportunities_empty():
    assert "No market opportunities" in format_opportunities([])
