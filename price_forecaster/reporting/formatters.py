"""
ASCII terminal formatters for CLI commands.

All formatters accept engine output models and return plain multi-line
strings suitable for ``typer.echo()``.  No third-party dependencies.
Monetary values are shown in rupees with two decimals.
"""

from __future__ import annotations

from typing import Sequence

from price_forecaster.models.demand import (
    DemandForecast,
    DemandInsights,
    InventoryPlan,
    MarketOpportunity,
)
from price_forecaster.models.festival import Festival, FestivalImpact, SeasonalPattern
from price_forecaster.models.price import PricePrediction
from price_forecaster.models.recommendation import BuyRecommendation, DealScore
from price_forecaster.recommendations.engine import recommendation_text

_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _rule(width: int) -> str:
    return "  " + "-" * width


# ── Price forecasts ───────────────────────────────────────────────────────────


def format_price_forecast_table(predictions: Sequence[PricePrediction]) -> str:
    """Format price predictions as one row per day::

          Date         Predicted      Lower      Upper   Conf
          ---------------------------------------------------
          2026-10-18     1134.21    1120.40    1148.02   0.94
    """
    if not predictions:
        return "  No predictions (empty history)."

    lines = [
        f"  {'Date':<10}  {'Predicted':>10}  {'Lower':>9}  {'Upper':>9}  {'Conf':>5}",
        _rule(51),
    ]
    for p in predictions:
        lines.append(
            f"  {p.target_date.isoformat():<10}  {p.predicted_price:>10.2f}  "
            f"{p.lower_bound:>9.2f}  {p.upper_bound:>9.2f}  {p.confidence:>5.2f}"
        )
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendation(rec: BuyRecommendation) -> str:
    """Headline, reasoning, and factor breakdown of a recommendation."""
    f = rec.factors
    lines = [
        recommendation_text(rec),
        "",
        f"  Best predicted price: {rec.predicted_best_price:.2f} on "
        f"{rec.predicted_best_date.isoformat()}",
        f"  Savings if you wait:  {rec.savings_if_wait:.2f}",
        f"  Price position:       {f.current_price_position.value}",
        f"  Trend:                {f.trend.value}",
        f"  Volatility:           {f.volatility.value}",
        f"  Forecast confidence:  {f.prediction_accuracy:.2f}",
    ]
    if f.festival_impact is not None:
        lines.append(f"  Festival:             {format_festival_impact(f.festival_impact)}")
    return "\n".join(lines)


def format_deal_score(deal: DealScore) -> str:
    return f"  {deal.label} | score {deal.score}/100 | rating {deal.rating.value}"


# ── Festivals and seasonality ─────────────────────────────────────────────────


def format_festival_impact(impact: FestivalImpact) -> str:
    window = impact.best_buy_window
    return (
        f"{impact.festival} in {impact.days_until}d, ~{impact.expected_discount:.0f}% off "
        f"(confidence {impact.confidence:.2f}; buy {window.start_date.isoformat()} "
        f"to {window.end_date.isoformat()})"
    )


def format_festival_table(festivals: Sequence[Festival]) -> str:
    """Format a festival catalog, one row per festival in catalog order."""
    if not festivals:
        return "  No festivals."

    lines = [
        f"  {'Date':<10}  {'Festival':<20}  {'Disc':>4}  {'Demand':>6}  "
        f"{'Window':<23}  Categories",
        _rule(90),
    ]
    for fest in festivals:
        window = f"{fest.window_start.isoformat()}..{fest.window_end.strftime('%m-%d')}"
        lines.append(
            f"  {fest.festival_date.isoformat():<10}  {fest.name:<20}  "
            f"{fest.typical_discount:>3.0f}%  {fest.demand_multiplier:>5.1f}x  "
            f"{window:<23}  {', '.join(fest.categories)}"
        )
    return "\n".join(lines)


def format_seasonal_patterns(patterns: Sequence[SeasonalPattern]) -> str:
    """Format monthly patterns; months without data show as neutral."""
    if not patterns:
        return "  No seasonal patterns (empty history)."

    lines = [
        f"  {'Month':<5}  {'Mult':>6}  {'Disc%':>7}  {'Conf':>5}  Festivals",
        _rule(60),
    ]
    for p in patterns:
        lines.append(
            f"  {_MONTH_NAMES[p.month - 1]:<5}  {p.price_multiplier:>6.3f}  "
            f"{p.average_discount:>7.2f}  {p.confidence:>5.2f}  {', '.join(p.festivals) or '-'}"
        )
    return "\n".join(lines)


# ── Demand ────────────────────────────────────────────────────────────────────


def format_demand_forecast_table(forecasts: Sequence[DemandForecast]) -> str:
    """Format demand forecasts with the multiplier breakdown per day."""
    if not forecasts:
        return "  No demand forecasts (empty history)."

    lines = [
        f"  {'Date':<10}  {'Demand':>9}  {'Conf':>5}  {'Trend':>7}  "
        f"{'Season':>6}  {'Fest':>5}  {'Total':>5}",
        _rule(62),
    ]
    for fc in forecasts:
        fx = fc.factors
        lines.append(
            f"  {fc.target_date.isoformat():<10}  {fc.predicted_demand:>9.2f}  "
            f"{fc.confidence:>5.2f}  {fx.trend_adjustment:>+7.3f}  "
            f"{fx.seasonal_multiplier:>6.2f}  {fx.festival_boost:>5.2f}  "
            f"{fx.total_multiplier:>5.2f}"
        )
    return "\n".join(lines)


def format_inventory_plan(plan: InventoryPlan) -> str:
    return "\n".join([
        f"  Recommended stock:    {plan.recommended_stock}",
        f"  Reorder point:        {plan.reorder_point}",
        f"  Average daily demand: {plan.average_daily_demand:.2f}",
        f"  Peak daily demand:    {plan.peak_daily_demand:.2f}",
    ])


def format_demand_insights(insights: DemandInsights) -> str:
    lines = [
        f"  Trend:        {insights.trend.value}",
        f"  Volatility:   {insights.volatility.value}",
        f"  Seasonality:  {insights.seasonality.value}",
    ]
    for event in insights.upcoming_events:
        lines.append(f"  Upcoming:     {event}")
    lines.append(f"  Advice:       {insights.recommendation}")
    return "\n".join(lines)


def format_opportunities(opportunities: Sequence[MarketOpportunity]) -> str:
    if not opportunities:
        return "  No market opportunities found."

    blocks: list[str] = []
    for opp in opportunities:
        blocks.append(
            f"  {opp.category}: {opp.current_demand:.2f} -> {opp.projected_demand:.2f} "
            f"({opp.growth_rate:+.2f}%, confidence {opp.confidence:.2f}, {opp.timeframe})\n"
            f"    {opp.reasoning}"
        )
    return "\n".join(blocks)
