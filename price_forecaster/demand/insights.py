"""
Planning outputs derived from demand forecasts.

identify_market_opportunities()
    Forecast 30 days per category, compare the mean projection with the
    latest observed demand, and bucket the growth percentage:

        > 30%   strong growth        (opportunity)
        > 15%   moderate growth      (opportunity)
        >  5%   slight increase      (opportunity)
        < -15%  declining            (reported, not an opportunity)
        else    stable               (dropped)

    A relevant festival within 30 days also flags an opportunity.

calculate_optimal_inventory()
    reorder_point     = average_demand · (lead_time + safety_days)
    recommended_stock = peak_forecast_demand · (lead_time + safety_days)

generate_demand_insights()
    Classifies trend, volatility and seasonality strength with fixed
    thresholds and picks a single canned recommendation.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Mapping, Optional, Sequence

from price_forecaster.demand.forecaster import (
    calculate_baseline,
    calculate_trend,
    forecast_demand,
    sort_demand,
)
from price_forecaster.models.demand import (
    DemandInsights,
    DemandPoint,
    InventoryPlan,
    MarketOpportunity,
)
from price_forecaster.seasonality.calendar import DEFAULT_LOOKAHEAD_DAYS, upcoming_festival_impact
from price_forecaster.taxonomy.signals import DemandTrend, SeasonalityStrength, VolatilityLevel

logger = logging.getLogger(__name__)

OPPORTUNITY_PERIOD_DAYS = 30
MIN_HISTORY_POINTS = 7
FESTIVAL_IMMINENT_DAYS = 30


def identify_market_opportunities(
    categories: Sequence[str],
    history_by_category: Mapping[str, Sequence[DemandPoint]],
    as_of: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> list[MarketOpportunity]:
    """Rank categories by projected 30-day demand growth.

    Args:
        categories:          Categories to evaluate, in any order.
        history_by_category: Demand history per category; missing keys or
                             fewer than 7 points skip the category.
        as_of:               Reference date for festival lookups.
        lookahead_days:      Festival lookahead window.

    Returns:
        Opportunities (and clearly declining categories) sorted by growth
        rate, highest first.
    """
    opportunities: list[MarketOpportunity] = []

    for category in categories:
        history = history_by_category.get(category, [])
        if len(history) < MIN_HISTORY_POINTS:
            logger.debug("Skipping %s: %d points < %d", category, len(history), MIN_HISTORY_POINTS)
            continue

        forecasts = forecast_demand(category, history, OPPORTUNITY_PERIOD_DAYS)
        if not forecasts:
            continue

        current = sort_demand(history)[-1].demand
        projected = sum(f.predicted_demand for f in forecasts) / len(forecasts)
        growth = (projected - current) / current * 100 if current > 0 else 0.0
        avg_confidence = sum(f.confidence for f in forecasts) / len(forecasts)

        reasoning, is_opportunity = _growth_narrative(growth)

        impact = upcoming_festival_impact(category, as_of, lookahead_days)
        if impact is not None and impact.days_until <= FESTIVAL_IMMINENT_DAYS:
            reasoning += f" {impact.festival} approaching in {impact.days_until} days."
            is_opportunity = True

        if is_opportunity or growth < -15:
            opportunities.append(
                MarketOpportunity(
                    category=category,
                    current_demand=round(current, 2),
                    projected_demand=round(projected, 2),
                    growth_rate=round(growth, 2),
                    confidence=round(avg_confidence, 2),
                    reasoning=reasoning,
                    timeframe=f"Next {OPPORTUNITY_PERIOD_DAYS} days",
                )
            )

    return sorted(opportunities, key=lambda o: o.growth_rate, reverse=True)


def _growth_narrative(growth: float) -> tuple[str, bool]:
    """Map a growth percentage to ``(reasoning, is_opportunity)``."""
    if growth > 30:
        return (
            f"Strong demand growth of {growth:.0f}% expected. "
            "High potential for increased sales and pricing power.",
            True,
        )
    if growth > 15:
        return (
            f"Moderate demand growth of {growth:.0f}% expected. "
            "Good opportunity to increase inventory.",
            True,
        )
    if growth > 5:
        return (
            f"Slight demand increase of {growth:.0f}% expected. "
            "Consider maintaining current stock levels.",
            True,
        )
    if growth < -15:
        return (
            f"Demand declining by {abs(growth):.0f}%. "
            "Consider reducing prices or inventory to clear stock.",
            False,
        )
    return (
        f"Stable demand with {abs(growth):.0f}% change. No immediate action needed.",
        False,
    )


def calculate_optimal_inventory(
    category: str,
    history: Sequence[DemandPoint],
    lead_time_days: int = 7,
    safety_stock_days: int = 5,
) -> InventoryPlan:
    """Size stock to cover lead time plus safety days.

    Returns an all-zero plan for an empty history.
    """
    if not history:
        return InventoryPlan(
            recommended_stock=0,
            reorder_point=0,
            average_daily_demand=0.0,
            peak_daily_demand=0.0,
        )

    cover_days = lead_time_days + safety_stock_days
    forecasts = forecast_demand(category, history, cover_days)

    average = calculate_baseline(history)
    peak = max((f.predicted_demand for f in forecasts), default=0.0)

    return InventoryPlan(
        recommended_stock=math.ceil(peak * cover_days),
        reorder_point=math.ceil(average * cover_days),
        average_daily_demand=round(average, 2),
        peak_daily_demand=round(peak, 2),
    )


def generate_demand_insights(
    category: str,
    history: Sequence[DemandPoint],
    as_of: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> DemandInsights:
    """Summarise a demand series into qualitative signals and one recommendation.

    Thresholds:
        trend        growing > +1%/day, declining < −1%/day
        volatility   CV > 0.30 high, > 0.15 medium
        seasonality  trend r² > 0.6 strong, > 0.3 moderate

    Recommendation priority: festival imminent first, then the
    trend/volatility combinations, then any later festival in the
    lookahead, then "stable".
    """
    trend = calculate_trend(history)
    impact = upcoming_festival_impact(category, as_of, lookahead_days)

    if trend.daily_growth_rate > 0.01:
        direction = DemandTrend.GROWING
    elif trend.daily_growth_rate < -0.01:
        direction = DemandTrend.DECLINING
    else:
        direction = DemandTrend.STABLE

    cv = _coefficient_of_variation([p.demand for p in history])
    if cv > 0.3:
        volatility = VolatilityLevel.HIGH
    elif cv > 0.15:
        volatility = VolatilityLevel.MEDIUM
    else:
        volatility = VolatilityLevel.LOW

    if trend.strength > 0.6:
        seasonality = SeasonalityStrength.STRONG
    elif trend.strength > 0.3:
        seasonality = SeasonalityStrength.MODERATE
    else:
        seasonality = SeasonalityStrength.WEAK

    upcoming: tuple[str, ...] = ()
    if impact is not None:
        upcoming = (
            f"{impact.festival} in {impact.days_until} days "
            f"({impact.expected_discount:.0f}% off expected)",
        )

    if impact is not None and impact.days_until <= FESTIVAL_IMMINENT_DAYS:
        recommendation = f"Prepare for {impact.festival}. Stock up now."
    elif direction == DemandTrend.GROWING and volatility == VolatilityLevel.LOW:
        recommendation = "Steady growth with low volatility. Increase inventory gradually."
    elif direction == DemandTrend.GROWING and volatility == VolatilityLevel.HIGH:
        recommendation = "Growing but volatile. Monitor closely and adjust inventory frequently."
    elif direction == DemandTrend.DECLINING:
        recommendation = "Declining demand. Consider promotions and reduce inventory."
    elif impact is not None:
        recommendation = f"Prepare for {impact.festival}. Stock up now."
    else:
        recommendation = "Stable demand. Maintain current inventory levels."

    return DemandInsights(
        trend=direction,
        volatility=volatility,
        seasonality=seasonality,
        upcoming_events=upcoming,
        recommendation=recommendation,
    )


def _coefficient_of_variation(values: Sequence[float]) -> float:
    """Population stdev / mean; 0.0 when empty or the mean is not positive."""
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    if mean <= 0:
        return 0.0
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance) / mean
