"""
N-day demand forecaster.

Each forecast day is a product of four auditable factors::

    predicted = baseline · (1 + trend_adjustment) · seasonal_multiplier · festival_boost

baseline
    Mean of the history.
trend_adjustment
    ``slope / baseline · day`` from an OLS fit over the sorted history;
    0 when fewer than ``MIN_TREND_POINTS`` observations exist.
seasonal_multiplier
    Fixed Indian retail calendar: Oct–Dec peak (1.4), Jan/Feb/Jul/Aug high
    (1.15), every other month slightly below normal (0.95).
festival_boost
    Full ``demand_multiplier`` on the festival day and the day before; in the
    pre-period the boost climbs from half strength towards full, in the
    post-period it decays linearly back to 1.0.  Outside any window, 1.0.

Confidence::

    min(n / 30, 0.9) · exp(-day / (0.7 · horizon)) · (0.5 + 0.5 · trend_r2)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from price_forecaster.forecasting.trend import fit_index_trend
from price_forecaster.models.demand import DemandFactors, DemandForecast, DemandPoint
from price_forecaster.seasonality.calendar import applies_to_category, festivals_for_year

logger = logging.getLogger(__name__)

MIN_TREND_POINTS = 7

_PEAK_MONTHS = frozenset({10, 11, 12})      # Diwali, festive season, year-end
_HIGH_MONTHS = frozenset({1, 2, 7, 8})      # Republic Day, Independence Day sales


@dataclass(frozen=True)
class DemandTrendFit:
    """Relative demand trend.

    Attributes:
        daily_growth_rate: OLS slope as a fraction of the baseline per day.
        strength:          r² of the fit.
    """

    daily_growth_rate: float = 0.0
    strength: float = 0.0


def sort_demand(history: Sequence[DemandPoint]) -> list[DemandPoint]:
    return sorted(history, key=lambda p: p.obs_date)


def calculate_baseline(history: Sequence[DemandPoint]) -> float:
    """Mean demand; 0.0 for an empty history."""
    if not history:
        return 0.0
    return sum(p.demand for p in history) / len(history)


def calculate_trend(history: Sequence[DemandPoint]) -> DemandTrendFit:
    """Fit the relative daily growth rate; neutral below ``MIN_TREND_POINTS``."""
    if len(history) < MIN_TREND_POINTS:
        return DemandTrendFit()

    model = fit_index_trend([p.demand for p in sort_demand(history)])
    baseline = calculate_baseline(history)
    growth = model.slope / baseline if baseline > 0 else 0.0
    return DemandTrendFit(daily_growth_rate=growth, strength=model.r2)


def seasonal_multiplier(month: int) -> float:
    """Calendar-month demand multiplier (month is 1..12)."""
    if month in _PEAK_MONTHS:
        return 1.4
    if month in _HIGH_MONTHS:
        return 1.15
    return 0.95


def festival_boost(check_date: date, category: str) -> tuple[float, Optional[str]]:
    """Demand boost on ``check_date`` from the first matching festival window.

    Returns:
        ``(multiplier, festival_name)``; ``(1.0, None)`` outside every window.
    """
    for festival in festivals_for_year(check_date.year):
        if not applies_to_category(festival, category):
            continue

        days_diff = (check_date - festival.festival_date).days
        if not -festival.pre_period_days <= days_diff <= festival.post_period_days:
            continue

        peak = festival.demand_multiplier
        if -1 <= days_diff <= 0:
            return peak, festival.name
        if days_diff < 0:
            fraction = abs(days_diff) / festival.pre_period_days
            return 1 + (peak - 1) * (1 - fraction * 0.5), festival.name
        fraction = days_diff / festival.post_period_days
        return 1 + (peak - 1) * (1 - fraction), festival.name

    return 1.0, None


def forecast_demand(
    category: str,
    history: Sequence[DemandPoint],
    days_ahead: int = 30,
) -> list[DemandForecast]:
    """Forecast daily demand for ``days_ahead`` days after the last observation.

    Args:
        category:   Product category; drives festival relevance.
        history:    Daily demand observations in any order.
        days_ahead: Forecast horizon in days.

    Returns:
        One ``DemandForecast`` per day; empty for an empty history or a
        non-positive horizon.
    """
    if not history or days_ahead < 1:
        return []

    baseline = calculate_baseline(history)
    trend = calculate_trend(history)
    last_date = sort_demand(history)[-1].obs_date
    base_confidence = min(len(history) / 30, 0.9)

    forecasts: list[DemandForecast] = []
    for day in range(1, days_ahead + 1):
        target = last_date + timedelta(days=day)

        trend_adjustment = trend.daily_growth_rate * day
        seasonal = seasonal_multiplier(target.month)
        boost, _ = festival_boost(target, category)

        total = (1 + trend_adjustment) * seasonal * boost
        predicted = max(0.0, baseline * total)

        time_decay = math.exp(-day / (days_ahead * 0.7))
        confidence = base_confidence * time_decay * (0.5 + 0.5 * trend.strength)

        forecasts.append(
            DemandForecast(
                target_date=target,
                predicted_demand=round(predicted, 2),
                confidence=round(confidence, 2),
                factors=DemandFactors(
                    baseline_demand=round(baseline, 2),
                    trend_adjustment=round(trend_adjustment, 3),
                    seasonal_multiplier=round(seasonal, 2),
                    festival_boost=round(boost, 2),
                    total_multiplier=round(total, 2),
                ),
            )
        )

    logger.debug(
        "forecast_demand: category=%s n=%d baseline=%.2f growth=%.4f",
        category, len(history), baseline, trend.daily_growth_rate,
    )
    return forecasts
