"""
Monthly seasonal price patterns.

History is grouped by calendar month regardless of year.  For every month
with at least ``MIN_POINTS_PER_MONTH`` observations::

    price_multiplier = month_mean / overall_mean
    average_discount = (overall_mean - month_mean) / overall_mean · 100
    confidence       = min(count / 10, 1)

Months with fewer points get a neutral pattern (multiplier 1.0, confidence 0).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from price_forecaster.models.festival import SeasonalPattern
from price_forecaster.models.price import PricePoint
from price_forecaster.seasonality.calendar import festivals_for_year

logger = logging.getLogger(__name__)

MIN_POINTS_PER_MONTH = 2
FULL_CONFIDENCE_POINTS = 10
MIN_FACTOR_CONFIDENCE = 0.3


def detect_seasonal_pattern(
    history: Sequence[PricePoint],
    category: Optional[str] = None,
    reference_year: Optional[int] = None,
) -> list[SeasonalPattern]:
    """Build one ``SeasonalPattern`` per calendar month (1..12).

    Args:
        history:        Daily price observations in any order.
        category:       When given, only festivals listing this category are
                        attached to a month.
        reference_year: Year used to instantiate the festival catalog; the
                        year of the latest observation when ``None``.

    Returns:
        Twelve patterns ordered January to December, or ``[]`` for an empty
        history.
    """
    if not history:
        return []

    prices_by_month: dict[int, list[float]] = defaultdict(list)
    for point in history:
        prices_by_month[point.obs_date.month].append(point.price)

    all_prices = [p.price for p in history]
    overall_mean = sum(all_prices) / len(all_prices)

    year = reference_year if reference_year is not None else max(
        p.obs_date for p in history
    ).year
    catalog = festivals_for_year(year)

    patterns: list[SeasonalPattern] = []
    for month in range(1, 13):
        prices = prices_by_month.get(month, [])
        if len(prices) < MIN_POINTS_PER_MONTH:
            patterns.append(SeasonalPattern(month=month))
            continue

        month_mean = sum(prices) / len(prices)
        if overall_mean > 0:
            price_multiplier = month_mean / overall_mean
            average_discount = (overall_mean - month_mean) / overall_mean * 100
        else:
            price_multiplier = 1.0
            average_discount = 0.0

        festivals = tuple(
            f.name for f in catalog
            if f.festival_date.month == month
            and (category is None or category in f.categories)
        )

        patterns.append(
            SeasonalPattern(
                month=month,
                average_discount=round(average_discount, 2),
                price_multiplier=round(price_multiplier, 3),
                festivals=festivals,
                confidence=round(min(len(prices) / FULL_CONFIDENCE_POINTS, 1.0), 2),
            )
        )

    logger.debug(
        "detect_seasonal_pattern: %d points, %d months with data",
        len(history), sum(1 for p in patterns if p.confidence > 0),
    )
    return patterns


def get_seasonal_factor(check_date: date, patterns: Sequence[SeasonalPattern]) -> float:
    """Price multiplier for ``check_date``'s month.

    Returns 1.0 when the month has no pattern or its confidence is below
    ``MIN_FACTOR_CONFIDENCE``.
    """
    for pattern in patterns:
        if pattern.month == check_date.month:
            if pattern.confidence < MIN_FACTOR_CONFIDENCE:
                return 1.0
            return pattern.price_multiplier
    return 1.0
