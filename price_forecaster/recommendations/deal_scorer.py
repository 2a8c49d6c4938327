"""
Deal scoring: rate one observed price on a 0–100 scale.

    score = discount-from-average points   (0 / 10 / 20 / 30 / 40 at 5 / 10 / 20 / 30 %)
          + distance-from-minimum points   (30 within 5%, 20 within 15%, 10 within 30%)
          + 20 if a festival sale is active
          + 10 if the price is below the historical average

Ratings: >= 80 excellent, >= 60 good, >= 40 fair, else poor.
"""

from __future__ import annotations

from price_forecaster.models.recommendation import DealScore
from price_forecaster.taxonomy.signals import DealRating

# (threshold %, points), checked from the largest discount down
_DISCOUNT_POINTS: tuple[tuple[float, int], ...] = ((30, 40), (20, 30), (10, 20), (5, 10))
# (max distance %, points), checked from the closest to the minimum out
_MIN_DISTANCE_POINTS: tuple[tuple[float, int], ...] = ((5, 30), (15, 20), (30, 10))

FESTIVAL_BONUS = 20
BELOW_AVERAGE_BONUS = 10

_RATINGS: tuple[tuple[int, DealRating, str], ...] = (
    (80, DealRating.EXCELLENT, "HOT DEAL"),
    (60, DealRating.GOOD, "Good Deal"),
    (40, DealRating.FAIR, "Fair Price"),
)


def score_deal(
    current_price: float,
    historical_average: float,
    historical_min: float,
    festival_active: bool,
) -> DealScore:
    """Score ``current_price`` against its history.

    A non-positive average contributes no discount points and a non-positive
    minimum contributes no distance points.
    """
    score = 0

    if historical_average > 0:
        discount_pct = (historical_average - current_price) / historical_average * 100
        score += _points_at_least(discount_pct, _DISCOUNT_POINTS)

    if historical_min > 0:
        distance_pct = (current_price - historical_min) / historical_min * 100
        for max_distance, points in _MIN_DISTANCE_POINTS:
            if distance_pct <= max_distance:
                score += points
                break

    if festival_active:
        score += FESTIVAL_BONUS
    if current_price < historical_average:
        score += BELOW_AVERAGE_BONUS

    for threshold, rating, label in _RATINGS:
        if score >= threshold:
            return DealScore(score=score, rating=rating, label=label)
    return DealScore(score=score, rating=DealRating.POOR, label="Not a Deal")


def _points_at_least(value: float, table: tuple[tuple[float, int], ...]) -> int:
    for threshold, points in table:
        if value >= threshold:
            return points
    return 0
