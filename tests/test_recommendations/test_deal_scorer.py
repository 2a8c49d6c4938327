"""
Tests for price_forecaster/recommendations/deal_scorer.py.

Covers:
  - Price at the historical minimum, far below average, during a festival
    → excellent "HOT DEAL" (score 100).
  - Rating thresholds at 80 / 60 / 40.
  - Festival bonus adds exactly 20 points.
  - Non-positive average or minimum contributes no points and never raises.
"""

from __future__ import annotations

import pytest

from price_forecaster.recommendations.deal_scorer import FESTIVAL_BONUS, score_deal
from price_forecaster.taxonomy.signals import DealRating


def test_hot_deal_at_minimum_during_festival():
    deal = score_deal(1000, historical_average=1500, historical_min=990, festival_active=True)
    assert deal.score == 100
    assert deal.rating == DealRating.EXCELLENT
    assert deal.label == "HOT DEAL"


@pytest.mark.parametrize(
    "price, average, minimum, festival, score, rating, label",
    [
        (700, 1000, 680, False, 80, DealRating.EXCELLENT, "HOT DEAL"),
        (800, 1000, 780, False, 70, DealRating.GOOD, "Good Deal"),
        (900, 1000, 800, False, 50, DealRating.FAIR, "Fair Price"),
        (1000, 1000, 1000, False, 30, DealRating.POOR, "Not a Deal"),
        (1200, 1000, 800, False, 0, DealRating.POOR, "Not a Deal"),
    ],
)
def test_rating_thresholds(price, average, minimum, festival, score, rating, label):
    deal = score_deal(price, average, minimum, festival)
    assert deal.score == score
    assert deal.rating == rating
    assert deal.label == label


def test_festival_adds_bonus():
    without = score_deal(850, 1000, 800, festival_active=False)
    with_fest = score_deal(850, 1000, 800, festival_active=True)
    assert with_fest.score - without.score == FESTIVAL_BONUS
    assert without.rating == DealRating.FAIR
    assert with_fest.rating == DealRating.GOOD


def test_zero_history_never_raises():
    deal = score_deal(100, historical_average=0, historical_min=0, festival_active=False)
    assert deal.score == 0
    assert deal.rating == DealRating.POOR


def test_score_is_idempotent():
    assert score_deal(900, 1000, 850, True) == score_deal(900, 1000, 850, True)
