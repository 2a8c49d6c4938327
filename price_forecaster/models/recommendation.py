"""
Buy-or-wait recommendation and deal score models.

Both are terminal outputs: the engine returns them and never stores them.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from price_forecaster.models.festival import FestivalImpact
from price_forecaster.taxonomy.signals import (
    DealRating,
    PricePosition,
    RecommendationAction,
    TrendDirection,
    VolatilityLevel,
)


class RecommendationFactors(BaseModel):
    """Signals that fed the recommendation decision."""

    model_config = ConfigDict(frozen=True)

    current_price_position: PricePosition
    trend: TrendDirection
    festival_impact: Optional[FestivalImpact] = None
    volatility: VolatilityLevel
    prediction_accuracy: float


class BuyRecommendation(BaseModel):
    """Actionable buy_now / wait / set_alert advice for one product.

    Attributes:
        action: Recommended action.
        confidence: Confidence in [0, 1].
        reasoning: Human-readable rationale with the key numbers interpolated.
        predicted_best_price: Lowest forecast price (or current price when
            no forecast is available).
        predicted_best_date: Date of ``predicted_best_price``.
        savings_if_wait: ``max(0, current - predicted_best_price)``.
        factors: Full signal breakdown.
    """

    model_config = ConfigDict(frozen=True)

    action: RecommendationAction
    confidence: float
    reasoning: str
    predicted_best_price: float
    predicted_best_date: date
    savings_if_wait: float
    factors: RecommendationFactors

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {v}.")
        return v

    @field_validator("reasoning")
    @classmethod
    def validate_reasoning_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("reasoning must not be empty.")
        return v.strip()


class DealScore(BaseModel):
    """How good an observed price is, on a 0–100 scale."""

    model_config = ConfigDict(frozen=True)

    score: int
    rating: DealRating
    label: str
