"""
Price series models.

``PricePoint`` is the input unit: one pre-aggregated observation per day.
``PricePrediction`` is one day of a forward forecast with its confidence
score and 95% band.
"""

from __future__ import annotations

import math
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PricePoint(BaseModel):
    """One daily price observation.

    Attributes:
        obs_date: Calendar date of the observation.
        price: Observed price (rupees), non-negative.
    """

    model_config = ConfigDict(frozen=True)

    obs_date: date
    price: float

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"price must be a finite non-negative number, got {v}.")
        return v


class PricePrediction(BaseModel):
    """Point forecast for one future day.

    Attributes:
        target_date: Forecasted calendar date.
        predicted_price: Central estimate, never negative.
        confidence: Model confidence in [0, 1]; decays with distance.
        lower_bound: Lower edge of the volatility band, floored at 0.
        upper_bound: Upper edge of the volatility band.
    """

    model_config = ConfigDict(frozen=True)

    target_date: date
    predicted_price: float
    confidence: float
    lower_bound: float
    upper_bound: float

    @model_validator(mode="after")
    def validate_band(self) -> "PricePrediction":
        if self.predicted_price < 0:
            raise ValueError("predicted_price must be non-negative.")
        if self.lower_bound < 0:
            raise ValueError("lower_bound must be non-negative.")
        if self.lower_bound > self.upper_bound:
            raise ValueError(
                f"lower_bound ({self.lower_bound}) must be <= "
                f"upper_bound ({self.upper_bound})."
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}.")
        return self
