"""
Demand series models and derived planning outputs.

``DemandForecast.factors`` keeps the composite-multiplier breakdown so a
forecast can be audited term by term::

    predicted = baseline * (1 + trend_adjustment) * seasonal * festival_boost
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from price_forecaster.taxonomy.signals import DemandTrend, SeasonalityStrength, VolatilityLevel


class DemandPoint(BaseModel):
    """One daily demand observation (units sold, searches, etc.)."""

    model_config = ConfigDict(frozen=True)

    obs_date: date
    demand: float
    category: Optional[str] = None

    @field_validator("demand")
    @classmethod
    def validate_demand(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"demand must be a finite non-negative number, got {v}.")
        return v


class DemandFactors(BaseModel):
    """Term-by-term breakdown of one demand forecast."""

    model_config = ConfigDict(frozen=True)

    baseline_demand: float
    trend_adjustment: float
    seasonal_multiplier: float
    festival_boost: float
    total_multiplier: float


class DemandForecast(BaseModel):
    """Demand forecast for one future day."""

    model_config = ConfigDict(frozen=True)

    target_date: date
    predicted_demand: float
    confidence: float
    factors: DemandFactors

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {v}.")
        return v


class MarketOpportunity(BaseModel):
    """A category whose 30-day demand outlook warrants attention."""

    model_config = ConfigDict(frozen=True)

    category: str
    current_demand: float
    projected_demand: float
    growth_rate: float
    confidence: float
    reasoning: str
    timeframe: str


class InventoryPlan(BaseModel):
    """Stock levels derived from a demand forecast.

    Attributes:
        recommended_stock: Peak forecast demand × cover days, rounded up.
        reorder_point: Average demand × cover days, rounded up.
        average_daily_demand: Mean of the history.
        peak_daily_demand: Highest forecast value over the cover period.
    """

    model_config = ConfigDict(frozen=True)

    recommended_stock: int
    reorder_point: int
    average_daily_demand: float
    peak_daily_demand: float


class DemandInsights(BaseModel):
    """Qualitative summary of a demand series."""

    model_config = ConfigDict(frozen=True)

    trend: DemandTrend
    volatility: VolatilityLevel
    seasonality: SeasonalityStrength
    upcoming_events: tuple[str, ...] = ()
    recommendation: str
