"""
Signal taxonomy for recommendations, demand insights and deal ratings.

Each enum is a closed vocabulary that appears in engine output:

  - ``RecommendationAction`` — the *what to do*: buy now, wait, or set an alert.
  - ``PricePosition``        — where today's price sits in its historical range.
  - ``TrendDirection``       — recent price movement versus the start of history.
  - ``VolatilityLevel``      — coefficient-of-variation bucket.
  - ``DemandTrend``          — demand growth direction from the OLS slope.
  - ``SeasonalityStrength``  — how strongly a demand series follows its trend.
  - ``DealRating``           — 0–100 deal score bucket.

This module has NO imports from any other ``price_forecaster`` package.
"""

from enum import StrEnum


class RecommendationAction(StrEnum):
    """Terminal action of a buy-or-wait recommendation."""

    BUY_NOW = "buy_now"
    """Price is favourable now; waiting is unlikely to pay off."""

    WAIT = "wait"
    """A festival sale or a falling price makes waiting worthwhile."""

    SET_ALERT = "set_alert"
    """No strong signal either way; watch the price."""


class PricePosition(StrEnum):
    """Bucket of (current − min) / (max − min)."""

    LOW = "low"          # < 0.3
    AVERAGE = "average"
    HIGH = "high"        # > 0.7


class TrendDirection(StrEnum):
    """Direction of recent mean price versus earliest mean price."""

    RISING = "rising"     # > +3%
    FALLING = "falling"   # < −3%
    STABLE = "stable"


class VolatilityLevel(StrEnum):
    """Bucket of a coefficient of variation."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DemandTrend(StrEnum):
    """Direction of daily demand growth."""

    GROWING = "growing"
    DECLINING = "declining"
    STABLE = "stable"


class SeasonalityStrength(StrEnum):
    """Strength bucket derived from a trend fit's r²."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class DealRating(StrEnum):
    """Bucket of a 0–100 deal score."""

    EXCELLENT = "excellent"   # >= 80
    GOOD = "good"             # >= 60
    FAIR = "fair"             # >= 40
    POOR = "poor"
