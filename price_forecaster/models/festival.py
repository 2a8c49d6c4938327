"""
Festival calendar models.

``Festival`` is a catalog template instantiated for one year: its
``festival_date`` is year-bound, and its effective sale window is
``[festival_date - pre_period_days, festival_date + post_period_days]``.

``FestivalImpact`` answers "which upcoming festival matters for this
category, and when should I buy?".  ``SeasonalPattern`` is one calendar
month of a seasonality analysis.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Festival(BaseModel):
    """A named retail festival bound to a specific year.

    Attributes:
        slug: Stable identifier, e.g. ``"diwali"``.
        name: Display name, e.g. ``"Diwali"``.
        festival_date: Festival day for the instantiated year.
        categories: Product categories whose prices/demand the festival moves.
        typical_discount: Typical sale discount in percent.
        demand_multiplier: Peak-day demand factor (1.0 = no change).
        pre_period_days: Days before the festival when deals start.
        post_period_days: Days after the festival when deals end.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    festival_date: date
    categories: tuple[str, ...]
    typical_discount: float
    demand_multiplier: float
    pre_period_days: int
    post_period_days: int

    @model_validator(mode="after")
    def validate_window(self) -> "Festival":
        if self.pre_period_days < 0 or self.post_period_days < 0:
            raise ValueError("pre/post period days must be non-negative.")
        if not 0.0 <= self.typical_discount <= 100.0:
            raise ValueError(
                f"typical_discount must be in [0, 100], got {self.typical_discount}."
            )
        return self

    @property
    def window_start(self) -> date:
        return self.festival_date - timedelta(days=self.pre_period_days)

    @property
    def window_end(self) -> date:
        return self.festival_date + timedelta(days=self.post_period_days)

    def is_active_on(self, check_date: date) -> bool:
        """Return ``True`` if ``check_date`` falls inside the sale window (inclusive)."""
        return self.window_start <= check_date <= self.window_end


class BuyWindow(BaseModel):
    """Inclusive date range in which buying is expected to be cheapest."""

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date


class FestivalImpact(BaseModel):
    """Expected effect of the most relevant upcoming festival for a category.

    Attributes:
        festival: Festival display name.
        expected_discount: Typical discount in percent.
        confidence: ``max(0.6, 1 - days_until / lookahead)``.
        days_until: Whole days from the reference date to the festival day.
        best_buy_window: Pre-period start through two days after the festival.
    """

    model_config = ConfigDict(frozen=True)

    festival: str
    expected_discount: float
    confidence: float
    days_until: int
    best_buy_window: BuyWindow

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {v}.")
        return v


class FestivalAdjustment(BaseModel):
    """Result of applying an active festival discount to a base price."""

    model_config = ConfigDict(frozen=True)

    adjusted_price: float
    discount: float
    festival: Optional[str] = None


class SeasonalPattern(BaseModel):
    """Seasonal price behaviour of one calendar month.

    Attributes:
        month: Calendar month, 1 (January) to 12 (December).
        average_discount: ``(overall_mean - month_mean) / overall_mean * 100``.
        price_multiplier: ``month_mean / overall_mean``.
        festivals: Names of catalog festivals falling in this month.
        confidence: ``min(count / 10, 1)``; 0 for months with < 2 points.
    """

    model_config = ConfigDict(frozen=True)

    month: int
    average_discount: float = 0.0
    price_multiplier: float = 1.0
    festivals: tuple[str, ...] = ()
    confidence: float = 0.0

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: int) -> int:
        if not 1 <= v <= 12:
            raise ValueError(f"month must be in [1, 12], got {v}.")
        return v
