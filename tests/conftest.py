"""
Shared pytest fixtures for the price forecaster test suite.

Provides:
  - Price series: ``rising_history`` (14 days, 1000 → 1130 in steps of 10),
    ``flat_history`` and ``empty_history``.
  - Demand series: ``flat_demand`` and ``growing_demand``.
  - Reference dates: ``quiet_as_of`` has no festival within 60 days;
    ``pre_sale_as_of`` is two weeks before Black Friday 2026.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from price_forecaster.models.demand import DemandPoint
from price_forecaster.models.price import PricePoint

SERIES_START = date(2026, 5, 1)


def make_prices(prices: list[float], start: date = SERIES_START) -> list[PricePoint]:
    """Build one ``PricePoint`` per day starting at ``start``."""
    return [
        PricePoint(obs_date=start + timedelta(days=i), price=p)
        for i, p in enumerate(prices)
    ]


def make_demand(
    values: list[float],
    start: date = SERIES_START,
    category: str | None = None,
) -> list[DemandPoint]:
    """Build one ``DemandPoint`` per day starting at ``start``."""
    return [
        DemandPoint(obs_date=start + timedelta(days=i), demand=v, category=category)
        for i, v in enumerate(values)
    ]


# ── Reference dates ───────────────────────────────────────────────────────────

@pytest.fixture
def quiet_as_of() -> date:
    """No catalog festival falls within 60 days after this date."""
    return date(2026, 5, 15)


@pytest.fixture
def pre_sale_as_of() -> date:
    """Black Friday 2026 (50% off) is 14 days away."""
    return date(2026, 11, 10)


# ── Price series ──────────────────────────────────────────────────────────────

@pytest.fixture
def rising_history() -> list[PricePoint]:
    return make_prices([1000.0 + 10 * i for i in range(14)])


@pytest.fixture
def flat_history() -> list[PricePoint]:
    return make_prices([500.0] * 20)


@pytest.fixture
def empty_history() -> list[PricePoint]:
    return []


# ── Demand series ─────────────────────────────────────────────────────────────

@pytest.fixture
def flat_demand() -> list[DemandPoint]:
    """Ten days of constant demand in May (no festival windows nearby)."""
    return make_demand([100.0] * 10)


@pytest.fixture
def growing_demand() -> list[DemandPoint]:
    """Fourteen days rising 100 → 230 in steps of 10."""
    return make_demand([100.0 + 10 * i for i in range(14)])
