"""
Indian retail festival calendar.

The catalog is a fixed, ordered tuple of templates anchored on a month/day.
``festivals_for_year(year)`` instantiates it for one year; nothing is cached
or shared, so every call builds fresh ``Festival`` values.

Lunar-calendar festivals (Holi, Eid, Diwali, ...) use fixed Gregorian
approximations and drift from the true date year to year.  This is a known
approximation of the catalog.

Order matters
-------------
Lookups that take "the first festival whose window contains a date" scan the
catalog in template order, so ties between overlapping windows (e.g.
Black Friday and Cyber Monday) are resolved by position in ``FESTIVAL_TEMPLATES``.

Category matching
-----------------
A festival is relevant to a category when the category is in its list or
when the festival lists ``CATCH_ALL_CATEGORY`` ("electronics"), which is
treated as relevant to every product.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from price_forecaster.models.festival import (
    BuyWindow,
    Festival,
    FestivalAdjustment,
    FestivalImpact,
)
from price_forecaster.utils.time_utils import resolve_as_of

logger = logging.getLogger(__name__)

CATCH_ALL_CATEGORY = "electronics"
DEFAULT_LOOKAHEAD_DAYS = 60
PEAK_DEAL_DAYS_AFTER = 2        # best-buy window closes 2 days after the festival
MIN_IMPACT_CONFIDENCE = 0.6


@dataclass(frozen=True)
class _FestivalTemplate:
    slug: str
    name: str
    month: int
    day: int
    categories: tuple[str, ...]
    typical_discount: float
    demand_multiplier: float
    pre_period_days: int
    post_period_days: int

    def for_year(self, year: int) -> Festival:
        return Festival(
            slug=self.slug,
            name=self.name,
            festival_date=date(year, self.month, self.day),
            categories=self.categories,
            typical_discount=self.typical_discount,
            demand_multiplier=self.demand_multiplier,
            pre_period_days=self.pre_period_days,
            post_period_days=self.post_period_days,
        )


# ── Catalog ───────────────────────────────────────────────────────────────────
# Ordered by calendar position.  Dates marked ~ are lunar approximations.

FESTIVAL_TEMPLATES: tuple[_FestivalTemplate, ...] = (
    _FestivalTemplate("makar-sankranti", "Makar Sankranti", 1, 14,
                      ("electronics", "home", "clothing"), 15, 1.3, 7, 3),
    _FestivalTemplate("republic-day", "Republic Day", 1, 26,
                      ("electronics", "appliances", "fashion"), 30, 1.8, 10, 5),
    _FestivalTemplate("holi", "Holi", 3, 8,                         # ~
                      ("clothing", "cosmetics", "home"), 20, 1.4, 7, 2),
    _FestivalTemplate("ugadi", "Ugadi/Gudi Padwa", 4, 9,             # ~
                      ("gold", "electronics", "clothing"), 15, 1.5, 5, 3),
    _FestivalTemplate("eid", "Eid-ul-Fitr", 4, 10,                   # ~
                      ("clothing", "food", "gifts"), 25, 1.6, 7, 3),
    _FestivalTemplate("independence-day", "Independence Day", 8, 15,
                      ("electronics", "fashion", "home"), 35, 2.0, 10, 5),
    _FestivalTemplate("raksha-bandhan", "Raksha Bandhan", 8, 19,     # ~
                      ("gifts", "jewelry", "clothing"), 20, 1.4, 5, 2),
    _FestivalTemplate("ganesh-chaturthi", "Ganesh Chaturthi", 9, 7,  # ~
                      ("home", "electronics", "gifts"), 18, 1.3, 5, 3),
    _FestivalTemplate("navratri", "Navratri", 10, 3,                 # ~
                      ("clothing", "jewelry", "fashion"), 25, 1.7, 10, 5),
    _FestivalTemplate("dussehra", "Dussehra", 10, 12,                # ~
                      ("electronics", "vehicles", "gold"), 30, 2.0, 15, 5),
    _FestivalTemplate("diwali", "Diwali", 11, 1,                     # ~
                      ("electronics", "gold", "clothing", "home", "appliances"), 40, 2.5, 20, 7),
    _FestivalTemplate("black-friday", "Black Friday", 11, 24,
                      ("electronics", "fashion", "appliances"), 50, 3.0, 3, 3),
    _FestivalTemplate("cyber-monday", "Cyber Monday", 11, 27,
                      ("electronics", "gadgets", "software"), 45, 2.8, 1, 2),
    _FestivalTemplate("christmas", "Christmas", 12, 25,
                      ("electronics", "gifts", "toys", "fashion"), 35, 2.2, 15, 7),
    _FestivalTemplate("new-year", "New Year", 12, 31,
                      ("electronics", "fashion", "travel"), 30, 1.9, 10, 5),
)


# ── Lookups ───────────────────────────────────────────────────────────────────


def festivals_for_year(year: int) -> list[Festival]:
    """Instantiate the full catalog for ``year``, in catalog order."""
    return [template.for_year(year) for template in FESTIVAL_TEMPLATES]


def festivals_in_range(start: date, end: date) -> list[Festival]:
    """Festivals whose day falls in ``[start, end]`` (inclusive).

    Catalogs for every year the range touches are instantiated, year by year
    in catalog order.  An inverted range yields an empty list.
    """
    if end < start:
        return []
    result: list[Festival] = []
    for year in range(start.year, end.year + 1):
        result.extend(
            f for f in festivals_for_year(year) if start <= f.festival_date <= end
        )
    return result


def is_in_festival_window(check_date: date, festival: Festival) -> bool:
    """Return ``True`` if ``check_date`` is within the festival's sale window."""
    return festival.is_active_on(check_date)


def applies_to_category(festival: Festival, category: str) -> bool:
    """Return ``True`` if ``festival`` moves prices for ``category``."""
    return category in festival.categories or CATCH_ALL_CATEGORY in festival.categories


def upcoming_festival_impact(
    category: str,
    as_of: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> Optional[FestivalImpact]:
    """Pick the most valuable festival for ``category`` in the lookahead window.

    Among festivals strictly after ``as_of`` and at most ``lookahead_days``
    away that apply to ``category``, the one with the **highest** typical
    discount wins (not the soonest); ties go to the earlier candidate.

    Args:
        category:       Product category, e.g. ``"fashion"``.
        as_of:          Reference date; today when ``None``.
        lookahead_days: How far ahead to scan.

    Returns:
        FestivalImpact, or ``None`` when no relevant festival is upcoming.
    """
    today = resolve_as_of(as_of)
    horizon_end = today + timedelta(days=lookahead_days)

    candidates = [
        f for f in festivals_in_range(today, horizon_end)
        if f.festival_date > today and applies_to_category(f, category)
    ]
    if not candidates:
        return None

    best = max(candidates, key=lambda f: f.typical_discount)
    days_until = (best.festival_date - today).days
    confidence = max(MIN_IMPACT_CONFIDENCE, 1.0 - days_until / lookahead_days)

    logger.debug(
        "upcoming_festival_impact: category=%s picked %s (%d days, %.0f%% off) of %d",
        category, best.slug, days_until, best.typical_discount, len(candidates),
    )

    return FestivalImpact(
        festival=best.name,
        expected_discount=best.typical_discount,
        confidence=round(min(confidence, 1.0), 2),
        days_until=days_until,
        best_buy_window=BuyWindow(
            start_date=best.window_start,
            end_date=best.festival_date + timedelta(days=PEAK_DEAL_DAYS_AFTER),
        ),
    )


def active_festival(check_date: date, category: str) -> Optional[Festival]:
    """First catalog-order festival of ``check_date``'s year active for ``category``."""
    for festival in festivals_for_year(check_date.year):
        if festival.is_active_on(check_date) and applies_to_category(festival, category):
            return festival
    return None


def festival_adjusted_price(
    base_price: float,
    check_date: date,
    category: str,
) -> FestivalAdjustment:
    """Apply the active festival's typical discount to ``base_price``.

    Returns the base price unchanged (``discount=0``, ``festival=None``) when
    no relevant festival window contains ``check_date``.
    """
    festival = active_festival(check_date, category)
    if festival is None:
        return FestivalAdjustment(adjusted_price=base_price, discount=0.0)

    adjusted = base_price * (1 - festival.typical_discount / 100)
    return FestivalAdjustment(
        adjusted_price=round(adjusted, 2),
        discount=festival.typical_discount,
        festival=festival.name,
    )
