"""
Tests for price_forecaster/seasonality/calendar.py.

What we test
------------
festivals_for_year():
  - 15 festivals in fixed catalog order, bound to the requested year.
  - Fresh values on every call.

festivals_in_range():
  - Inclusive bounds, crosses year boundaries, inverted range → [].

is_in_festival_window() / applies_to_category():
  - Window edges are inclusive.
  - "electronics" festivals apply to every category.

upcoming_festival_impact():
  - Highest discount wins, not the soonest.
  - Festival on the reference date itself is excluded.
  - Lookahead bound is inclusive.
  - Ties resolved by catalog order.
  - Confidence floor of 0.6 and best-buy window.
  - Nothing within the lookahead → None.

active_festival() / festival_adjusted_price():
  - First matching festival in catalog order.
  - Lookups bound to the date's own year.
"""

from __future__ import annotations

from datetime import date

import pytest

from price_forecaster.seasonality.calendar import (
    active_festival,
    applies_to_category,
    festival_adjusted_price,
    festivals_for_year,
    festivals_in_range,
    is_in_festival_window,
    upcoming_festival_impact,
)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _festival(slug: str, year: int = 2026):
    return next(f for f in festivals_for_year(year) if f.slug == slug)


# ── festivals_for_year ────────────────────────────────────────────────────────

def test_catalog_has_fifteen_festivals_in_order():
    fests = festivals_for_year(2026)
    assert len(fests) == 15
    assert fests[0].slug == "makar-sankranti"
    assert fests[-1].slug == "new-year"
    dates = [f.festival_date for f in fests]
    assert dates == sorted(dates)


def test_catalog_bound_to_year():
    assert all(f.festival_date.year == 2031 for f in festivals_for_year(2031))
    assert _festival("diwali", 2027).festival_date == date(2027, 11, 1)


def test_catalog_is_rebuilt_each_call():
    assert festivals_for_year(2026) == festivals_for_year(2026)
    assert festivals_for_year(2026) is not festivals_for_year(2026)


# ── festivals_in_range ────────────────────────────────────────────────────────

def test_range_crosses_year_boundary():
    names = [f.name for f in festivals_in_range(date(2026, 12, 20), date(2027, 1, 20))]
    assert names == ["Christmas", "New Year", "Makar Sankranti"]


def test_range_bounds_inclusive():
    fests = festivals_in_range(date(2026, 11, 1), date(2026, 11, 1))
    assert [f.slug for f in fests] == ["diwali"]


def test_inverted_range_is_empty():
    assert festivals_in_range(date(2026, 12, 31), date(2026, 1, 1)) == []


# ── Windows and category matching ─────────────────────────────────────────────

def test_diwali_window_edges():
    diwali = _festival("diwali")    # 20 days before, 7 after
    assert is_in_festival_window(date(2026, 10, 12), diwali)
    assert is_in_festival_window(date(2026, 11, 8), diwali)
    assert not is_in_festival_window(date(2026, 10, 11), diwali)
    assert not is_in_festival_window(date(2026, 11, 9), diwali)


def test_listed_category_applies():
    assert applies_to_category(_festival("holi"), "cosmetics")


def test_unlisted_category_without_electronics_does_not_apply():
    assert not applies_to_category(_festival("holi"), "electronics")
    assert not applies_to_category(_festival("holi"), "toys")


def test_electronics_festival_applies_to_any_category():
    assert applies_to_category(_festival("diwali"), "toys")


# ── upcoming_festival_impact ──────────────────────────────────────────────────

def test_highest_discount_wins_over_soonest():
    # Dussehra (30%), Diwali (40%), Black Friday (50%), Cyber Monday (45%) all in range
    impact = upcoming_festival_impact("electronics", date(2026, 10, 1))
    assert impact is not None
    assert impact.festival == "Black Friday"
    assert impact.expected_discount == 50
    assert impact.days_until == 54
    assert impact.confidence == pytest.approx(0.6)
    assert impact.best_buy_window.start_date == date(2026, 11, 21)
    assert impact.best_buy_window.end_date == date(2026, 11, 26)


def test_confidence_rises_as_festival_nears(pre_sale_as_of):
    impact = upcoming_festival_impact("electronics", pre_sale_as_of)
    assert impact is not None
    assert impact.festival == "Black Friday"
    assert impact.days_until == 14
    assert impact.confidence == pytest.approx(0.77)   # 1 - 14/60


def test_festival_on_reference_date_excluded():
    impact = upcoming_festival_impact("fashion", date(2026, 11, 24))
    assert impact is not None
    assert impact.festival == "Cyber Monday"


def test_lookahead_bound_inclusive():
    impact = upcoming_festival_impact("electronics", date(2026, 10, 2), lookahead_days=30)
    assert impact is not None
    assert impact.festival == "Diwali"
    assert impact.days_until == 30


def test_discount_tie_goes_to_catalog_order():
    # New Year (Dec 31) and Republic Day (Jan 26) both offer 30%
    impact = upcoming_festival_impact("fashion", date(2026, 12, 26), lookahead_days=40)
    assert impact is not None
    assert impact.festival == "New Year"


def test_no_festival_within_lookahead(quiet_as_of):
    assert upcoming_festival_impact("electronics", quiet_as_of) is None
    assert upcoming_festival_impact("clothing", quiet_as_of) is None


def test_impact_is_idempotent(pre_sale_as_of):
    assert upcoming_festival_impact("gifts", pre_sale_as_of) == upcoming_festival_impact(
        "gifts", pre_sale_as_of
    )


# ── active_festival / festival_adjusted_price ─────────────────────────────────

def test_active_festival_first_in_catalog_order():
    fest = active_festival(date(2026, 11, 25), "electronics")
    assert fest is not None
    assert fest.slug == "black-friday"


def test_active_festival_none_outside_windows():
    assert active_festival(date(2026, 6, 1), "electronics") is None


def test_new_year_window_does_not_carry_into_january():
    assert active_festival(date(2027, 1, 2), "electronics") is None


def test_adjusted_price_during_sale():
    adj = festival_adjusted_price(1000.0, date(2026, 11, 25), "electronics")
    assert adj.adjusted_price == pytest.approx(500.0)
    assert adj.discount == 50
    assert adj.festival == "Black Friday"


def test_adjusted_price_outside_sale():
    adj = festival_adjusted_price(1000.0, date(2026, 6, 1), "electronics")
    assert adj.adjusted_price == 1000.0
    assert adj.discount == 0.0
    assert adj.festival is None
