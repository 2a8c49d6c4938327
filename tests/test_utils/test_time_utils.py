"""Tests for price_forecaster.utils.time_utils."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from price_forecaster.utils.time_utils import parse_date, resolve_as_of


def test_resolve_as_of_passthrough():
    assert resolve_as_of(date(2026, 5, 1)) == date(2026, 5, 1)


def test_resolve_as_of_defaults_to_today():
    assert resolve_as_of(None) == date.today()


@pytest.mark.parametrize(
    "value",
    ["2026-05-01", " 2026-05-01 ", "2026-05-01T23:59:59Z", "2026-05-01T10:00:00+05:30",
     date(2026, 5, 1), datetime(2026, 5, 1, 12, 0)],
)
def test_parse_date_accepts(value):
    assert parse_date(value) == date(2026, 5, 1)


@pytest.mark.parametrize("value", ["2026-02-30", "yesterday", "", 20260501, None])
def test_parse_date_rejects(value):
    with pytest.raises(ValueError):
        parse_date(value)
