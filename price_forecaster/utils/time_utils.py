"""
Date helpers shared by the forecasting and calendar modules.

All engine functions work on ``datetime.date`` values (one observation per
day).  Functions that need "today" accept an ``as_of`` argument and resolve
``None`` through :func:`resolve_as_of`, so a caller that passes a date gets
reproducible output.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def resolve_as_of(as_of: Optional[date]) -> date:
    """Return ``as_of`` or today's local date when ``None``."""
    return as_of if as_of is not None else date.today()


def parse_date(value: str | date | datetime) -> date:
    """Coerce an ISO date string, ``date`` or ``datetime`` to a ``date``.

    Accepts ``YYYY-MM-DD`` and full ISO-8601 timestamps (the time part is
    dropped).

    Raises:
        ValueError: If a string cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Cannot parse date from {value!r}.")
    text = value.strip()
    if len(text) > 10:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)

