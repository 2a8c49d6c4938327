"""
Parser for price and demand history files.

Two formats, detected by extension:

  .csv  — header row required.
          price history:  ``date,price``
          demand history: ``date,demand`` plus an optional ``category`` column
  .json — an array of objects with the same keys.

Dates are ``YYYY-MM-DD`` (a full ISO-8601 timestamp is accepted; the time is
dropped).  Every row is validated before anything is returned; if **any**
row fails, a single ``ValueError`` lists the first 10 failures.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from price_forecaster.models.demand import DemandPoint
from price_forecaster.models.price import PricePoint
from price_forecaster.utils.time_utils import parse_date

logger = logging.getLogger(__name__)

PRICE_COLUMNS = frozenset({"date", "price"})
DEMAND_COLUMNS = frozenset({"date", "demand"})

_MAX_ERRORS_SHOWN = 10

T = TypeVar("T")


def parse_price_history(path: Path) -> list[PricePoint]:
    """Parse a price history file into validated ``PricePoint`` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On unsupported format, missing columns, or invalid rows.
    """
    return _parse_file(path, PRICE_COLUMNS, _row_to_price_point)


def parse_demand_history(path: Path) -> list[DemandPoint]:
    """Parse a demand history file into validated ``DemandPoint`` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On unsupported format, missing columns, or invalid rows.
    """
    return _parse_file(path, DEMAND_COLUMNS, _row_to_demand_point)


# ── Private helpers ────────────────────────────────────────────────────────────

def _parse_file(
    path: Path,
    required: frozenset[str],
    convert: Callable[[dict[str, Any]], T],
) -> list[T]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"History file not found: {path}")

    fmt = path.suffix.lower()
    if fmt == ".csv":
        rows, first_line = _read_csv_rows(path, required), 2
    elif fmt == ".json":
        rows, first_line = _read_json_rows(path), 1
    else:
        raise ValueError(f"Unsupported file format '{fmt}'. Use .csv or .json.")

    if not rows:
        logger.warning("History file has no rows: %s", path)
        return []

    parsed: list[T] = []
    errors: list[tuple[int, str]] = []
    for i, row in enumerate(rows):
        try:
            missing = required - set(row)
            if missing:
                raise ValueError(f"missing fields {sorted(missing)}")
            parsed.append(convert(row))
        except (ValueError, TypeError, ValidationError) as exc:
            errors.append((i + first_line, str(exc)))

    if errors:
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:_MAX_ERRORS_SHOWN])
        extra = len(errors) - _MAX_ERRORS_SHOWN
        suffix = f"\n  … and {extra} more" if extra > 0 else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    logger.info("Parsed %d rows from %s", len(parsed), path.name)
    return parsed


def _read_csv_rows(path: Path, required: frozenset[str]) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual = {name.strip() for name in reader.fieldnames}
        missing = required - actual
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual)}"
            )
        return [
            {k.strip(): v for k, v in row.items() if k is not None}
            for row in reader
        ]


def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"JSON parse error in {path.name}: {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(f"JSON history file must contain an array of objects: {path}")
    return data


def _row_to_price_point(row: dict[str, Any]) -> PricePoint:
    return PricePoint(obs_date=parse_date(row["date"]), price=float(row["price"]))


def _row_to_demand_point(row: dict[str, Any]) -> DemandPoint:
    category = row.get("category")
    if isinstance(category, str):
        category = category.strip() or None
    return DemandPoint(
        obs_date=parse_date(row["date"]),
        demand=float(row["demand"]),
        category=category,
    )
