"""
Forecast accuracy metrics.

MAE (Mean Absolute Error)
  "On average we're off by X rupees."  Equally weights all errors.

RMSE (Root Mean Squared Error)
  Penalizes large misses more than MAE; RMSE > MAE implies occasional
  large errors.

MAPE (Mean Absolute Percentage Error, in percent)
  Normalizes by the actual price so products at different price points are
  comparable.  Zero actuals are excluded from the average; when nothing is
  left MAPE is reported as 100 (worst case), as it is for empty or
  mismatched inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class AccuracyMetrics:
    """Aggregated error metrics, each rounded to 2 decimals.

    Attributes:
        mape: Mean absolute percentage error in percent (5.0 = 5%).
        rmse: Root mean squared error.
        mae:  Mean absolute error.
    """

    mape: float
    rmse: float
    mae: float


def calculate_accuracy(
    actual: Sequence[float],
    predicted: Sequence[float],
) -> AccuracyMetrics:
    """Compare realised prices with forecasts position by position.

    Args:
        actual:    Realised values.
        predicted: Forecast values, same length as ``actual``.

    Returns:
        AccuracyMetrics; ``mape=100, rmse=0, mae=0`` when the inputs are empty
        or their lengths differ.
    """
    if not actual or len(actual) != len(predicted):
        return AccuracyMetrics(mape=100.0, rmse=0.0, mae=0.0)

    errors = [a - p for a, p in zip(actual, predicted)]
    n = len(errors)

    mae = sum(abs(e) for e in errors) / n
    rmse = math.sqrt(sum(e * e for e in errors) / n)

    pct_terms = [abs(e / a) * 100.0 for e, a in zip(errors, actual) if a != 0]
    mape = sum(pct_terms) / len(pct_terms) if pct_terms else 100.0

    return AccuracyMetrics(
        mape=round(mape, 2),
        rmse=round(rmse, 2),
        mae=round(mae, 2),
    )
