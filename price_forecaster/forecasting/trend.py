"""
Ordinary least squares trend estimator.

    slope     = Σ(x - x̄)(y - ȳ) / Σ(x - x̄)²
    intercept = ȳ - slope · x̄
    r2        = 1 - SS_res / SS_tot, clamped to [0, 1]

Degenerate input never divides by zero:
  - no points            → slope = intercept = r2 = 0, predict(x) = 0
  - zero x-variance      → slope = 0 (flat line through ȳ)
  - zero y-variance      → r2 = 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class TrendModel:
    """Fitted straight line ``y = slope · x + intercept``.

    Attributes:
        slope:     Change in y per unit of x.
        intercept: Value of y at x = 0.
        r2:        Coefficient of determination in [0, 1].
    """

    slope: float = 0.0
    intercept: float = 0.0
    r2: float = 0.0

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def linear_regression(points: Sequence[tuple[float, float]]) -> TrendModel:
    """Fit an OLS line through ``(x, y)`` pairs.

    Args:
        points: Observations as ``(x, y)`` tuples, in any order.

    Returns:
        TrendModel; the all-zero model when ``points`` is empty.
    """
    n = len(points)
    if n == 0:
        return TrendModel()

    x_mean = sum(x for x, _ in points) / n
    y_mean = sum(y for _, y in points) / n

    numerator = 0.0
    denominator = 0.0
    for x, y in points:
        numerator += (x - x_mean) * (y - y_mean)
        denominator += (x - x_mean) ** 2

    slope = numerator / denominator if denominator != 0 else 0.0
    intercept = y_mean - slope * x_mean

    ss_total = 0.0
    ss_residual = 0.0
    for x, y in points:
        predicted = slope * x + intercept
        ss_total += (y - y_mean) ** 2
        ss_residual += (y - predicted) ** 2

    r2 = 1.0 - ss_residual / ss_total if ss_total != 0 else 0.0

    return TrendModel(slope=slope, intercept=intercept, r2=max(0.0, min(1.0, r2)))


def fit_index_trend(values: Sequence[float]) -> TrendModel:
    """Fit a trend over ``values`` using their position (0, 1, 2, …) as x."""
    return linear_regression([(float(i), float(v)) for i, v in enumerate(values)])
