"""
Moving-average smoothers.

``exponential_moving_average`` is seeded at the first value and scanned
left to right::

    ema = alpha · price + (1 - alpha) · ema

so ``alpha = 1`` returns the last value and ``alpha = 0`` returns the first.
"""

from __future__ import annotations

from typing import Sequence


def simple_moving_average(prices: Sequence[float], window: int) -> float:
    """Mean of the last ``window`` prices.

    ``window`` is clamped to ``[1, len(prices)]``.  Returns 0.0 for an empty
    series.
    """
    if not prices:
        return 0.0
    window = max(1, min(window, len(prices)))
    tail = prices[-window:]
    return sum(tail) / len(tail)


def exponential_moving_average(prices: Sequence[float], alpha: float) -> float:
    """Terminal EMA level of ``prices``; 0.0 for an empty series."""
    if not prices:
        return 0.0
    ema = float(prices[0])
    for price in prices[1:]:
        ema = alpha * price + (1 - alpha) * ema
    return ema


def exponential_smoothing(
    prices: Sequence[float],
    alpha: float,
    periods: int,
) -> list[float]:
    """Flat N-periods-ahead forecast holding the terminal EMA level constant."""
    if not prices or periods <= 0:
        return []
    level = exponential_moving_average(prices, alpha)
    return [level] * periods
