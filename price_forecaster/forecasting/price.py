"""
Blended N-day price forecaster.

For each future day ``d = 1..N``::

    trend_weight    = min(d / N, 0.7)
    ema_weight      = 1 - trend_weight
    predicted_price = trend_weight · trend.predict(last_index + d)
                      + ema_weight · EMA(alpha, full history)

Near-term forecasts lean on the EMA level, far-term forecasts lean on the
OLS trend, and the EMA never drops below 30% weight.  This is a deliberately
simple heuristic, not Holt-Winters or ARIMA.

Confidence and band
-------------------
    confidence = r2 · exp(-d / (0.5 · N))
    volatility = population stdev of day-over-day % returns
    band_width = last_price · volatility · √d · z        (z = 1.96 → 95%)

The band widens with √d because return variance compounds linearly in time.
Prices and the lower bound are floored at zero.
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Sequence

from price_forecaster.forecasting.smoothing import exponential_moving_average
from price_forecaster.forecasting.trend import fit_index_trend
from price_forecaster.models.price import PricePoint, PricePrediction

logger = logging.getLogger(__name__)

_MAX_TREND_WEIGHT = 0.7


def sort_history(history: Sequence[PricePoint]) -> list[PricePoint]:
    """Return ``history`` ordered by ``obs_date`` ascending (stable)."""
    return sorted(history, key=lambda p: p.obs_date)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(max(0.0, variance))


def historical_volatility(prices: Sequence[float]) -> float:
    """Stdev of day-over-day fractional returns.

    Returns following a zero price are skipped (undefined ratio).
    """
    returns = [
        (prices[i] - prices[i - 1]) / prices[i - 1]
        for i in range(1, len(prices))
        if prices[i - 1] != 0
    ]
    return standard_deviation(returns)


def predict_prices(
    history: Sequence[PricePoint],
    days_ahead: int,
    alpha: float = 0.3,
    band_z: float = 1.96,
) -> list[PricePrediction]:
    """Forecast ``days_ahead`` daily prices following the last observation.

    Args:
        history:    Daily observations in any order; sorted internally.
        days_ahead: Forecast horizon N in days.
        alpha:      EMA smoothing factor for the level component.
        band_z:     z-score scaling of the volatility band.

    Returns:
        One ``PricePrediction`` per day, in date order.  Empty when
        ``history`` is empty or ``days_ahead < 1``.
    """
    if not history or days_ahead < 1:
        return []

    ordered = sort_history(history)
    prices = [p.price for p in ordered]
    last_date = ordered[-1].obs_date
    last_index = len(ordered) - 1
    last_price = prices[-1]

    trend = fit_index_trend(prices)
    ema_level = exponential_moving_average(prices, alpha)
    volatility = historical_volatility(prices)

    logger.debug(
        "predict_prices: n=%d slope=%.4f r2=%.4f ema=%.4f volatility=%.4f",
        len(prices), trend.slope, trend.r2, ema_level, volatility,
    )

    predictions: list[PricePrediction] = []
    for day in range(1, days_ahead + 1):
        trend_weight = min(day / days_ahead, _MAX_TREND_WEIGHT)
        ema_weight = 1.0 - trend_weight
        raw_price = trend_weight * trend.predict(last_index + day) + ema_weight * ema_level

        confidence = trend.r2 * math.exp(-day / (days_ahead * 0.5))
        band_width = last_price * volatility * math.sqrt(day) * band_z

        predicted_price = max(0.0, raw_price)
        predictions.append(
            PricePrediction(
                target_date=last_date + timedelta(days=day),
                predicted_price=round(predicted_price, 2),
                confidence=round(_clamp(confidence, 0.0, 1.0), 2),
                lower_bound=round(max(0.0, raw_price - band_width), 2),
                upper_bound=round(max(predicted_price, raw_price + band_width), 2),
            )
        )

    return predictions


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
