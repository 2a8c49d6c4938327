"""
Tests for price_forecaster/forecasting/trend.py.

What we test
------------
linear_regression():
  - Perfect line recovers slope, intercept and r2 = 1.
  - predict() extrapolates the fitted line.
  - Empty input gives the all-zero model.
  - Zero x-variance gives slope 0 through the mean of y.
  - Constant y gives r2 = 0 rather than dividing by zero.
  - r2 stays within [0, 1] for noisy data.

fit_index_trend():
  - Uses positions 0..n-1 as x.
"""

from __future__ import annotations

import pytest

from price_forecaster.forecasting.trend import TrendModel, fit_index_trend, linear_regression


# ── linear_regression ─────────────────────────────────────────────────────────

def test_perfect_line_predicts_next_point():
    model = linear_regression([(0, 0), (1, 10), (2, 20), (3, 30)])
    assert model.slope == pytest.approx(10.0)
    assert model.intercept == pytest.approx(0.0)
    assert model.r2 == pytest.approx(1.0)
    assert model.predict(4) == pytest.approx(40.0)


def test_order_of_points_does_not_matter():
    a = linear_regression([(0, 1), (1, 3), (2, 5)])
    b = linear_regression([(2, 5), (0, 1), (1, 3)])
    assert a.slope == pytest.approx(b.slope)
    assert a.intercept == pytest.approx(b.intercept)


def test_empty_input_returns_zero_model():
    model = linear_regression([])
    assert model == TrendModel(slope=0.0, intercept=0.0, r2=0.0)
    assert model.predict(100) == 0.0


def test_single_x_value_gives_flat_line_through_mean():
    model = linear_regression([(5, 10), (5, 20), (5, 30)])
    assert model.slope == 0.0
    assert model.intercept == pytest.approx(20.0)


def test_constant_y_has_zero_r2():
    model = linear_regression([(0, 7), (1, 7), (2, 7)])
    assert model.slope == pytest.approx(0.0)
    assert model.r2 == 0.0
    assert model.predict(10) == pytest.approx(7.0)


def test_noisy_data_r2_in_unit_interval():
    model = linear_regression([(0, 5), (1, 1), (2, 9), (3, 2), (4, 8)])
    assert 0.0 <= model.r2 <= 1.0
    assert model.r2 < 1.0


# ── fit_index_trend ───────────────────────────────────────────────────────────

def test_index_trend_on_synthetic_series():
    """price = 100 + 10 * index is recovered exactly."""
    model = fit_index_trend([100 + 10 * i for i in range(20)])
    assert model.slope == pytest.approx(10.0)
    assert model.intercept == pytest.approx(100.0)
    assert model.r2 == pytest.approx(1.0)


def test_index_trend_is_frozen():
    model = fit_index_trend([1, 2, 3])
    with pytest.raises(AttributeError):
        model.slope = 5.0  # type: ignore[misc]
