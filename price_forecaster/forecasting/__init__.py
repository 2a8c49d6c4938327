"""
Price forecasting: trend and smoothing estimators, the blended N-day price
forecaster, and forecast accuracy metrics.

Modules
-------
trend      : TrendModel + linear_regression() — OLS over (x, y) pairs.
smoothing  : simple / exponential moving averages and flat EMA projection.
price      : predict_prices() — trend + EMA blend with a volatility band.
accuracy   : AccuracyMetrics + calculate_accuracy() — MAPE / RMSE / MAE.

All functions are pure: no I/O, no state carried between calls.
"""
