"""
Demand forecasting and inventory planning.

Modules
-------
forecaster : forecast_demand() — baseline × trend × seasonal × festival boost.
insights   : identify_market_opportunities(), calculate_optimal_inventory(),
             generate_demand_insights() — planning outputs built on forecasts.
"""
