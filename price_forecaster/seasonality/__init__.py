"""
Festival calendar and seasonal price analysis.

Modules
-------
calendar : festivals_for_year() + upcoming_festival_impact() +
           festival_adjusted_price() — the year-parametrized festival catalog.
patterns : detect_seasonal_pattern() + get_seasonal_factor() — monthly price
           multipliers derived from history.
"""
