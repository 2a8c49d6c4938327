"""
History file parsers used by the CLI.

Modules
-------
history_file : parse_price_history() + parse_demand_history() — CSV or JSON
               series into validated PricePoint / DemandPoint lists.
"""
