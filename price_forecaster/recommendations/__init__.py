"""
Buy-or-wait recommendation engine and deal scoring.

Modules
-------
engine      : generate_buy_recommendation() — ordered first-match rule chain
              over price position, trend, volatility, festival and forecast
              signals; recommendation_text() for a one-paragraph summary.
deal_scorer : score_deal() — 0–100 rating of one observed price.

Both are pure functions with no I/O.
"""
