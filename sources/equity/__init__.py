"""
Equity market data (Alpha Vantage).

Latest quote lookup for the stock search endpoint.
"""
