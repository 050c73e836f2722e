"""
REST API for the MarketSphere investing datasets.

Exposes IPO listings, brokers, mutual funds, sectors, learning modules
and live stock quotes over HTTP for the web front end and mobile clients.
"""

__version__ = "1.0.0"
