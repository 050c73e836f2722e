"""
Alpha Vantage equity data provider.

Official API documentation: https://www.alphavantage.co/documentation/
"""

import os
import requests
from typing import Dict, Optional
import logging

from models import StockQuote
from .base import (
    EquityDataProvider,
    RateLimitError,
    DataNotFoundError,
    ProviderError,
    ProviderTimeoutError,
)


logger = logging.getLogger(__name__)


class AlphaVantageProvider(EquityDataProvider):
    """
    Alpha Vantage equity data provider.

    Free tier: 25 requests/day, 5 calls/minute

    API Key: Get from https://www.alphavantage.co/support/#api-key
    """

    BASE_URL = "https://www.alphavantage.co/query"

    TIMEOUT = 10

    def __init__(self, api_key: Optional[str] = None, timeout: float = TIMEOUT):
        """
        Initialize Alpha Vantage provider.

        Args:
            api_key: Alpha Vantage API key. If not provided, reads from
                    ALPHA_VANTAGE_API_KEY environment variable.
            timeout: Request timeout in seconds
        """
        if not api_key:
            api_key = os.getenv("ALPHA_VANTAGE_API_KEY")

        if not api_key:
            raise ValueError(
                "Alpha Vantage API key required. Set ALPHA_VANTAGE_API_KEY "
                "environment variable or pass api_key parameter."
            )

        super().__init__(api_key)
        self.timeout = timeout
        self.session = requests.Session()

    def _make_request(self, params: Dict) -> Dict:
        """
        Make API request with error handling.

        Args:
            params: Query parameters

        Returns:
            JSON response

        Raises:
            RateLimitError: If rate limit exceeded
            DataNotFoundError: If data not available
            ProviderTimeoutError: If the request timed out
            ProviderError: For other API errors
        """
        params["apikey"] = self.api_key

        try:
            response = self.session.get(self.BASE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            # Check for API error messages
            if "Error Message" in data:
                raise DataNotFoundError(data["Error Message"])

            if "Note" in data and "API call frequency" in data["Note"]:
                raise RateLimitError(data["Note"])

            if "Information" in data:
                # Usually means invalid API key or daily quota exhausted
                raise ProviderError(data["Information"])

            return data

        except requests.exceptions.Timeout as e:
            raise ProviderTimeoutError(f"Request timed out: {e}")

        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 429:
                raise RateLimitError("Rate limit exceeded")
            raise ProviderError(f"HTTP error: {e}")

        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Request failed: {e}")

        except ValueError as e:
            raise ProviderError(f"Invalid JSON response: {e}")

    def get_quote(self, symbol: str) -> StockQuote:
        """
        Get the latest quote from the GLOBAL_QUOTE endpoint.

        Unparseable numeric fields come back as 0.
        """
        symbol = symbol.upper()
        logger.info(f"Fetching quote for {symbol}")

        data = self._make_request({
            "function": "GLOBAL_QUOTE",
            "symbol": symbol,
        })

        quote = data.get("Global Quote")
        if not quote:
            raise DataNotFoundError(f'Stock "{symbol}" not found')

        change_percent = (quote.get("10. change percent") or "").replace("%", "")

        return StockQuote(
            symbol=symbol,
            price=self._parse_float(quote.get("05. price")),
            change=self._parse_float(quote.get("09. change")),
            change_percent=self._parse_float(change_percent),
            open=self._parse_float(quote.get("02. open")),
            high=self._parse_float(quote.get("03. high")),
            low=self._parse_float(quote.get("04. low")),
            volume=self._parse_int(quote.get("06. volume")),
            previous_close=self._parse_float(quote.get("08. previous close")),
        )

    @staticmethod
    def _parse_float(value) -> float:
        """Parse float value, 0.0 if invalid."""
        if value is None or value == "None" or value == "":
            return 0.0
        try:
            return float(value)
        except (ValueError, TypeError):
            return 0.0

    @staticmethod
    def _parse_int(value) -> int:
        """Parse int value, 0 if invalid."""
        if value is None or value == "None" or value == "":
            return 0
        try:
            return int(value)
        except (ValueError, TypeError):
            return 0
