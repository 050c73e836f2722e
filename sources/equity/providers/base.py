"""
Base provider interface for equity data sources.

All equity data providers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models import StockQuote


class EquityDataProvider(ABC):
    """Abstract base class for equity data providers."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize the provider.

        Args:
            api_key: API key for the provider (if required)
        """
        self.api_key = api_key
        self.name = self.__class__.__name__

    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        """
        Get the latest quote for a symbol.

        Args:
            symbol: Stock ticker symbol

        Returns:
            StockQuote with price, change, changePercent, open, high, low,
            volume, previousClose

        Raises:
            DataNotFoundError: If the provider has no quote for the symbol
            ProviderTimeoutError: If the request timed out
            ProviderError: For other request failures
        """
        pass


class RateLimitError(Exception):
    """Raised when API rate limit is exceeded."""
    pass


class DataNotFoundError(Exception):
    """Raised when data is not available for a ticker."""
    pass


class ProviderError(Exception):
    """Base exception for provider-specific errors."""
    pass


class ProviderTimeoutError(ProviderError):
    """Raised when the provider did not answer within the timeout."""
    pass
