"""
Base provider interface for IPO data sources.

All IPO sources must implement this interface. Sources absorb their own
failures: fetch() returns an empty IPOCollection instead of raising, and
the aggregator decides what to do with an empty result.
"""

import datetime
from abc import ABC, abstractmethod
from typing import Optional

from models import IPOCollection


class IPODataProvider(ABC):
    """Abstract base class for IPO data providers."""

    def __init__(self):
        self.name = self.__class__.__name__

    @abstractmethod
    def fetch(self, today: Optional[datetime.date] = None) -> IPOCollection:
        """
        Fetch IPOs bucketed by status.

        Args:
            today: Reference date for status classification, where the
                   source classifies at all

        Returns:
            IPOCollection, with all three buckets empty on any failure
        """
        pass
