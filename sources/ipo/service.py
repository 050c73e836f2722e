"""
IPO aggregation service.

Combines the live Chittorgarh scrape with the static dataset fallback and
caches the merged collection for an hour.

Status labels are assigned once, when the data is fetched. A cached IPO
labelled 'ongoing' stays 'ongoing' until the next refresh even if its close
date passes in the meantime.
"""

import logging
from typing import List, Optional

from models import IPOCollection, IPORecord, IPOStatus
from .cache import IPOCache
from .providers.base import IPODataProvider

logger = logging.getLogger(__name__)

ALL = "all"


class IPOService:
    """
    Serves IPO collections from a primary source with a fallback.

    Args:
        scraper: Primary (live) provider
        fallback: Provider used whenever the primary returns nothing
        cache: Cache instance; a fresh one with the default TTL if omitted
    """

    def __init__(
        self,
        scraper: IPODataProvider,
        fallback: IPODataProvider,
        cache: Optional[IPOCache] = None,
    ):
        self.scraper = scraper
        self.fallback = fallback
        self.cache = cache if cache is not None else IPOCache()

    def get_all_ipos(self) -> IPOCollection:
        """
        Cached collection within the TTL, otherwise a full fetch cycle.

        Returns a deep copy, so callers may modify the result without
        touching the cached entry.
        """
        cached = self.cache.get()
        if cached is not None:
            logger.info("Serving cached IPO data")
            return cached.model_copy(deep=True)

        logger.info("Fetching fresh IPO data...")
        ipos = self.scraper.fetch()

        if ipos.is_empty():
            logger.warning(f"{self.scraper.name} returned no data, using {self.fallback.name} fallback")
            ipos = self.fallback.fetch()

        self.cache.put(ipos)
        return ipos.model_copy(deep=True)

    def get_ipos_by_status(self, status: str) -> List[IPORecord]:
        """
        IPOs for one status bucket.

        'all' returns ongoing, upcoming and listed concatenated in that order;
        an unknown status returns an empty list.
        """
        ipos = self.get_all_ipos()

        if status == ALL:
            return ipos.all_records()

        try:
            return list(ipos.bucket(IPOStatus(status)))
        except ValueError:
            return []

    def clear_cache(self) -> None:
        """Drop the cached collection; the next read refetches."""
        self.cache.clear()
        logger.info("IPO cache cleared")
