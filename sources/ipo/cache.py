"""
Time-to-live cache for the aggregated IPO collection.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from models import IPOCollection

DEFAULT_TTL_SECONDS = 3600


@dataclass(frozen=True)
class CacheEntry:
    """An aggregated collection and the clock reading when it was fetched."""
    collection: IPOCollection
    fetched_at: float


class IPOCache:
    """
    Single-entry TTL cache owned by IPOService.

    The entry is never mutated; put() swaps in a new CacheEntry, so a reader
    holding the previous collection keeps a consistent view.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entry: Optional[CacheEntry] = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and self.clock() - entry.fetched_at < self.ttl_seconds

    def get(self) -> Optional[IPOCollection]:
        """Cached collection if still within the TTL, else None."""
        entry = self._entry
        if entry is None or self.clock() - entry.fetched_at >= self.ttl_seconds:
            return None
        return entry.collection

    def put(self, collection: IPOCollection) -> CacheEntry:
        entry = CacheEntry(collection=collection, fetched_at=self.clock())
        self._entry = entry
        return entry

    def clear(self) -> None:
        self._entry = None
