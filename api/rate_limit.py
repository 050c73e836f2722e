"""
Per-client fixed-window rate limiting for the API routes.
"""

import math
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple


@dataclass
class ClientWindow:
    """Request count for one client in the current window."""
    count: int
    reset_time: float


@dataclass
class RateLimiter:
    """
    Fixed window rate limiter keyed by client address.

    Attributes:
        limit: Requests allowed per window
        window_seconds: Window length
        prune_every: Seconds between sweeps of expired client windows
        clock: Time source (seconds)
    """

    limit: int = 100
    window_seconds: float = 60
    prune_every: float = 300
    clock: Callable[[], float] = time.time
    clients: Dict[str, ClientWindow] = field(default_factory=dict)

    def __post_init__(self):
        self._lock = threading.Lock()
        self._last_prune = self.clock()

    def hit(self, client: str) -> Tuple[bool, int]:
        """
        Record one request from a client.

        Returns:
            (allowed, retry_after_seconds); retry_after is 0 when allowed
        """
        now = self.clock()
        if now - self._last_prune >= self.prune_every:
            self.prune()

        with self._lock:
            window = self.clients.get(client)

            if window is None or now > window.reset_time:
                self.clients[client] = ClientWindow(count=1, reset_time=now + self.window_seconds)
                return True, 0

            if window.count >= self.limit:
                return False, math.ceil(window.reset_time - now)

            window.count += 1
            return True, 0

    def prune(self) -> int:
        """Drop expired client windows. Returns the number removed."""
        now = self.clock()
        with self._lock:
            expired = [c for c, w in self.clients.items() if now > w.reset_time]
            for c in expired:
                del self.clients[c]
            self._last_prune = now
        return len(expired)

    def reset(self) -> None:
        with self._lock:
            self.clients.clear()
