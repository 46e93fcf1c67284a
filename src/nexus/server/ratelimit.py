"""Per-client sliding-window rate limiting."""

import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable

from fastapi import Request

from nexus.errors import NexusError

logger = logging.getLogger(__name__)


class RateLimitExceededError(NexusError):
    """A client exceeded its request budget for the current window."""


class RateLimiter:
    """Allow at most ``limit`` requests per client within ``window_seconds``.

    Clients with no hits inside the window are dropped by a sweep that runs
    at most once per window.
    """

    def __init__(
        self,
        name: str,
        limit: int,
        window_seconds: float = 60.0,
        message: str = "Too many requests, please try again later.",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.limit = limit
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        cutoff = now - self.window_seconds
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> bool:
        """Record a request for ``key``. Returns False if it exceeds the limit."""
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        hits = self._hits.setdefault(key, deque())
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        return True

    def reset(self) -> None:
        self._hits.clear()

    def dependency(self) -> Callable[[Request], Awaitable[None]]:
        """Return a FastAPI dependency enforcing this limiter per client address."""

        async def enforce(request: Request) -> None:
            client = request.client.host if request.client else "unknown"
            if not self.hit(client):
                logger.warning(
                    "Rate limit '%s' exceeded: client=%s path=%s",
                    self.name,
                    client,
                    request.url.path,
                )
                raise RateLimitExceededError(self.message)

        return enforce
