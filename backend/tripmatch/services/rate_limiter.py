"""Per-client fixed-window rate limiter.

Keyed by an opaque client id (usually the forwarded client address). The id is
trivially spoofable, so this throttles casual abuse only; it is not a security
control. State is in-process and unreplicated.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from tripmatch.config import settings

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


class RateLimiter:
    """Allows ``limit`` requests per ``window_seconds`` for each client id."""

    def __init__(
        self,
        limit: int = settings.rate_limit_requests,
        window_seconds: float = settings.rate_limit_window_seconds,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}

    def check_and_consume(self, client_id: str) -> bool:
        """Record one request for ``client_id``. Returns False if it is over the limit."""
        now = self._clock()
        entry = self._entries.get(client_id)

        if entry is None or now > entry.reset_at:
            self._entries[client_id] = RateLimitEntry(count=1, reset_at=now + self.window_seconds)
            return True

        if entry.count >= self.limit:
            logger.info(f"Rate limit hit for client {client_id!r} ({entry.count}/{self.limit})")
            return False

        entry.count += 1
        return True

    def reset(self) -> None:
        self._entries.clear()
