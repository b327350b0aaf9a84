"""In-memory TTL cache for search responses."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from tripmatch.config import settings
from tripmatch.schemas.search import SearchResponse

logger = logging.getLogger(__name__)

TTL_SEARCH_RESULTS = settings.cache_ttl_seconds


def normalize_query(query: str) -> str:
    return query.strip().lower()


@dataclass
class CacheEntry:
    data: SearchResponse
    expires_at: float


class CacheService:
    """Query-keyed response cache with lazy expiry.

    Expired entries are dropped when looked up; there is no background sweep.
    Only successful outcomes should be stored.
    """

    def __init__(
        self,
        ttl: float = TTL_SEARCH_RESULTS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, query: str) -> SearchResponse | None:
        """Cached response for ``query``, or None on miss or expiry."""
        key = normalize_query(query)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key!r}")
            return None
        return entry.data

    def set(self, query: str, data: SearchResponse) -> None:
        key = normalize_query(query)
        self._entries[key] = CacheEntry(data=data, expires_at=self._clock() + self.ttl)

    def delete(self, query: str) -> bool:
        return self._entries.pop(normalize_query(query), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
