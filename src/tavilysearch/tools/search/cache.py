"""TTL cache for search results."""

import json
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .schemas import SearchParams, SearchResult

logger = logging.getLogger(__name__)

# Parameters that change what the provider returns. max_results, domains and
# output format are deliberately left out, so those calls share an entry.
CACHE_KEY_FIELDS = (
    "query",
    "search_depth",
    "topic",
    "include_answer",
    "include_images",
    "include_raw_content",
)


def make_cache_key(params: SearchParams) -> str:
    """Deterministic fingerprint of a tavily_search call."""
    fingerprint = {name: getattr(params, name) for name in CACHE_KEY_FIELDS}
    return json.dumps(fingerprint, separators=(",", ":"), ensure_ascii=False)


@dataclass
class CacheEntry:
    key: str
    value: SearchResult
    stored_at: float
    ttl_seconds: float


class ResultCache:
    """
    In-memory cache with a per-entry TTL.

    Expired entries are only dropped when they are read again; there is no
    sweeping and no size bound. No lock: concurrent misses for the same key
    both fetch and the last put wins.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            clock: Returns the current time in seconds (injectable for tests)
        """
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[SearchResult]:
        """Return the cached value, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() - entry.stored_at > entry.ttl_seconds:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None

        return entry.value

    def put(self, key: str, value: SearchResult, ttl_seconds: float) -> None:
        """Store a copy of value; overwrites any entry already under key."""
        self._entries[key] = CacheEntry(
            key=key,
            value=value.model_copy(deep=True),
            stored_at=self._clock(),
            ttl_seconds=ttl_seconds,
        )

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
