"""In-memory response cache with per-entry TTL and LRU eviction.

Entries are keyed by endpoint plus request parameters. Writes invalidate
only the keys they affect (``invalidate("players?")``) instead of dropping
the whole cache.
"""

import json
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from src.directory.config import CACHE_DURATIONS, CACHE_MAX_ENTRIES

logger = logging.getLogger(__name__)


@dataclass
class _CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


class ResponseCache:
    """Bounded TTL cache for listing responses."""

    def __init__(
        self,
        max_entries: int = CACHE_MAX_ENTRIES,
        default_ttl: float = CACHE_DURATIONS["medium"],
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1 (got {max_entries})")
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be > 0 (got {default_ttl})")
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: "OrderedDict[str, _CacheEntry]" = OrderedDict()

    @staticmethod
    def make_key(endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Build a cache key such as ``players?{"district": "Warangal"}``."""
        return f"{endpoint}?{json.dumps(params or {}, sort_keys=True, default=str)}"

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug("Cache expired: %s", key)
            return None

        self._entries.move_to_end(key)
        logger.debug("Cache hit: %s", key)
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None):
        """Store *value* under *key* for *ttl* seconds (default_ttl if None)."""
        ttl = self.default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0 (got {ttl})")

        self._entries[key] = _CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Cache evicted (LRU): %s", evicted)

    def invalidate(self, key_prefix: Optional[str] = None) -> int:
        """Drop entries whose key starts with *key_prefix* (all if None).

        Returns:
            Number of entries removed.
        """
        if key_prefix is None:
            removed = len(self._entries)
            self._entries.clear()
        else:
            stale = [key for key in self._entries if key.startswith(key_prefix)]
            for key in stale:
                del self._entries[key]
            removed = len(stale)

        logger.info("Invalidated %d cache entries (prefix=%r)", removed, key_prefix)
        return removed

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        now = self._clock()
        for key in [k for k, entry in self._entries.items() if entry.is_expired(now)]:
            del self._entries[key]
        return len(self._entries)
