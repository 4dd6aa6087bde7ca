"""In-memory TTL cache for mapped search results. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a query may be fetched twice (once per worker). Concurrent misses for the
same key inside one worker may also both call the provider; the last
write wins, which is fine because the value is re-derivable.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from services.mapper import Item

DEFAULT_MAX_RESULTS_LIMIT = 50


def clamp_max_results(value: int, limit: int = DEFAULT_MAX_RESULTS_LIMIT) -> int:
    return max(1, min(limit, value))


@dataclass(frozen=True)
class QueryKey:
    """Normalized (query, maxResults, filter) tuple identifying a cache entry."""

    query_text: str
    max_results: int
    filter_mode: str = ""

    @classmethod
    def normalize(
        cls,
        query_text: str,
        max_results: int,
        filter_mode: str | None = "",
        limit: int = DEFAULT_MAX_RESULTS_LIMIT,
    ) -> "QueryKey":
        return cls(
            query_text=query_text.strip(),
            max_results=clamp_max_results(max_results, limit),
            filter_mode=(filter_mode or "").strip().lower(),
        )

    def normalized(self, limit: int = DEFAULT_MAX_RESULTS_LIMIT) -> "QueryKey":
        return QueryKey.normalize(self.query_text, self.max_results, self.filter_mode, limit)


@dataclass
class CacheEntry:
    key: QueryKey
    value: tuple[Item, ...]
    inserted_at: float
    expires_at: float


class QueryCache:
    def __init__(
        self,
        ttl_seconds: int = 60,
        max_entries: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._store: OrderedDict[QueryKey, CacheEntry] = OrderedDict()

    def get(self, key: QueryKey) -> list[Item] | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return list(entry.value)

    def put(self, key: QueryKey, value: list[Item], ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock()
        entry = CacheEntry(key=key, value=tuple(value), inserted_at=now, expires_at=now + ttl)
        with self._lock:
            self._store[key] = entry
            self._store.move_to_end(key)
            if self.max_entries > 0:
                while len(self._store) > self.max_entries:
                    self._store.popitem(last=False)

    def sweep(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._store.items() if now >= e.expires_at]
            for k in expired:
                del self._store[k]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
