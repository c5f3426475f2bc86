"""In-memory TTL cache with a least-recently-used size bound."""

from __future__ import annotations

import time as time_module
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from threading import Lock

from fleetdash.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_S = 300.0
DEFAULT_MAX_ENTRIES = 256


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: object
    stored_at: float
    ttl_s: float

    def is_valid(self, now: float) -> bool:
        return now < self.stored_at + self.ttl_s


class TtlCache:
    """Key/value store whose entries expire lazily on read.

    Expired entries are removed when a read finds them; ``purge_expired`` can
    be called to sweep the rest. Once ``max_entries`` is reached the least
    recently used entry is evicted on insert.
    """

    def __init__(
        self,
        *,
        default_ttl_s: float = DEFAULT_TTL_S,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.default_ttl_s = default_ttl_s
        self.max_entries = max_entries
        self._clock = clock or time_module.monotonic
        self._entries: OrderedDict[Hashable, CacheEntry] = OrderedDict()
        self._lock = Lock()

    def get(self, key: Hashable) -> object | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_valid(now):
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: Hashable, value: object, ttl_s: float | None = None) -> None:
        ttl = self.default_ttl_s if ttl_s is None else ttl_s
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl_s=ttl)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache full, evicted %s", evicted)

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def invalidate_all(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def purge_expired(self) -> int:
        """Remove all expired entries and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if not entry.is_valid(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
