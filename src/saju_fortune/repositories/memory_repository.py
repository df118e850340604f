"""In-process implementation of FortuneCacheStore.

Entries live in a plain dict, which keeps insertion order. Expiry is checked
lazily on read and capacity is enforced by dropping the oldest-inserted
entry, so this is a FIFO store, not an LRU one.
"""

import logging
import time
from collections.abc import Callable

from saju_fortune.config import settings
from saju_fortune.entities import CacheEntryEntity

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Dict-backed cache with lazy TTL expiry and FIFO eviction.

    This class satisfies the FortuneCacheStore protocol through structural
    typing - no explicit inheritance needed.

    No locking is done: every method runs to completion without awaiting,
    so on a single event loop no two requests interleave inside it.

    Example:
        ```python
        repo = InMemoryCacheRepository(max_entries=2, clock=lambda: 0.0)
        repo.set("a", "A", ttl=60)
        repo.set("b", "B", ttl=60)
        repo.set("c", "C", ttl=60)  # evicts "a"
        ```
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the repository.

        Args:
            max_entries: Capacity before the oldest entry is evicted.
                Defaults to settings.cache_max_entries.
            clock: Returns the current Unix time; injectable for tests.
        """
        self._max_entries = max_entries or settings.cache_max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}

    @classmethod
    def create(
        cls,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults."""
        return cls(max_entries=max_entries, clock=clock)

    def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None

        return entry.text

    def set(self, key: str, text: str, ttl: int) -> None:
        # Overwriting an existing key keeps its original insertion slot.
        self._entries[key] = CacheEntryEntity(
            key=key,
            text=text,
            expires_at=self._clock() + ttl,
        )

        if len(self._entries) > self._max_entries:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            logger.debug(f"Evicted oldest cache entry: {oldest_key}")

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def count_all(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        """Current keys in insertion order (oldest first)."""
        return list(self._entries)

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        return {
            "backend": "memory",
            "total_entries": self.count_all(),
            "max_entries": self._max_entries,
        }

    @property
    def max_entries(self) -> int:
        return self._max_entries
