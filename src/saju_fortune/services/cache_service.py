"""Cache service for generated fortunes.

Maps birth profiles to cache keys and applies the configured TTL; storage
and eviction belong to the repository.
"""

from saju_fortune.config import settings
from saju_fortune.entities import BirthProfileEntity
from saju_fortune.protocols import FortuneCacheStore


class CacheService:
    """Fortune cache keyed by normalized birth profile.

    Example:
        ```python
        from saju_fortune.repositories import InMemoryCacheRepository
        from saju_fortune.services import CacheService

        # Defaults from settings (30 minute TTL, 200 entries)
        cache = CacheService.create()

        # Deterministic clock and tiny capacity, e.g. for tests
        cache = CacheService(
            repository=InMemoryCacheRepository(max_entries=2, clock=lambda: 0.0),
            ttl=60,
        )
        ```
    """

    def __init__(self, repository: FortuneCacheStore, ttl: int | None = None) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            ttl: Time-to-live for entries in seconds. Defaults to settings.
        """
        self._repository = repository
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(
        cls,
        repository: FortuneCacheStore | None = None,
        ttl: int | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with an in-memory store by default.

        Args:
            repository: Storage backend. If None, an InMemoryCacheRepository
                sized from settings is used.
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured CacheService instance
        """
        if repository is None:
            from saju_fortune.repositories import InMemoryCacheRepository

            repository = InMemoryCacheRepository.create()
        return cls(repository=repository, ttl=ttl)

    def get(self, profile: BirthProfileEntity) -> str | None:
        """Return the fresh cached fortune for a profile, or None."""
        return self._repository.get(profile.cache_key)

    def store(self, profile: BirthProfileEntity, text: str) -> str:
        """Cache a generated fortune.

        Returns:
            The cache key used
        """
        key = profile.cache_key
        self._repository.set(key, text, self._ttl)
        return key

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        return self._repository.clear_all()

    def get_stats(self) -> dict:
        stats = self._repository.get_stats()
        stats["ttl"] = self._ttl
        return stats

    def is_healthy(self) -> bool:
        health_check = getattr(self._repository, "health_check", None)
        return bool(health_check()) if callable(health_check) else True

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def repository(self) -> FortuneCacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
