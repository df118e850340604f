"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached fortune text.

    Attributes:
        key: The cache key (see BirthProfileEntity.cache_key)
        text: The generated fortune text
        expires_at: Unix timestamp after which the entry is stale
    """

    key: str
    text: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at
