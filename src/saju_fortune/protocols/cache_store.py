"""Cache storage protocol.

Defines the interface for a key/value store holding generated fortune
texts with a per-entry time-to-live.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FortuneCacheStore(Protocol):
    """Protocol for fortune cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def get(self, key: str) -> str | None:
        """Return the cached text for a key.

        Args:
            key: The cache key

        Returns:
            The cached text, or None on a miss or an expired entry
        """
        ...

    def set(self, key: str, text: str, ttl: int) -> None:
        """Store a text under a key.

        Args:
            key: The cache key
            text: The text to cache
            ttl: Time-to-live in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a specific entry.

        Args:
            key: The cache key

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def clear_all(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count entries currently held, including not-yet-purged stale ones."""
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
