"""Cache protocol."""

from typing import Protocol, TypeVar

__all__ = ["Cache", "V"]

# Invariant (default) is correct for Cache since we both read and write
V = TypeVar("V", contravariant=False)


class Cache(Protocol[V]):
    """Protocol for string-keyed caches.

    Type Parameters:
        V: The value type
    """

    def get(self, key: str) -> V | None:
        """Get a value from the cache.

        Args:
            key: The cache key

        Returns:
            The cached value if found and still valid, None otherwise
        """
        ...

    def set(self, key: str, value: V) -> None:
        """Set a value in the cache.

        Args:
            key: The cache key
            value: The value to cache
        """
        ...

    def has(self, key: str) -> bool:
        """Check whether a still-valid entry exists without touching its counter."""
        ...

    def delete(self, key: str) -> bool:
        """Remove one entry, returning whether it existed."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        ...
