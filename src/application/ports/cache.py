"""Port for the key/value cache used by report reads."""

from typing import Any, Protocol


class CachePort(Protocol):
    """Namespaced key/value cache with per-entry TTL."""

    def get(self, key: str, namespace: str | None = None) -> Any | None:
        """Return the cached value or None on a miss."""

    def set(
        self,
        key: str,
        value: Any,
        namespace: str | None = None,
        ttl: float | None = None,
    ) -> None:
        """Store a value; ``ttl`` is in seconds."""

    def delete(self, key: str, namespace: str | None = None) -> None:
        """Remove one entry."""

    def clear_namespace(self, namespace: str) -> int:
        """Remove every entry of a namespace and return how many were removed."""


__all__ = ["CachePort"]
