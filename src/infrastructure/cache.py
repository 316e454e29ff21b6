"""In-process cache adapter with namespaces and per-entry TTL."""

import threading
import time
from typing import Any, Callable

from src.application.ports.cache import CachePort
from src.infrastructure.settings import (
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL_SECONDS,
)


KEY_PREFIX = "app:"


class InMemoryTtlCache(CachePort):
    """Thread-safe dictionary cache.

    Keys are rendered as ``app:<namespace>:<key>``. Expired entries are
    dropped on read and swept on every write; when the cache is full the
    oldest entry is evicted.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            default_ttl: Lifetime in seconds used when ``set`` gets none.
            max_entries: Maximum number of live entries.
            clock: Monotonic time source.
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._default_ttl = default_ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def create_key(key: str, namespace: str | None = None) -> str:
        """Return the namespaced storage key."""
        return f"{KEY_PREFIX}{namespace + ':' if namespace else ''}{key}"

    def get(self, key: str, namespace: str | None = None) -> Any | None:
        cache_key = self.create_key(key, namespace)
        with self._lock:
            entry = self._entries.get(cache_key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[cache_key]
                return None
            return value

    def set(
        self,
        key: str,
        value: Any,
        namespace: str | None = None,
        ttl: float | None = None,
    ) -> None:
        lifetime = self._default_ttl if ttl is None else ttl
        cache_key = self.create_key(key, namespace)
        with self._lock:
            now = self._clock()
            self._sweep_expired(now)
            self._entries.pop(cache_key, None)
            while len(self._entries) >= self._max_entries:
                del self._entries[next(iter(self._entries))]
            self._entries[cache_key] = (now + lifetime, value)

    def delete(self, key: str, namespace: str | None = None) -> None:
        with self._lock:
            self._entries.pop(self.create_key(key, namespace), None)

    def clear_namespace(self, namespace: str) -> int:
        prefix = f"{KEY_PREFIX}{namespace}:"
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep_expired(self, now: float) -> None:
        expired = [
            key
            for key, (expires_at, _) in self._entries.items()
            if expires_at <= now
        ]
        for key in expired:
            del self._entries[key]


__all__ = ["InMemoryTtlCache", "KEY_PREFIX"]
