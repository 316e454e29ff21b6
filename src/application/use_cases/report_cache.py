"""Cache wrapper shared by the report use cases."""

import copy
import threading
from typing import Any, Callable

from src.application.ports.cache import CachePort
from src.infrastructure.logging.logger import get_app_logger


class ReportCache:
    """Memoize report views per user with coarse invalidation.

    Every entry of a user lives in the ``reports:<user_id>`` namespace so a
    ledger write can drop them all at once. Reads and writes are best
    effort; invalidation failures propagate.

    Each user also has a generation number that invalidation bumps. A value
    computed while the generation moved is returned but never stored, so a
    read racing a write cannot refill the cache with pre-write data.
    """

    def __init__(
        self,
        cache: CachePort | None,
        ttl_seconds: float | None = None,
        logger=None,
    ) -> None:
        """Initialize the wrapper.

        Args:
            cache: Backing cache port; None disables caching.
            ttl_seconds: Entry lifetime, or None for the cache default.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._cache = cache
        self._ttl_seconds = ttl_seconds
        self._logger = logger or get_app_logger()
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    @staticmethod
    def namespace(user_id: str) -> str:
        return f"reports:{user_id}"

    @staticmethod
    def build_key(view: str, *params: Any) -> str:
        """Return the cache key for a view and its query parameters."""
        return ":".join([view, *(str(param) for param in params)])

    def generation(self, user_id: str) -> int:
        """Return how many times the user's reports have been invalidated."""
        with self._lock:
            return self._generations.get(user_id, 0)

    def get_or_compute(
        self,
        user_id: str,
        key: str,
        compute: Callable[[], Any],
    ) -> Any:
        """Return the cached value for ``key`` or compute and store it.

        Callers always receive their own copy, so mutating a result leaves
        the cached entry untouched.

        Args:
            user_id: Owner of the report.
            key: Key built with ``build_key``.
            compute: Callable producing the value on a miss.

        Returns:
            Any: Cached or freshly computed value.
        """
        if self._cache is None:
            return compute()
        namespace = self.namespace(user_id)
        try:
            cached = self._cache.get(key, namespace)
        except Exception as exc:
            self._logger.warning(f"Cache read failed for {namespace}:{key}: {exc}")
            cached = None
        if cached is not None:
            self._logger.debug(f"Cache HIT for {namespace}:{key}")
            return copy.deepcopy(cached)

        self._logger.debug(f"Cache MISS for {namespace}:{key}")
        started_at = self.generation(user_id)
        value = compute()
        with self._lock:
            if self._generations.get(user_id, 0) != started_at:
                self._logger.debug(
                    f"Skipping cache fill for {namespace}:{key}; "
                    "reports were invalidated during compute"
                )
                return value
            try:
                self._cache.set(
                    key, copy.deepcopy(value), namespace, self._ttl_seconds
                )
            except Exception as exc:
                self._logger.warning(
                    f"Cache write failed for {namespace}:{key}: {exc}"
                )
        return value

    def invalidate_user(self, user_id: str) -> None:
        """Drop every cached report entry of a user."""
        if self._cache is None:
            return
        # Bump before clearing: a fill checked under the lock either lands
        # before the clear or sees the new generation.
        with self._lock:
            self._generations[user_id] = self._generations.get(user_id, 0) + 1
        removed = self._cache.clear_namespace(self.namespace(user_id))
        self._logger.debug(
            f"Invalidated {removed} cached report entries for user={user_id}"
        )


__all__ = ["ReportCache"]
