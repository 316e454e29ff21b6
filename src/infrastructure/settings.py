"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.constants import (
    DEFAULT_MONTHLY_WINDOW,
    RECENT_TRANSACTIONS_LIMIT,
)
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_CACHE_MAX_ENTRIES = 100


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger core.

    Attributes:
        cache_ttl_seconds: Lifetime of cached report entries.
        cache_max_entries: Upper bound on entries held by the cache.
        monthly_window: Default number of months in the time series.
        recent_transactions_limit: Transactions listed in the summary.
    """

    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    monthly_window: int = DEFAULT_MONTHLY_WINDOW
    recent_transactions_limit: int = RECENT_TRANSACTIONS_LIMIT

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        return cls(
            cache_ttl_seconds=cls._read_positive_int(
                "CACHE_TTL",
                DEFAULT_CACHE_TTL_SECONDS,
                logger,
            ),
            cache_max_entries=cls._read_positive_int(
                "CACHE_MAX_ENTRIES",
                DEFAULT_CACHE_MAX_ENTRIES,
                logger,
            ),
            monthly_window=cls._read_positive_int(
                "REPORT_MONTHLY_WINDOW",
                DEFAULT_MONTHLY_WINDOW,
                logger,
            ),
            recent_transactions_limit=cls._read_positive_int(
                "RECENT_TRANSACTIONS_LIMIT",
                RECENT_TRANSACTIONS_LIMIT,
                logger,
            ),
        )

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back to the default.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"Non-positive {name}={raw!r}; using {default}")
            return default
        return value


__all__ = [
    "LedgerSettings",
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_CACHE_MAX_ENTRIES",
]
