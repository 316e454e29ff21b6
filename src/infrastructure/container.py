"""Composition root for wiring infrastructure adapters."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.cache import CachePort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.ports.report_repository import ReportRepositoryPort
from src.application.ports.transaction_query_repository import (
    TransactionQueryRepositoryPort,
)
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.transaction_ledger import TransactionLedgerService
from src.infrastructure.accounts_repository import SqlAlchemyAccountsRepository
from src.infrastructure.cache import InMemoryTtlCache
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.report_repository import SqlAlchemyReportRepository
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.transaction_query_repository import (
    SqlAlchemyTransactionQueryRepository,
)


_cache: CachePort | None = None
_report_cache: ReportCache | None = None


def build_settings() -> LedgerSettings:
    """Return settings sourced from the environment."""
    return LedgerSettings.from_env()


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the repository used for transactional ledger writes."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsRepositoryPort:
    """Return the accounts and categories repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsRepository(resolved_db)


def build_transaction_query_repository(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionQueryRepositoryPort:
    """Return the repository for transaction listings."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyTransactionQueryRepository(resolved_db)


def build_report_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ReportRepositoryPort:
    """Return the repository for report aggregates."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyReportRepository(resolved_db)


def build_cache(settings: LedgerSettings | None = None) -> CachePort:
    """Return the process-wide cache, creating it on first use."""
    global _cache
    if _cache is None:
        resolved_settings = settings or build_settings()
        _cache = InMemoryTtlCache(
            default_ttl=resolved_settings.cache_ttl_seconds,
            max_entries=resolved_settings.cache_max_entries,
        )
    return _cache


def build_report_cache(settings: LedgerSettings | None = None) -> ReportCache:
    """Return the process-wide report cache shared by writers and readers."""
    global _report_cache
    if _report_cache is None:
        resolved_settings = settings or build_settings()
        _report_cache = ReportCache(
            build_cache(resolved_settings),
            ttl_seconds=resolved_settings.cache_ttl_seconds,
            logger=get_app_logger(),
        )
    return _report_cache


def build_transaction_ledger_service(
    db_port: DatabaseEnginePort | None = None,
) -> TransactionLedgerService:
    """Return the ledger service wired to the configured store and cache."""
    return TransactionLedgerService(
        build_ledger_repository(db_port),
        build_report_cache(),
    )


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_ledger_repository",
    "build_accounts_repository",
    "build_transaction_query_repository",
    "build_report_repository",
    "build_cache",
    "build_report_cache",
    "build_transaction_ledger_service",
]
