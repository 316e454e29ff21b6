"""Tests for the composition root."""

from unittest.mock import MagicMock

from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.transaction_ledger import TransactionLedgerService
from src.infrastructure import container
from src.infrastructure.accounts_repository import SqlAlchemyAccountsRepository
from src.infrastructure.cache import InMemoryTtlCache
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.report_repository import SqlAlchemyReportRepository
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.transaction_query_repository import (
    SqlAlchemyTransactionQueryRepository,
)


def test_repository_builders_use_given_db_port() -> None:
    db_port = MagicMock()

    assert isinstance(
        container.build_ledger_repository(db_port),
        SqlAlchemyLedgerRepository,
    )
    assert isinstance(
        container.build_accounts_repository(db_port),
        SqlAlchemyAccountsRepository,
    )
    assert isinstance(
        container.build_transaction_query_repository(db_port),
        SqlAlchemyTransactionQueryRepository,
    )
    assert isinstance(
        container.build_report_repository(db_port),
        SqlAlchemyReportRepository,
    )


def test_build_cache_is_a_process_singleton(monkeypatch) -> None:
    monkeypatch.setattr(container, "_cache", None)
    settings = LedgerSettings(cache_ttl_seconds=42, cache_max_entries=7)

    first = container.build_cache(settings)
    second = container.build_cache()

    assert isinstance(first, InMemoryTtlCache)
    assert first is second
    assert first._default_ttl == 42
    assert first._max_entries == 7


def test_build_transaction_ledger_service(monkeypatch) -> None:
    monkeypatch.setattr(container, "_cache", None)
    monkeypatch.setattr(container, "_report_cache", None)
    monkeypatch.setattr(
        container,
        "build_settings",
        lambda: LedgerSettings(cache_ttl_seconds=10),
    )

    report_cache = container.build_report_cache()
    service = container.build_transaction_ledger_service(MagicMock())

    assert isinstance(report_cache, ReportCache)
    assert isinstance(service, TransactionLedgerService)
    assert service._report_cache is report_cache
    assert container.build_report_cache() is report_cache
