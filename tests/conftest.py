"""Shared fixtures backed by a throwaway SQLite ledger."""

from unittest.mock import MagicMock

import pytest

from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.transaction_ledger import TransactionLedgerService
from src.infrastructure import db as db_module
from src.infrastructure.accounts_repository import SqlAlchemyAccountsRepository
from src.infrastructure.cache import InMemoryTtlCache
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.ledger_tables import init_schema


class _EnginePort:
    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


@pytest.fixture
def ledger_engine(tmp_path):
    engine = db_module._create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_port(ledger_engine):
    return _EnginePort(ledger_engine)


@pytest.fixture
def accounts_repository(db_port):
    return SqlAlchemyAccountsRepository(db_port)


@pytest.fixture
def ledger_repository(db_port):
    return SqlAlchemyLedgerRepository(db_port)


@pytest.fixture
def cache():
    return InMemoryTtlCache(default_ttl=300)


@pytest.fixture
def report_cache(cache):
    return ReportCache(cache, ttl_seconds=300, logger=MagicMock())


@pytest.fixture
def usage_logger():
    return MagicMock()


@pytest.fixture
def ledger_service(ledger_repository, report_cache, usage_logger):
    return TransactionLedgerService(
        ledger_repository,
        report_cache,
        logger=MagicMock(),
        usage_logger=usage_logger,
    )


@pytest.fixture
def account_balance(ledger_repository):
    """Return a helper reading an account balance straight from the store."""

    def _balance(account_id: str, user_id: str) -> int:
        with ledger_repository.begin() as conn:
            account = ledger_repository.fetch_account(conn, account_id, user_id)
        return account.balance

    return _balance
