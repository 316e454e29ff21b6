"""Tests for the ManageLedgerEntitiesUseCase."""

import uuid
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.manage_ledger_entities import (
    ManageLedgerEntitiesUseCase,
)
from src.application.use_cases.report_cache import ReportCache
from src.domain.errors import NotFoundError, ValidationError

USER = "user-a"


@pytest.fixture
def use_case(accounts_repository, report_cache, usage_logger):
    return ManageLedgerEntitiesUseCase(
        accounts_repository,
        report_cache,
        logger=MagicMock(),
        usage_logger=usage_logger,
    )


def test_create_account_starts_at_zero(use_case) -> None:
    account = use_case.create_account(USER, "  Wallet ", color="#fff")

    assert account.name == "Wallet"
    assert account.balance == 0
    assert [acc.id for acc in use_case.list_accounts(USER)] == [account.id]
    assert use_case.list_accounts("someone-else") == []


def test_archive_and_restore_account(use_case) -> None:
    account = use_case.create_account(USER, "Wallet")

    archived = use_case.archive_account(account.id, USER)
    restored = use_case.archive_account(account.id, USER, is_archived=False)

    assert archived.is_archived is True
    assert restored.is_archived is False
    with pytest.raises(NotFoundError):
        use_case.archive_account(account.id, "someone-else")


def test_delete_account_removes_its_transactions(
    use_case,
    ledger_service,
    db_port,
) -> None:
    account = use_case.create_account(USER, "Wallet")
    ledger_service.create(
        USER,
        {
            "amount": 100,
            "description": "Coffee",
            "date": "2024-01-02",
            "type": "expense",
            "account_id": account.id,
        },
    )

    use_case.delete_account(account.id, USER)

    with db_port.get_ledger_engine().connect() as conn:
        count = conn.exec_driver_sql("SELECT COUNT(*) FROM transactions").scalar()
    assert count == 0
    with pytest.raises(NotFoundError):
        use_case.delete_account(account.id, USER)


def test_category_lifecycle(use_case) -> None:
    category = use_case.create_category(USER, "Rent", "expense", color="#aa0000")

    assert category.type == "expense"
    with pytest.raises(ValidationError):
        use_case.create_category(USER, "Gift", "transfer")
    with pytest.raises(NotFoundError):
        use_case.delete_category(category.id, "someone-else")
    use_case.delete_category(category.id, USER)
    with pytest.raises(NotFoundError):
        use_case.delete_category(str(uuid.uuid4()), USER)


def test_changes_invalidate_reports_and_are_logged(
    use_case,
    cache,
    usage_logger,
) -> None:
    cache.set("accounts-summary", "stale", ReportCache.namespace(USER))

    use_case.create_account(USER, "Wallet")

    assert cache.get("accounts-summary", ReportCache.namespace(USER)) is None
    assert usage_logger.info.call_args[0][0].startswith("create_account")


def test_blank_names_are_rejected(use_case) -> None:
    with pytest.raises(ValidationError):
        use_case.create_account(USER, "   ")
