"""Tests for the transaction ledger service against SQLite."""

import random
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.transaction_ledger import TransactionLedgerService
from src.domain.errors import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository

USER = "user-a"
OTHER_USER = "user-b"


def _payload(account_id, **overrides):
    payload = {
        "amount": 5000,
        "description": "Salary",
        "date": "2024-01-15",
        "type": "income",
        "status": "completed",
        "account_id": account_id,
    }
    payload.update(overrides)
    return payload


def test_end_to_end_balance_scenarios(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account_a = accounts_repository.create_account(USER, "A")
    assert account_balance(account_a.id, USER) == 0

    first = ledger_service.create(USER, _payload(account_a.id))
    assert account_balance(account_a.id, USER) == 5000

    second = ledger_service.create(
        USER,
        _payload(account_a.id, amount=2000, type="expense", description="Rent"),
    )
    assert account_balance(account_a.id, USER) == 3000

    ledger_service.update(first.id, USER, {"amount": 7000})
    assert account_balance(account_a.id, USER) == 5000

    deleted = ledger_service.delete(second.id, USER)
    assert deleted.id == second.id
    assert deleted.amount == 2000
    assert account_balance(account_a.id, USER) == 7000

    account_b = accounts_repository.create_account(USER, "B")
    moved = ledger_service.update(first.id, USER, {"account_id": account_b.id})
    assert moved.account == "B"
    assert account_balance(account_a.id, USER) == 0
    assert account_balance(account_b.id, USER) == 7000


def test_create_returns_view_with_names(
    accounts_repository,
    ledger_service,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    category = accounts_repository.create_category(USER, "Salary", "income")

    view = ledger_service.create(
        USER, _payload(account.id, category_id=category.id, status=None)
    )

    assert view.account == "Wallet"
    assert view.category == "Salary"
    assert view.status == "pending"
    assert ledger_service.get(view.id, USER) == view


def test_create_on_foreign_account_is_forbidden(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    own = accounts_repository.create_account(USER, "Mine")
    foreign = accounts_repository.create_account(OTHER_USER, "Theirs")

    with pytest.raises(ForbiddenError):
        ledger_service.create(USER, _payload(foreign.id))
    with pytest.raises(ForbiddenError):
        ledger_service.create(USER, _payload(str(uuid.uuid4())))

    assert account_balance(own.id, USER) == 0
    assert account_balance(foreign.id, OTHER_USER) == 0


def test_create_with_foreign_category_is_not_found(
    accounts_repository,
    ledger_service,
    account_balance,
    db_port,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    foreign = accounts_repository.create_category(OTHER_USER, "Theirs", "income")

    with pytest.raises(NotFoundError):
        ledger_service.create(USER, _payload(account.id, category_id=foreign.id))

    assert account_balance(account.id, USER) == 0
    with db_port.get_ledger_engine().connect() as conn:
        count = conn.exec_driver_sql("SELECT COUNT(*) FROM transactions").scalar()
    assert count == 0


def test_other_users_transactions_are_not_found(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    created = ledger_service.create(USER, _payload(account.id))

    with pytest.raises(NotFoundError):
        ledger_service.get(created.id, OTHER_USER)
    with pytest.raises(NotFoundError):
        ledger_service.update(created.id, OTHER_USER, {"amount": 1})
    with pytest.raises(NotFoundError):
        ledger_service.delete(created.id, OTHER_USER)

    assert account_balance(account.id, USER) == 5000


def test_update_to_foreign_account_leaves_balances(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    foreign = accounts_repository.create_account(OTHER_USER, "Theirs")
    created = ledger_service.create(USER, _payload(account.id))

    with pytest.raises(ForbiddenError):
        ledger_service.update(created.id, USER, {"account_id": foreign.id})

    assert account_balance(account.id, USER) == 5000
    assert account_balance(foreign.id, OTHER_USER) == 0


def test_update_without_balance_fields_keeps_balance(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    created = ledger_service.create(USER, _payload(account.id))

    updated = ledger_service.update(
        created.id,
        USER,
        {"description": "March salary", "status": "pending", "date": "2024-03-01"},
    )

    assert updated.description == "March salary"
    assert updated.status == "pending"
    assert account_balance(account.id, USER) == 5000


def test_type_change_flips_the_effect(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    created = ledger_service.create(USER, _payload(account.id, amount=1000))

    ledger_service.update(created.id, USER, {"type": "expense"})

    assert account_balance(account.id, USER) == -1000


def test_delete_then_recreate_restores_balance(
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    ledger_service.create(USER, _payload(account.id, amount=300, type="expense"))
    created = ledger_service.create(USER, _payload(account.id, amount=1200))
    before = account_balance(account.id, USER)

    ledger_service.delete(created.id, USER)
    ledger_service.create(USER, _payload(account.id, amount=1200))

    assert account_balance(account.id, USER) == before


def test_validation_happens_before_storage() -> None:
    repository = MagicMock()
    report_cache = MagicMock()
    service = TransactionLedgerService(
        repository,
        report_cache,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    with pytest.raises(ValidationError):
        service.create(USER, _payload(str(uuid.uuid4()), amount=-5))
    with pytest.raises(ValidationError):
        service.update("not-a-uuid", USER, {"amount": 10})

    repository.begin.assert_not_called()
    report_cache.invalidate_user.assert_not_called()


def test_storage_failure_becomes_internal_error() -> None:
    repository = MagicMock()
    repository.begin.side_effect = OperationalError(
        "BEGIN", {}, Exception("database is down")
    )
    report_cache = MagicMock()
    logger = MagicMock()
    service = TransactionLedgerService(
        repository,
        report_cache,
        logger=logger,
        usage_logger=MagicMock(),
    )

    with pytest.raises(InternalError):
        service.create(USER, _payload(str(uuid.uuid4())))

    assert "create transaction" in logger.error.call_args[0][0]
    report_cache.invalidate_user.assert_not_called()


class _FailingBalanceRepository(SqlAlchemyLedgerRepository):
    def increment_balance(self, conn, account_id, user_id, delta):
        raise OperationalError("UPDATE accounts", {}, Exception("lock timeout"))


def test_failure_mid_unit_rolls_back_row_write(
    db_port,
    accounts_repository,
    report_cache,
    account_balance,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    service = TransactionLedgerService(
        _FailingBalanceRepository(db_port),
        report_cache,
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )

    with pytest.raises(InternalError):
        service.create(USER, _payload(account.id))

    assert account_balance(account.id, USER) == 0
    with db_port.get_ledger_engine().connect() as conn:
        count = conn.exec_driver_sql("SELECT COUNT(*) FROM transactions").scalar()
    assert count == 0


def test_writes_invalidate_only_the_users_reports(
    accounts_repository,
    ledger_service,
    cache,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")
    cache.set("summary:2024-01:5", "stale", ReportCache.namespace(USER))
    cache.set("summary:2024-01:5", "kept", ReportCache.namespace(OTHER_USER))

    created = ledger_service.create(USER, _payload(account.id))

    assert cache.get("summary:2024-01:5", ReportCache.namespace(USER)) is None
    assert cache.get("summary:2024-01:5", ReportCache.namespace(OTHER_USER)) == "kept"

    cache.set("monthly:2024-01:6", "stale", ReportCache.namespace(USER))
    ledger_service.delete(created.id, USER)
    assert cache.get("monthly:2024-01:6", ReportCache.namespace(USER)) is None


def test_committed_mutations_are_usage_logged(
    accounts_repository,
    ledger_service,
    usage_logger,
) -> None:
    account = accounts_repository.create_account(USER, "Wallet")

    created = ledger_service.create(USER, _payload(account.id, amount=250))

    message = usage_logger.info.call_args[0][0]
    assert message.startswith("create")
    assert created.id in message
    assert f"{account.id}:+250" in message


@pytest.mark.parametrize("seed", [1, 7, 2024])
def test_random_operations_keep_balances_consistent(
    seed,
    accounts_repository,
    ledger_service,
    account_balance,
) -> None:
    rng = random.Random(seed)
    accounts = [
        accounts_repository.create_account(USER, f"Account {index}").id
        for index in range(2)
    ]
    live: dict[str, tuple[str, str, int]] = {}

    for _ in range(40):
        action = rng.choice(["create", "create", "update", "delete"])
        if action == "create" or not live:
            account_id = rng.choice(accounts)
            tx_type = rng.choice(["income", "expense"])
            amount = rng.randint(1, 10_000)
            view = ledger_service.create(
                USER,
                _payload(account_id, amount=amount, type=tx_type),
            )
            live[view.id] = (account_id, tx_type, amount)
        elif action == "update":
            transaction_id = rng.choice(sorted(live))
            account_id, tx_type, amount = live[transaction_id]
            patch = {}
            if rng.random() < 0.5:
                amount = rng.randint(1, 10_000)
                patch["amount"] = amount
            if rng.random() < 0.5:
                tx_type = rng.choice(["income", "expense"])
                patch["type"] = tx_type
            if rng.random() < 0.5:
                account_id = rng.choice(accounts)
                patch["account_id"] = account_id
            ledger_service.update(transaction_id, USER, patch)
            live[transaction_id] = (account_id, tx_type, amount)
        else:
            transaction_id = rng.choice(sorted(live))
            ledger_service.delete(transaction_id, USER)
            del live[transaction_id]

        for account_id in accounts:
            expected = sum(
                amount if tx_type == "income" else -amount
                for owner, tx_type, amount in live.values()
                if owner == account_id
            )
            assert account_balance(account_id, USER) == expected
