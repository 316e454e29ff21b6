"""SQLAlchemy-backed repository for ledger writes."""

import uuid
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy import delete, select, update

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import (
    Account,
    Category,
    LedgerTransaction,
    TransactionInput,
    TransactionView,
)
from src.infrastructure.ledger_tables import (
    accounts_table,
    categories_table,
    row_to_account,
    row_to_category,
    row_to_transaction,
    row_to_transaction_view,
    transaction_view_select,
    transactions_table,
)


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy Core for the ledger tables."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            clock: Source of row timestamps.
        """
        self._db_port = db_port
        self._clock = clock

    def begin(self) -> AbstractContextManager[Any]:
        return self._db_port.get_ledger_engine().begin()

    def fetch_account(
        self,
        conn,
        account_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Account | None:
        query = select(accounts_table).where(
            accounts_table.c.id == account_id,
            accounts_table.c.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        row = conn.execute(query).first()
        return row_to_account(row) if row else None

    def fetch_category(
        self,
        conn,
        category_id: str,
        user_id: str,
    ) -> Category | None:
        query = select(categories_table).where(
            categories_table.c.id == category_id,
            categories_table.c.user_id == user_id,
        )
        row = conn.execute(query).first()
        return row_to_category(row) if row else None

    def fetch_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> LedgerTransaction | None:
        query = select(transactions_table).where(
            transactions_table.c.id == transaction_id,
            transactions_table.c.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        row = conn.execute(query).first()
        return row_to_transaction(row) if row else None

    def fetch_transaction_view(
        self,
        conn,
        transaction_id: str,
        user_id: str,
    ) -> TransactionView | None:
        query = transaction_view_select().where(
            transactions_table.c.id == transaction_id,
            transactions_table.c.user_id == user_id,
        )
        row = conn.execute(query).first()
        return row_to_transaction_view(row) if row else None

    def insert_transaction(
        self,
        conn,
        user_id: str,
        data: TransactionInput,
    ) -> str:
        transaction_id = str(uuid.uuid4())
        now = self._clock()
        conn.execute(
            transactions_table.insert().values(
                id=transaction_id,
                user_id=user_id,
                account_id=data.account_id,
                category_id=data.category_id,
                amount=data.amount,
                description=data.description,
                date=data.date,
                type=data.type,
                status=data.status,
                created_at=now,
                updated_at=now,
            )
        )
        return transaction_id

    def update_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
        changes: dict[str, Any],
    ) -> None:
        conn.execute(
            update(transactions_table)
            .where(
                transactions_table.c.id == transaction_id,
                transactions_table.c.user_id == user_id,
            )
            .values(**changes, updated_at=self._clock())
        )

    def delete_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
    ) -> None:
        conn.execute(
            delete(transactions_table).where(
                transactions_table.c.id == transaction_id,
                transactions_table.c.user_id == user_id,
            )
        )

    def increment_balance(
        self,
        conn,
        account_id: str,
        user_id: str,
        delta: int,
    ) -> bool:
        result = conn.execute(
            update(accounts_table)
            .where(
                accounts_table.c.id == account_id,
                accounts_table.c.user_id == user_id,
            )
            .values(
                balance=accounts_table.c.balance + delta,
                updated_at=self._clock(),
            )
        )
        return result.rowcount == 1


__all__ = ["SqlAlchemyLedgerRepository", "utcnow"]
