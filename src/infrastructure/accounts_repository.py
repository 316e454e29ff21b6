"""SQLAlchemy-backed repository for accounts and categories."""

import uuid
from datetime import datetime
from typing import Callable

from sqlalchemy import delete, select, update

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models import Account, Category
from src.infrastructure.ledger_repository import utcnow
from src.infrastructure.ledger_tables import (
    accounts_table,
    categories_table,
    row_to_account,
)


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Repository backed by SQLAlchemy for account and category rows."""

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

    def create_account(
        self,
        user_id: str,
        name: str,
        color: str | None = None,
    ) -> Account:
        now = self._clock()
        account = Account(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            balance=0,
            color=color,
            is_archived=False,
            created_at=now,
            updated_at=now,
        )
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                accounts_table.insert().values(
                    id=account.id,
                    user_id=account.user_id,
                    name=account.name,
                    balance=account.balance,
                    color=account.color,
                    is_archived=account.is_archived,
                    created_at=now,
                    updated_at=now,
                )
            )
        return account

    def fetch_accounts(self, user_id: str) -> list[Account]:
        """Return the user's accounts ordered by name."""
        query = (
            select(accounts_table)
            .where(accounts_table.c.user_id == user_id)
            .order_by(accounts_table.c.name, accounts_table.c.id)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [row_to_account(row) for row in rows]

    def set_archived(
        self,
        account_id: str,
        user_id: str,
        is_archived: bool,
    ) -> Account | None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                update(accounts_table)
                .where(
                    accounts_table.c.id == account_id,
                    accounts_table.c.user_id == user_id,
                )
                .values(is_archived=is_archived, updated_at=self._clock())
            )
            if result.rowcount != 1:
                return None
            row = conn.execute(
                select(accounts_table).where(accounts_table.c.id == account_id)
            ).first()
        return row_to_account(row)

    def delete_account(self, account_id: str, user_id: str) -> bool:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                delete(accounts_table).where(
                    accounts_table.c.id == account_id,
                    accounts_table.c.user_id == user_id,
                )
            )
        return result.rowcount == 1

    def create_category(
        self,
        user_id: str,
        name: str,
        category_type: str,
        icon: str | None = None,
        color: str | None = None,
        is_default: bool = False,
    ) -> Category:
        category = Category(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            type=category_type,
            icon=icon,
            color=color,
            is_default=is_default,
        )
        now = self._clock()
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                categories_table.insert().values(
                    id=category.id,
                    user_id=category.user_id,
                    name=category.name,
                    type=category.type,
                    icon=category.icon,
                    color=category.color,
                    is_default=category.is_default,
                    created_at=now,
                    updated_at=now,
                )
            )
        return category

    def delete_category(self, category_id: str, user_id: str) -> bool:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                delete(categories_table).where(
                    categories_table.c.id == category_id,
                    categories_table.c.user_id == user_id,
                )
            )
        return result.rowcount == 1


__all__ = ["SqlAlchemyAccountsRepository"]
