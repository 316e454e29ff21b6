"""SQLAlchemy-backed repository for report aggregates."""

from datetime import date

from sqlalchemy import func, select

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.report_repository import (
    AccountBalanceRow,
    CategoryTotalRow,
    DailyTypeTotalRow,
    ReportRepositoryPort,
)
from src.domain.models import TransactionView
from src.infrastructure.ledger_tables import (
    accounts_table,
    categories_table,
    row_to_transaction_view,
    transaction_view_select,
    transactions_table,
)
from src.utils.money import coerce_minor_units


class SqlAlchemyReportRepository(ReportRepositoryPort):
    """Repository backed by SQLAlchemy for report reads."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_type_totals(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> dict[str, int]:
        query = (
            select(
                transactions_table.c.type,
                func.sum(transactions_table.c.amount).label("total"),
            )
            .where(*self._period_conditions(user_id, start_date, end_date, status))
            .group_by(transactions_table.c.type)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return {row.type: coerce_minor_units(row.total) for row in rows}

    def fetch_category_totals(
        self,
        user_id: str,
        transaction_type: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> list[CategoryTotalRow]:
        query = (
            select(
                transactions_table.c.category_id,
                categories_table.c.name,
                categories_table.c.color,
                func.sum(transactions_table.c.amount).label("total"),
            )
            .select_from(
                transactions_table.outerjoin(
                    categories_table,
                    categories_table.c.id == transactions_table.c.category_id,
                )
            )
            .where(
                *self._period_conditions(user_id, start_date, end_date, status),
                transactions_table.c.type == transaction_type,
            )
            .group_by(
                transactions_table.c.category_id,
                categories_table.c.name,
                categories_table.c.color,
            )
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            CategoryTotalRow(
                category_id=row.category_id,
                name=row.name,
                color=row.color,
                total=coerce_minor_units(row.total),
            )
            for row in rows
        ]

    def fetch_daily_type_totals(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> list[DailyTypeTotalRow]:
        query = (
            select(
                transactions_table.c.date,
                transactions_table.c.type,
                func.sum(transactions_table.c.amount).label("total"),
            )
            .where(*self._period_conditions(user_id, start_date, end_date, status))
            .group_by(transactions_table.c.date, transactions_table.c.type)
            .order_by(transactions_table.c.date)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            DailyTypeTotalRow(
                date=row.date,
                type=row.type,
                total=coerce_minor_units(row.total),
            )
            for row in rows
        ]

    def fetch_account_balances(self, user_id: str) -> list[AccountBalanceRow]:
        query = (
            select(
                accounts_table.c.id,
                accounts_table.c.balance,
                accounts_table.c.is_archived,
            )
            .where(accounts_table.c.user_id == user_id)
            .order_by(accounts_table.c.id)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            AccountBalanceRow(
                account_id=row.id,
                balance=coerce_minor_units(row.balance),
                is_archived=bool(row.is_archived),
            )
            for row in rows
        ]

    def fetch_recent_transactions(
        self,
        user_id: str,
        limit: int,
    ) -> list[TransactionView]:
        query = (
            transaction_view_select()
            .where(transactions_table.c.user_id == user_id)
            .order_by(
                transactions_table.c.date.desc(),
                transactions_table.c.created_at.desc(),
                transactions_table.c.id.desc(),
            )
            .limit(limit)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [row_to_transaction_view(row) for row in rows]

    @staticmethod
    def _period_conditions(
        user_id: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> list:
        return [
            transactions_table.c.user_id == user_id,
            transactions_table.c.date >= start_date,
            transactions_table.c.date <= end_date,
            transactions_table.c.status == status,
        ]


__all__ = ["SqlAlchemyReportRepository"]
