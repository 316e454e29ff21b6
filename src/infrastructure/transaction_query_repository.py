"""SQLAlchemy-backed repository for transaction listing."""

from sqlalchemy import String, func, select

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.transaction_query_repository import (
    TransactionQueryRepositoryPort,
)
from src.domain.models import Pagination, TransactionFilter, TransactionView
from src.infrastructure.ledger_tables import (
    row_to_transaction_view,
    transaction_view_select,
    transactions_table,
)


_SORT_COLUMNS = {
    "date": transactions_table.c.date,
    "amount": transactions_table.c.amount,
    "description": transactions_table.c.description,
}


class SqlAlchemyTransactionQueryRepository(TransactionQueryRepositoryPort):
    """Filter, sort and paginate the transaction log."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def find_all(
        self,
        user_id: str,
        criteria: TransactionFilter,
        pagination: Pagination,
    ) -> tuple[list[TransactionView], int]:
        conditions = self._build_conditions(user_id, criteria)
        sort_column = _SORT_COLUMNS[criteria.sort]
        if criteria.order == "asc":
            ordering = (sort_column.asc(), transactions_table.c.id.asc())
        else:
            ordering = (sort_column.desc(), transactions_table.c.id.desc())

        items_query = (
            transaction_view_select()
            .where(*conditions)
            .order_by(*ordering)
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        count_query = (
            select(func.count())
            .select_from(transactions_table)
            .where(*conditions)
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(items_query).all()
            total = conn.execute(count_query).scalar_one()
        return [row_to_transaction_view(row) for row in rows], int(total)

    @staticmethod
    def _build_conditions(user_id: str, criteria: TransactionFilter) -> list:
        table = transactions_table
        conditions = [table.c.user_id == user_id]
        if criteria.type:
            conditions.append(table.c.type == criteria.type)
        if criteria.account_id:
            conditions.append(table.c.account_id == criteria.account_id)
        if criteria.category_id:
            conditions.append(table.c.category_id == criteria.category_id)
        if criteria.start_date:
            conditions.append(table.c.date >= criteria.start_date)
        if criteria.end_date:
            conditions.append(table.c.date <= criteria.end_date)
        if criteria.search:
            conditions.append(
                func.lower(table.c.description, type_=String).contains(
                    criteria.search.lower(),
                    autoescape=True,
                )
            )
        return conditions


__all__ = ["SqlAlchemyTransactionQueryRepository"]
