"""SQLAlchemy Core schema for the ledger store."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    select,
)
from sqlalchemy.engine import Engine

from src.domain.models import Account, Category, LedgerTransaction, TransactionView
from src.utils.money import coerce_minor_units


metadata = MetaData()

accounts_table = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("balance", BigInteger, nullable=False, default=0),
    Column("color", String(20)),
    Column("is_archived", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

categories_table = Table(
    "categories",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("type", String(10), nullable=False),
    Column("icon", String(50)),
    Column("color", String(20)),
    Column("is_default", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    CheckConstraint("type IN ('income', 'expense')", name="ck_categories_type"),
)

transactions_table = Table(
    "transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(64), nullable=False),
    Column(
        "account_id",
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "category_id",
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column("amount", BigInteger, nullable=False),
    Column("description", String(255), nullable=False),
    Column("date", Date, nullable=False),
    Column("type", String(10), nullable=False),
    Column("status", String(10), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
    CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    CheckConstraint(
        "type IN ('income', 'expense')",
        name="ck_transactions_type",
    ),
    CheckConstraint(
        "status IN ('pending', 'completed', 'canceled')",
        name="ck_transactions_status",
    ),
    Index("ix_transactions_user_date", "user_id", "date"),
)


def init_schema(engine: Engine) -> list[str]:
    """Create the ledger tables when they do not exist.

    Args:
        engine: Engine connected to the ledger database.

    Returns:
        list[str]: Names of the ledger tables.
    """
    metadata.create_all(engine)
    return list(metadata.tables)


def transaction_view_select():
    """Return a select of transactions joined to their display names."""
    return select(
        transactions_table.c.id,
        transactions_table.c.amount,
        transactions_table.c.description,
        transactions_table.c.date,
        transactions_table.c.type,
        transactions_table.c.status,
        transactions_table.c.account_id,
        transactions_table.c.category_id,
        accounts_table.c.name.label("account_name"),
        categories_table.c.name.label("category_name"),
    ).select_from(
        transactions_table.outerjoin(
            accounts_table,
            accounts_table.c.id == transactions_table.c.account_id,
        ).outerjoin(
            categories_table,
            categories_table.c.id == transactions_table.c.category_id,
        )
    )


def row_to_transaction_view(row) -> TransactionView:
    return TransactionView(
        id=row.id,
        amount=coerce_minor_units(row.amount),
        description=row.description,
        date=row.date,
        type=row.type,
        status=row.status,
        account_id=row.account_id,
        category_id=row.category_id,
        account_name=row.account_name,
        category_name=row.category_name,
    )


def row_to_transaction(row) -> LedgerTransaction:
    return LedgerTransaction(
        id=row.id,
        user_id=row.user_id,
        account_id=row.account_id,
        category_id=row.category_id,
        amount=coerce_minor_units(row.amount),
        description=row.description,
        date=row.date,
        type=row.type,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def row_to_account(row) -> Account:
    return Account(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        balance=coerce_minor_units(row.balance),
        color=row.color,
        is_archived=bool(row.is_archived),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def row_to_category(row) -> Category:
    return Category(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        type=row.type,
        icon=row.icon,
        color=row.color,
        is_default=bool(row.is_default),
    )


__all__ = [
    "metadata",
    "accounts_table",
    "categories_table",
    "transactions_table",
    "init_schema",
    "transaction_view_select",
    "row_to_transaction_view",
    "row_to_transaction",
    "row_to_account",
    "row_to_category",
]
