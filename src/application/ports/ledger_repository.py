"""Port for the transactional ledger store.

Every method except ``begin`` runs on the connection of an open unit of
work, so a use case can group row and balance writes atomically.
"""

from contextlib import AbstractContextManager
from typing import Any, Protocol

from src.domain.models import (
    Account,
    Category,
    LedgerTransaction,
    TransactionInput,
    TransactionView,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing row access for transactions and balance increments."""

    def begin(self) -> AbstractContextManager[Any]:
        """Open a unit of work that commits on exit or rolls back on error."""

    def fetch_account(
        self,
        conn,
        account_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> Account | None:
        """Return the account when it exists and belongs to the user."""

    def fetch_category(
        self,
        conn,
        category_id: str,
        user_id: str,
    ) -> Category | None:
        """Return the category when it exists and belongs to the user."""

    def fetch_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> LedgerTransaction | None:
        """Return the stored transaction row when owned by the user."""

    def fetch_transaction_view(
        self,
        conn,
        transaction_id: str,
        user_id: str,
    ) -> TransactionView | None:
        """Return the transaction with account and category names."""

    def insert_transaction(
        self,
        conn,
        user_id: str,
        data: TransactionInput,
    ) -> str:
        """Insert a transaction row and return its id."""

    def update_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
        changes: dict[str, Any],
    ) -> None:
        """Apply column changes to a transaction row."""

    def delete_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
    ) -> None:
        """Delete a transaction row."""

    def increment_balance(
        self,
        conn,
        account_id: str,
        user_id: str,
        delta: int,
    ) -> bool:
        """Atomically add ``delta`` to the balance; False if no row matched."""


__all__ = ["LedgerRepositoryPort"]
