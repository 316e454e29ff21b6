"""Port for account and category maintenance."""

from typing import Protocol

from src.domain.models import Account, Category


class AccountsRepositoryPort(Protocol):
    """Port exposing account and category writes outside the ledger."""

    def create_account(
        self,
        user_id: str,
        name: str,
        color: str | None = None,
    ) -> Account:
        """Insert an account with a zero balance."""

    def fetch_accounts(self, user_id: str) -> list[Account]:
        """Return the user's accounts ordered by name."""

    def set_archived(
        self,
        account_id: str,
        user_id: str,
        is_archived: bool,
    ) -> Account | None:
        """Update the archived flag; None when the account is not owned."""

    def delete_account(self, account_id: str, user_id: str) -> bool:
        """Delete an account and, by cascade, its transactions."""

    def create_category(
        self,
        user_id: str,
        name: str,
        category_type: str,
        icon: str | None = None,
        color: str | None = None,
        is_default: bool = False,
    ) -> Category:
        """Insert a category."""

    def delete_category(self, category_id: str, user_id: str) -> bool:
        """Delete a category, detaching it from its transactions."""


__all__ = ["AccountsRepositoryPort"]
