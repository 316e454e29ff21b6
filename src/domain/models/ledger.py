"""Domain models for accounts, categories and transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from src.domain.constants import UNCATEGORIZED_NAME, UNKNOWN_ACCOUNT_NAME


@dataclass(frozen=True)
class Account:
    """Account owned by a user.

    Attributes:
        id: Account identifier (UUID string).
        user_id: Owning user.
        name: Display name.
        balance: Current balance in minor units.
        color: Optional color tag.
        is_archived: Archived accounts are excluded from the summary total.
    """

    id: str
    user_id: str
    name: str
    balance: int
    color: str | None = None
    is_archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Category:
    """Category a transaction may reference."""

    id: str
    user_id: str
    name: str
    type: str
    icon: str | None = None
    color: str | None = None
    is_default: bool = False


@dataclass(frozen=True)
class LedgerTransaction:
    """Stored transaction row.

    ``amount`` is always a positive magnitude; the balance direction comes
    from ``type``.
    """

    id: str
    user_id: str
    account_id: str
    category_id: str | None
    amount: int
    description: str
    date: date
    type: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TransactionView:
    """Transaction with denormalized account and category names."""

    id: str
    amount: int
    description: str
    date: date
    type: str
    status: str
    account_id: str
    category_id: str | None
    account_name: str | None = None
    category_name: str | None = None

    @property
    def category(self) -> str:
        return self.category_name or UNCATEGORIZED_NAME

    @property
    def account(self) -> str:
        return self.account_name or UNKNOWN_ACCOUNT_NAME

    def to_dict(self) -> dict:
        """Convert to the boundary representation."""
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "date": self.date.isoformat(),
            "category": self.category,
            "categoryId": self.category_id,
            "type": self.type,
            "account": self.account,
            "accountId": self.account_id,
            "status": self.status,
        }


@dataclass(frozen=True)
class TransactionInput:
    """Validated input for creating a transaction."""

    amount: int
    description: str
    date: date
    type: str
    account_id: str
    status: str
    category_id: str | None = None


@dataclass(frozen=True)
class TransactionPatch:
    """Validated partial update; ``None`` fields are left unchanged."""

    amount: int | None = None
    description: str | None = None
    date: date | None = None
    type: str | None = None
    status: str | None = None
    account_id: str | None = None
    category_id: str | None = None

    def changed_fields(self) -> dict:
        """Return only the fields present in the patch."""
        return {
            name: value
            for name, value in (
                ("amount", self.amount),
                ("description", self.description),
                ("date", self.date),
                ("type", self.type),
                ("status", self.status),
                ("account_id", self.account_id),
                ("category_id", self.category_id),
            )
            if value is not None
        }

    def touches_balance(self) -> bool:
        return any(
            value is not None
            for value in (self.amount, self.type, self.account_id)
        )


__all__ = [
    "Account",
    "Category",
    "LedgerTransaction",
    "TransactionView",
    "TransactionInput",
    "TransactionPatch",
]
