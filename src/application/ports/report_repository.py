"""Port for report aggregation reads."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from src.domain.models import TransactionView


@dataclass(frozen=True)
class CategoryTotalRow:
    """Summed amount of one category, or of uncategorized transactions."""

    category_id: str | None
    name: str | None
    color: str | None
    total: int


@dataclass(frozen=True)
class DailyTypeTotalRow:
    """Summed amount of one transaction type on one day."""

    date: date
    type: str
    total: int


@dataclass(frozen=True)
class AccountBalanceRow:
    """Balance snapshot of one account."""

    account_id: str
    balance: int
    is_archived: bool


class ReportRepositoryPort(Protocol):
    """Port exposing aggregates over the transaction log."""

    def fetch_type_totals(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> dict[str, int]:
        """Return summed amounts keyed by transaction type."""

    def fetch_category_totals(
        self,
        user_id: str,
        transaction_type: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> list[CategoryTotalRow]:
        """Return summed amounts grouped by category."""

    def fetch_daily_type_totals(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        status: str,
    ) -> list[DailyTypeTotalRow]:
        """Return summed amounts grouped by day and type."""

    def fetch_account_balances(self, user_id: str) -> list[AccountBalanceRow]:
        """Return the current balance of every account of the user."""

    def fetch_recent_transactions(
        self,
        user_id: str,
        limit: int,
    ) -> list[TransactionView]:
        """Return the most recent transactions by date."""


__all__ = [
    "CategoryTotalRow",
    "DailyTypeTotalRow",
    "AccountBalanceRow",
    "ReportRepositoryPort",
]
