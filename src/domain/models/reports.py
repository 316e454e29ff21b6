"""Domain models for derived report views."""

from dataclasses import dataclass

from src.domain.models.ledger import TransactionView


@dataclass(frozen=True)
class SummaryReport:
    """Dashboard summary for a month.

    Attributes:
        total_balance: Sum of balances of non-archived accounts.
        monthly_income: Completed income within the month.
        monthly_expense: Completed expense within the month.
        recent_transactions: Most recent transactions regardless of month.
    """

    total_balance: int
    monthly_income: int
    monthly_expense: int
    recent_transactions: list[TransactionView]

    def to_dict(self) -> dict:
        return {
            "totalBalance": self.total_balance,
            "monthlyIncome": self.monthly_income,
            "monthlyExpense": self.monthly_expense,
            "recentTransactions": [
                {
                    key: value
                    for key, value in tx.to_dict().items()
                    if key not in ("categoryId", "accountId", "status")
                }
                for tx in self.recent_transactions
            ],
        }


@dataclass(frozen=True)
class ChartItem:
    """Named value with a display color."""

    name: str
    value: int
    color: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class MonthlyDataItem:
    """Income and expense totals for one month of a time series."""

    month: str
    period: str
    income: int
    expense: int

    @property
    def balance(self) -> int:
        """Return income minus expense."""
        return self.income - self.expense

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "period": self.period,
            "income": self.income,
            "expense": self.expense,
            "balance": self.balance,
        }


@dataclass(frozen=True)
class AccountsSummary:
    """Totals across all of a user's accounts."""

    total_balance: int
    total_accounts: int
    active_accounts: int

    def to_dict(self) -> dict:
        return {
            "totalBalance": self.total_balance,
            "totalAccounts": self.total_accounts,
            "activeAccounts": self.active_accounts,
        }


__all__ = [
    "SummaryReport",
    "ChartItem",
    "MonthlyDataItem",
    "AccountsSummary",
]
