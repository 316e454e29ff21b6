"""Domain models package."""

from .ledger import (
    Account,
    Category,
    LedgerTransaction,
    TransactionInput,
    TransactionPatch,
    TransactionView,
)
from .queries import PageMeta, Pagination, TransactionFilter, TransactionPage
from .reports import (
    AccountsSummary,
    ChartItem,
    MonthlyDataItem,
    SummaryReport,
)

__all__ = [
    "Account",
    "Category",
    "LedgerTransaction",
    "TransactionInput",
    "TransactionPatch",
    "TransactionView",
    "PageMeta",
    "Pagination",
    "TransactionFilter",
    "TransactionPage",
    "AccountsSummary",
    "ChartItem",
    "MonthlyDataItem",
    "SummaryReport",
]
