"""Domain package for ledger rules and core models."""

from .errors import (
    ForbiddenError,
    InternalError,
    LedgerError,
    NotFoundError,
    ValidationError,
)
from .models import (
    Account,
    AccountsSummary,
    Category,
    ChartItem,
    LedgerTransaction,
    MonthlyDataItem,
    PageMeta,
    Pagination,
    SummaryReport,
    TransactionFilter,
    TransactionInput,
    TransactionPage,
    TransactionPatch,
    TransactionView,
)

__all__ = [
    "ForbiddenError",
    "InternalError",
    "LedgerError",
    "NotFoundError",
    "ValidationError",
    "Account",
    "AccountsSummary",
    "Category",
    "ChartItem",
    "LedgerTransaction",
    "MonthlyDataItem",
    "PageMeta",
    "Pagination",
    "SummaryReport",
    "TransactionFilter",
    "TransactionInput",
    "TransactionPage",
    "TransactionPatch",
    "TransactionView",
]
