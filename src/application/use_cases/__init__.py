"""Application use cases package."""

from .balance_mutator import BalanceMutator
from .get_accounts_summary import GetAccountsSummaryUseCase
from .get_by_category import GetByCategoryUseCase
from .get_income_vs_expense import GetIncomeVsExpenseUseCase
from .get_monthly_data import GetMonthlyDataUseCase
from .get_summary import GetSummaryUseCase
from .list_transactions import ListTransactionsUseCase
from .manage_ledger_entities import ManageLedgerEntitiesUseCase
from .report_cache import ReportCache
from .transaction_ledger import TransactionLedgerService

__all__ = [
    "BalanceMutator",
    "GetAccountsSummaryUseCase",
    "GetByCategoryUseCase",
    "GetIncomeVsExpenseUseCase",
    "GetMonthlyDataUseCase",
    "GetSummaryUseCase",
    "ListTransactionsUseCase",
    "ManageLedgerEntitiesUseCase",
    "ReportCache",
    "TransactionLedgerService",
]
