"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .cache import CachePort
from .database import DatabaseEnginePort
from .ledger_repository import LedgerRepositoryPort
from .report_repository import (
    AccountBalanceRow,
    CategoryTotalRow,
    DailyTypeTotalRow,
    ReportRepositoryPort,
)
from .transaction_query_repository import TransactionQueryRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "CachePort",
    "DatabaseEnginePort",
    "LedgerRepositoryPort",
    "AccountBalanceRow",
    "CategoryTotalRow",
    "DailyTypeTotalRow",
    "ReportRepositoryPort",
    "TransactionQueryRepositoryPort",
]
