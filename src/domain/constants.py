"""Domain constants for the ledger and its reports."""

TRANSACTION_TYPES = ("income", "expense")
TRANSACTION_STATUSES = ("pending", "completed", "canceled")
DEFAULT_TRANSACTION_STATUS = "pending"
REPORTED_STATUS = "completed"

SORT_FIELDS = ("date", "amount", "description")
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_FIELD = "date"
DEFAULT_SORT_ORDER = "desc"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

MIN_DESCRIPTION_LENGTH = 3
MAX_DESCRIPTION_LENGTH = 255

RECENT_TRANSACTIONS_LIMIT = 5
DEFAULT_MONTHLY_WINDOW = 6
MAX_MONTHLY_WINDOW = 24

UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#6c757d"
UNKNOWN_ACCOUNT_NAME = "Unknown Account"

INCOME_BUCKET_NAME = "Receitas"
INCOME_BUCKET_COLOR = "#28a745"
EXPENSE_BUCKET_NAME = "Despesas"
EXPENSE_BUCKET_COLOR = "#dc3545"


__all__ = [
    "TRANSACTION_TYPES",
    "TRANSACTION_STATUSES",
    "DEFAULT_TRANSACTION_STATUS",
    "REPORTED_STATUS",
    "SORT_FIELDS",
    "SORT_ORDERS",
    "DEFAULT_SORT_FIELD",
    "DEFAULT_SORT_ORDER",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "MIN_DESCRIPTION_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "RECENT_TRANSACTIONS_LIMIT",
    "DEFAULT_MONTHLY_WINDOW",
    "MAX_MONTHLY_WINDOW",
    "UNCATEGORIZED_NAME",
    "UNCATEGORIZED_COLOR",
    "UNKNOWN_ACCOUNT_NAME",
    "INCOME_BUCKET_NAME",
    "INCOME_BUCKET_COLOR",
    "EXPENSE_BUCKET_NAME",
    "EXPENSE_BUCKET_COLOR",
]
