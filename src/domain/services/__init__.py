"""Domain services package."""

from .balance import (
    BalanceAdjustment,
    apply_adjustment,
    plan_update_adjustments,
    reverse_adjustment,
    signed_amount,
)
from .periods import (
    current_month,
    format_month,
    month_bounds,
    month_label,
    parse_month,
    resolve_month,
    shift_month,
    trailing_months,
)
from .validation import (
    build_pagination,
    build_transaction_filter,
    validate_transaction_input,
    validate_transaction_patch,
    validate_transaction_type,
    validate_window_size,
)

__all__ = [
    "BalanceAdjustment",
    "apply_adjustment",
    "plan_update_adjustments",
    "reverse_adjustment",
    "signed_amount",
    "current_month",
    "format_month",
    "month_bounds",
    "month_label",
    "parse_month",
    "resolve_month",
    "shift_month",
    "trailing_months",
    "build_pagination",
    "build_transaction_filter",
    "validate_transaction_input",
    "validate_transaction_patch",
    "validate_transaction_type",
    "validate_window_size",
]
