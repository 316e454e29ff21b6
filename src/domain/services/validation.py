"""Input validation for ledger operations.

Collaborators hand the core plain mappings; these helpers turn them into
validated domain inputs or raise ``ValidationError`` before any store access.
"""

import uuid
from collections.abc import Mapping
from datetime import date, datetime

from src.domain.constants import (
    DEFAULT_MONTHLY_WINDOW,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    DEFAULT_TRANSACTION_STATUS,
    MAX_DESCRIPTION_LENGTH,
    MAX_MONTHLY_WINDOW,
    MAX_PAGE_SIZE,
    MIN_DESCRIPTION_LENGTH,
    SORT_FIELDS,
    SORT_ORDERS,
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
)
from src.domain.errors import ValidationError
from src.domain.models import (
    Pagination,
    TransactionFilter,
    TransactionInput,
    TransactionPatch,
)
from src.domain.services.periods import month_bounds

_TRANSACTION_FIELDS = frozenset(
    {
        "amount",
        "description",
        "date",
        "type",
        "status",
        "account_id",
        "category_id",
    }
)
_REQUIRED_ON_CREATE = ("amount", "description", "date", "type", "account_id")


def validate_amount(value) -> int:
    """Return a positive integer amount in minor units."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Amount must be provided in cents as an integer")
    if value <= 0:
        raise ValidationError("Amount must be a positive number")
    return value


def validate_description(value) -> str:
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    cleaned = value.strip()
    if len(cleaned) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError("Description too long")
    return cleaned


def validate_date(value) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) == 10:
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError("Date must be in YYYY-MM-DD format")


def validate_transaction_type(value) -> str:
    if value not in TRANSACTION_TYPES:
        raise ValidationError("Type must be either income or expense")
    return value


def validate_status(value) -> str:
    if value not in TRANSACTION_STATUSES:
        raise ValidationError("Status must be pending, completed, or canceled")
    return value


def validate_uuid(value, field_name: str) -> str:
    """Return the canonical string form of a UUID reference."""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a valid UUID")
    try:
        return str(uuid.UUID(value))
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a valid UUID") from exc


def _reject_unknown_fields(payload: Mapping) -> None:
    unknown = sorted(set(payload) - _TRANSACTION_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown transaction fields: {', '.join(unknown)}")


def validate_transaction_input(payload: Mapping) -> TransactionInput:
    """Validate a create payload.

    Args:
        payload: Mapping with ``amount``, ``description``, ``date``, ``type``,
            ``account_id`` and optional ``status`` and ``category_id``.

    Returns:
        TransactionInput: Validated input; status defaults to pending.

    Raises:
        ValidationError: If a field is missing or malformed.
    """
    _reject_unknown_fields(payload)
    missing = [name for name in _REQUIRED_ON_CREATE if payload.get(name) is None]
    if missing:
        raise ValidationError(f"Missing transaction fields: {', '.join(missing)}")
    category_id = payload.get("category_id")
    status = payload.get("status")
    return TransactionInput(
        amount=validate_amount(payload["amount"]),
        description=validate_description(payload["description"]),
        date=validate_date(payload["date"]),
        type=validate_transaction_type(payload["type"]),
        account_id=validate_uuid(payload["account_id"], "Account"),
        status=(
            validate_status(status)
            if status is not None
            else DEFAULT_TRANSACTION_STATUS
        ),
        category_id=(
            validate_uuid(category_id, "Category")
            if category_id is not None
            else None
        ),
    )


def validate_transaction_patch(payload: Mapping) -> TransactionPatch:
    """Validate a partial update payload; absent fields stay unchanged."""
    _reject_unknown_fields(payload)
    validators = {
        "amount": validate_amount,
        "description": validate_description,
        "date": validate_date,
        "type": validate_transaction_type,
        "status": validate_status,
        "account_id": lambda value: validate_uuid(value, "Account"),
        "category_id": lambda value: validate_uuid(value, "Category"),
    }
    values = {
        name: validators[name](value)
        for name, value in payload.items()
        if value is not None
    }
    return TransactionPatch(**values)


def build_transaction_filter(
    type: str | None = None,
    account_id: str | None = None,
    category_id: str | None = None,
    month: int | None = None,
    year: int | None = None,
    search: str | None = None,
    sort: str | None = None,
    order: str | None = None,
) -> TransactionFilter:
    """Validate listing criteria.

    ``month`` and ``year`` must be supplied together; they select the whole
    calendar month, bounds inclusive.
    """
    if (month is None) != (year is None):
        raise ValidationError("Month and year must be provided together")
    start_date = end_date = None
    if month is not None:
        if isinstance(month, bool) or not isinstance(month, int):
            raise ValidationError("Month must be an integer between 1 and 12")
        if isinstance(year, bool) or not isinstance(year, int):
            raise ValidationError("Year must be an integer")
        if not 1 <= month <= 12:
            raise ValidationError("Month must be an integer between 1 and 12")
        if not 1 <= year <= 9999:
            raise ValidationError("Year must be an integer")
        start_date, end_date = month_bounds(year, month)

    sort = sort or DEFAULT_SORT_FIELD
    order = order or DEFAULT_SORT_ORDER
    if sort not in SORT_FIELDS:
        raise ValidationError("Sort must be one of date, amount, description")
    if order not in SORT_ORDERS:
        raise ValidationError("Order must be asc or desc")

    cleaned_search = search.strip() if search else None
    return TransactionFilter(
        type=validate_transaction_type(type) if type is not None else None,
        account_id=(
            validate_uuid(account_id, "Account")
            if account_id is not None
            else None
        ),
        category_id=(
            validate_uuid(category_id, "Category")
            if category_id is not None
            else None
        ),
        start_date=start_date,
        end_date=end_date,
        search=cleaned_search or None,
        sort=sort,
        order=order,
    )


def build_pagination(
    page: int | None = None,
    limit: int | None = None,
) -> Pagination:
    """Validate a page request; ``limit`` may not exceed ``MAX_PAGE_SIZE``."""
    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_PAGE_SIZE if limit is None else limit
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError("Page must be a positive integer")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("Limit must be a positive integer")
    if limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must not exceed {MAX_PAGE_SIZE}")
    return Pagination(page=page, limit=limit)


def validate_window_size(value: int | None) -> int:
    if value is None:
        return DEFAULT_MONTHLY_WINDOW
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("Window size must be a positive integer")
    if value > MAX_MONTHLY_WINDOW:
        raise ValidationError(
            f"Window size must not exceed {MAX_MONTHLY_WINDOW} months"
        )
    return value


__all__ = [
    "validate_amount",
    "validate_description",
    "validate_date",
    "validate_transaction_type",
    "validate_status",
    "validate_uuid",
    "validate_transaction_input",
    "validate_transaction_patch",
    "build_transaction_filter",
    "build_pagination",
    "validate_window_size",
]
