"""Tests for input validation rules."""

from datetime import date

import pytest

from src.domain.errors import ValidationError
from src.domain.services.validation import (
    build_pagination,
    build_transaction_filter,
    validate_transaction_input,
    validate_transaction_patch,
    validate_window_size,
)

ACCOUNT_ID = "6f1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d"
CATEGORY_ID = "0a1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d"


def _payload(**overrides):
    payload = {
        "amount": 5000,
        "description": "  Salary  ",
        "date": "2024-01-15",
        "type": "income",
        "account_id": ACCOUNT_ID,
    }
    payload.update(overrides)
    return payload


def test_create_payload_is_normalized() -> None:
    data = validate_transaction_input(_payload(category_id=CATEGORY_ID))

    assert data.amount == 5000
    assert data.description == "Salary"
    assert data.date == date(2024, 1, 15)
    assert data.status == "pending"
    assert data.category_id == CATEGORY_ID


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": 0},
        {"amount": -10},
        {"amount": 10.5},
        {"amount": True},
        {"description": "ab"},
        {"description": "x" * 256},
        {"date": "15/01/2024"},
        {"type": "transfer"},
        {"status": "done"},
        {"account_id": "not-a-uuid"},
        {"category_id": "nope"},
        {"balance": 100},
    ],
)
def test_create_payload_rejects_invalid_fields(overrides) -> None:
    with pytest.raises(ValidationError):
        validate_transaction_input(_payload(**overrides))


def test_create_payload_requires_fields() -> None:
    payload = _payload()
    del payload["account_id"]

    with pytest.raises(ValidationError, match="account_id"):
        validate_transaction_input(payload)


def test_patch_keeps_only_supplied_fields() -> None:
    patch = validate_transaction_patch({"amount": 200, "description": None})

    assert patch.changed_fields() == {"amount": 200}
    assert patch.touches_balance() is True
    status_only = validate_transaction_patch({"status": "completed"})
    assert status_only.touches_balance() is False


def test_filter_month_and_year_go_together() -> None:
    with pytest.raises(ValidationError):
        build_transaction_filter(month=3)

    criteria = build_transaction_filter(month=2, year=2024, search="   ")

    assert criteria.start_date == date(2024, 2, 1)
    assert criteria.end_date == date(2024, 2, 29)
    assert criteria.search is None
    assert (criteria.sort, criteria.order) == ("date", "desc")


@pytest.mark.parametrize(
    "kwargs",
    [{"sort": "category"}, {"order": "up"}, {"month": 13, "year": 2024}],
)
def test_filter_rejects_unknown_values(kwargs) -> None:
    with pytest.raises(ValidationError):
        build_transaction_filter(**kwargs)


def test_pagination_defaults_and_limits() -> None:
    assert build_pagination().limit == 10
    assert build_pagination(page=3, limit=100).offset == 200
    with pytest.raises(ValidationError):
        build_pagination(limit=101)
    with pytest.raises(ValidationError):
        build_pagination(page=0)


def test_window_size_bounds() -> None:
    assert validate_window_size(None) == 6
    assert validate_window_size(24) == 24
    with pytest.raises(ValidationError):
        validate_window_size(0)
    with pytest.raises(ValidationError):
        validate_window_size(25)
