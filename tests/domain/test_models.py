"""Tests for domain model serialization."""

from datetime import date
import subprocess
import sys

from src.domain.models import (
    MonthlyDataItem,
    PageMeta,
    SummaryReport,
    TransactionPatch,
    TransactionView,
)
from src.utils.utils import get_project_root


def _view(**overrides):
    values = dict(
        id="t1",
        amount=4000,
        description="Rent",
        date=date(2024, 1, 5),
        type="expense",
        status="completed",
        account_id="a1",
        category_id=None,
    )
    values.update(overrides)
    return TransactionView(**values)


def test_transaction_view_defaults_display_names() -> None:
    payload = _view().to_dict()

    assert payload["category"] == "Uncategorized"
    assert payload["account"] == "Unknown Account"
    assert payload["date"] == "2024-01-05"


def test_summary_recent_transactions_omit_ids_and_status() -> None:
    summary = SummaryReport(
        total_balance=100,
        monthly_income=0,
        monthly_expense=0,
        recent_transactions=[_view(account_name="Wallet")],
    )

    recent = summary.to_dict()["recentTransactions"][0]

    assert recent["account"] == "Wallet"
    assert "accountId" not in recent
    assert "status" not in recent


def test_page_meta_flags() -> None:
    meta = PageMeta(current_page=2, items_per_page=10, total_items=25)

    assert meta.total_pages == 3
    assert meta.has_next is True
    assert meta.has_previous is True
    assert PageMeta(1, 10, 0).to_dict()["totalPages"] == 0


def test_monthly_item_balance() -> None:
    item = MonthlyDataItem(month="Jan 2024", period="2024-01", income=10, expense=30)

    assert item.to_dict()["balance"] == -20


def test_ledger_models_module_imports_cleanly() -> None:
    result = subprocess.run(
        [
            sys.executable,
            "-c",
            "from src.domain.models.ledger import TransactionPatch; "
            "print(TransactionPatch().date)",
        ],
        cwd=get_project_root(),
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "None"


def test_transaction_patch_keeps_only_given_date() -> None:
    assert TransactionPatch().date is None
    assert TransactionPatch(date=date(2024, 2, 1)).changed_fields() == {
        "date": date(2024, 2, 1)
    }
