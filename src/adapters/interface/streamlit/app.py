"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
import os

import streamlit as st
import altair as alt

from src.application.use_cases.get_by_category import GetByCategoryUseCase
from src.application.use_cases.get_income_vs_expense import (
    GetIncomeVsExpenseUseCase,
)
from src.application.use_cases.get_monthly_data import GetMonthlyDataUseCase
from src.application.use_cases.get_summary import GetSummaryUseCase
from src.application.use_cases.list_transactions import ListTransactionsUseCase
from src.domain.errors import LedgerError
from src.domain.models import (
    ChartItem,
    MonthlyDataItem,
    SummaryReport,
    TransactionPage,
    TransactionView,
)
from src.domain.services.periods import format_month, shift_month
from src.domain.services.validation import (
    build_pagination,
    build_transaction_filter,
)
from src.infrastructure.container import (
    build_report_cache,
    build_report_repository,
    build_settings,
    build_transaction_query_repository,
)
from src.utils.money import format_minor_units


def _fetch_summary(user_id: str, month: str | None) -> SummaryReport:
    """Fetch the dashboard summary for a month."""
    settings = build_settings()
    use_case = GetSummaryUseCase(
        build_report_repository(),
        report_cache=build_report_cache(settings),
        recent_limit=settings.recent_transactions_limit,
    )
    return use_case.execute(user_id, month=month)


def _fetch_income_vs_expense(
    user_id: str,
    month: str | None,
) -> list[ChartItem]:
    """Fetch the income and expense buckets for a month."""
    use_case = GetIncomeVsExpenseUseCase(
        build_report_repository(),
        report_cache=build_report_cache(),
    )
    return use_case.execute(user_id, month=month)


def _fetch_by_category(
    user_id: str,
    transaction_type: str,
    month: str | None,
) -> list[ChartItem]:
    """Fetch category totals of one transaction type."""
    use_case = GetByCategoryUseCase(
        build_report_repository(),
        report_cache=build_report_cache(),
    )
    return use_case.execute(user_id, transaction_type, month=month)


def _fetch_monthly_data(
    user_id: str,
    month: str | None,
) -> list[MonthlyDataItem]:
    """Fetch the trailing monthly series ending at ``month``."""
    settings = build_settings()
    use_case = GetMonthlyDataUseCase(
        build_report_repository(),
        report_cache=build_report_cache(settings),
        default_window=settings.monthly_window,
    )
    return use_case.execute(user_id, month=month)


def _fetch_transactions(
    user_id: str,
    page: int,
    limit: int,
    transaction_type: str | None = None,
    search: str | None = None,
) -> TransactionPage:
    """Fetch one page of the user's transactions."""
    use_case = ListTransactionsUseCase(build_transaction_query_repository())
    return use_case.execute(
        user_id,
        criteria=build_transaction_filter(
            type=transaction_type,
            search=search,
        ),
        pagination=build_pagination(page=page, limit=limit),
    )


def _format_amount(value: int) -> str:
    """Format minor units for display."""
    return format_minor_units(value)


def _format_signed_amount(transaction: TransactionView) -> str:
    """Format a transaction amount with the sign of its balance effect."""
    sign = "+" if transaction.type == "income" else "-"
    return f"{sign}{_format_amount(transaction.amount)}"


def _month_options(today: date, count: int = 12) -> list[str]:
    """Return the last ``count`` months as ``YYYY-MM``, newest first."""
    return [
        format_month(*shift_month(today.year, today.month, -offset))
        for offset in range(count)
    ]


def _transaction_rows(
    transactions: Sequence[TransactionView],
) -> list[dict[str, str]]:
    """Build table rows for a list of transactions."""
    return [
        {
            "Date": tx.date.isoformat(),
            "Description": tx.description,
            "Category": tx.category,
            "Account": tx.account,
            "Amount": _format_signed_amount(tx),
            "Status": tx.status,
        }
        for tx in transactions
    ]


def _prepare_bar_chart_data(
    items: Sequence[ChartItem],
) -> list[dict[str, str | float]]:
    """Prepare Altair rows for the income vs expense bars."""
    return [
        {
            "name": item.name,
            "value": item.value / 100,
            "value_label": _format_amount(item.value),
            "color": item.color,
        }
        for item in items
    ]


def _prepare_donut_chart_data(
    items: Sequence[ChartItem],
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], int]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Category totals sorted by value, largest first.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total in minor units.
    """
    top_items = list(items[:max_categories])
    other_items = items[max_categories:]
    other_amount = sum(item.value for item in other_items)
    if other_items and other_amount != 0:
        top_items.append(
            ChartItem(name="Other", value=other_amount, color="#adb5bd")
        )
    total_amount = sum(item.value for item in items)
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = item.value / total_amount * 100 if total_amount else 0.0
        data.append(
            {
                "category": item.name,
                "amount": item.value / 100,
                "amount_label": _format_amount(item.value),
                "share_label": f"{share:.1f}%",
                "color": item.color,
            }
        )
    return data, total_amount


def _prepare_monthly_chart_data(
    items: Sequence[MonthlyDataItem],
) -> list[dict[str, str | float]]:
    """Flatten the monthly series into one row per month and measure."""
    data: list[dict[str, str | float]] = []
    for item in items:
        for series, value in (
            ("Income", item.income),
            ("Expense", item.expense),
            ("Balance", item.balance),
        ):
            data.append(
                {
                    "month": item.month,
                    "period": item.period,
                    "series": series,
                    "value": value / 100,
                    "value_label": _format_amount(value),
                }
            )
    return data


def _render_summary(summary: SummaryReport) -> None:
    """Render the headline metrics."""
    balance_col, income_col, expense_col = st.columns(3)
    balance_col.metric("Total Balance", _format_amount(summary.total_balance))
    income_col.metric("Monthly Income", _format_amount(summary.monthly_income))
    expense_col.metric(
        "Monthly Expense",
        _format_amount(summary.monthly_expense),
    )


def _render_income_vs_expense_chart(items: Sequence[ChartItem]) -> None:
    """Render the income vs expense bars with their fixed colors."""
    st.subheader("Income vs Expense")
    if not any(item.value for item in items):
        st.info("No completed transactions in this month.")
        return
    data = _prepare_bar_chart_data(items)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=6,
        cornerRadiusTopRight=6,
    ).encode(
        x=alt.X("name:N", title=None, sort=None),
        y=alt.Y("value:Q", title=None),
        color=alt.Color("color:N", scale=None, legend=None),
        tooltip=[alt.Tooltip("name:N"), alt.Tooltip("value_label:N")],
    )
    st.altair_chart(chart, width="stretch")


def _render_category_chart(
    items: Sequence[ChartItem],
    title: str,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of category totals.

    Args:
        items: Category totals sorted by value.
        title: Chart title to display above the donut.
        chart_size: Width/height for the chart canvas.
    """
    st.subheader(title)
    if not items:
        st.info("No completed transactions in this month.")
        return
    data, _ = _prepare_donut_chart_data(items)

    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(
                domain=[row["category"] for row in data],
                range=[row["color"] for row in data],
            ),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    chart = base.add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    )
    st.altair_chart(chart, width="stretch")


def _render_monthly_chart(items: Sequence[MonthlyDataItem]) -> None:
    """Render the trailing monthly series as lines."""
    st.subheader("Monthly Overview")
    if not any(item.income or item.expense for item in items):
        st.info("No completed transactions in this period.")
        return
    data = _prepare_monthly_chart_data(items)
    chart = alt.Chart(alt.Data(values=data)).mark_line(point=True).encode(
        x=alt.X("period:O", title=None),
        y=alt.Y("value:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=["Income", "Expense", "Balance"],
                range=["#28a745", "#dc3545", "#1b9aaa"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("value_label:N"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_transactions(user_id: str) -> None:
    """Render the paginated transaction table with light filtering."""
    st.subheader("Transactions")
    query = st.text_input("Search by description", placeholder="Type to filter")
    type_filter = st.selectbox("Filter by type", ["All", "income", "expense"])
    page = st.number_input("Page", min_value=1, value=1, step=1)

    result = _fetch_transactions(
        user_id,
        page=int(page),
        limit=10,
        transaction_type=None if type_filter == "All" else type_filter,
        search=query or None,
    )
    st.caption(
        f"Page {result.meta.current_page} of {result.meta.total_pages} "
        f"({result.meta.total_items} transactions)"
    )
    st.dataframe(
        _transaction_rows(result.items),
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Ledger", layout="wide")
    st.title("Finance Ledger")

    user_id = st.sidebar.text_input(
        "User ID",
        value=os.getenv("LEDGER_USER_ID", ""),
    ).strip()
    month = st.sidebar.selectbox("Month", _month_options(date.today()))
    if not user_id:
        st.warning("Enter a user ID to load the dashboard.")
        return

    try:
        summary = _fetch_summary(user_id, month)
        income_vs_expense = _fetch_income_vs_expense(user_id, month)
        expense_by_category = _fetch_by_category(user_id, "expense", month)
        income_by_category = _fetch_by_category(user_id, "income", month)
        monthly = _fetch_monthly_data(user_id, month)
    except LedgerError as exc:
        st.error(exc.message)
        return

    _render_summary(summary)

    left, right = st.columns(2)
    with left:
        _render_income_vs_expense_chart(income_vs_expense)
    with right:
        _render_monthly_chart(monthly)
    left, right = st.columns(2)
    with left:
        _render_category_chart(expense_by_category, "Expenses by Category")
    with right:
        _render_category_chart(income_by_category, "Income by Category")

    st.subheader("Recent Transactions")
    st.dataframe(
        _transaction_rows(summary.recent_transactions),
        width="stretch",
        hide_index=True,
    )
    _render_transactions(user_id)


if __name__ == "__main__":  # pragma: no cover
    main()
