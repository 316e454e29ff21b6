"""Use case to break down a month's income or expense by category."""

from datetime import date
from typing import Callable

from src.application.ports.report_repository import ReportRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.constants import (
    REPORTED_STATUS,
    UNCATEGORIZED_COLOR,
    UNCATEGORIZED_NAME,
)
from src.domain.models import ChartItem
from src.domain.services.periods import format_month, month_bounds, resolve_month
from src.domain.services.validation import validate_transaction_type
from src.infrastructure.logging.logger import get_app_logger


class GetByCategoryUseCase:
    """Sum completed transactions of one type per category."""

    def __init__(
        self,
        report_repository: ReportRepositoryPort,
        report_cache: ReportCache | None = None,
        logger=None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            report_repository: Port exposing report aggregates.
            report_cache: Optional cache for computed breakdowns.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Clock used when no month is requested.
        """
        self._report_repository = report_repository
        self._logger = logger or get_app_logger()
        self._report_cache = report_cache or ReportCache(None, logger=self._logger)
        self._today = today

    def execute(
        self,
        user_id: str,
        transaction_type: str,
        month: str | None = None,
    ) -> list[ChartItem]:
        """Return category totals sorted by value, largest first.

        Transactions without a category are grouped under
        ``Uncategorized``. Categories without matching transactions in the
        month are absent.

        Args:
            user_id: Owner of the transactions.
            transaction_type: ``income`` or ``expense``.
            month: Target month as ``YYYY-MM``; defaults to the current one.

        Returns:
            list[ChartItem]: One item per category.

        Raises:
            ValidationError: If the type or month is invalid.
        """
        transaction_type = validate_transaction_type(transaction_type)
        year, month_number = resolve_month(month, self._today())
        key = ReportCache.build_key(
            "by-category", format_month(year, month_number), transaction_type
        )
        return self._report_cache.get_or_compute(
            user_id,
            key,
            lambda: self._compute(user_id, transaction_type, year, month_number),
        )

    def _compute(
        self,
        user_id: str,
        transaction_type: str,
        year: int,
        month: int,
    ) -> list[ChartItem]:
        start_date, end_date = month_bounds(year, month)
        with translate_storage_errors(
            self._logger,
            "compute category breakdown",
            f"user={user_id} type={transaction_type} year={year} month={month}",
        ):
            rows = self._report_repository.fetch_category_totals(
                user_id, transaction_type, start_date, end_date, REPORTED_STATUS
            )
        items = [
            ChartItem(
                name=row.name or UNCATEGORIZED_NAME,
                value=row.total,
                color=row.color or UNCATEGORIZED_COLOR,
            )
            for row in rows
            if row.total
        ]
        items.sort(key=lambda item: (-item.value, item.name))
        return items


__all__ = ["GetByCategoryUseCase"]
