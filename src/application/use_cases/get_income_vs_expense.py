"""Use case to compare a month's income and expense."""

from datetime import date
from typing import Callable

from src.application.ports.report_repository import ReportRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.constants import (
    EXPENSE_BUCKET_COLOR,
    EXPENSE_BUCKET_NAME,
    INCOME_BUCKET_COLOR,
    INCOME_BUCKET_NAME,
    REPORTED_STATUS,
)
from src.domain.models import ChartItem
from src.domain.services.periods import format_month, month_bounds, resolve_month
from src.infrastructure.logging.logger import get_app_logger


class GetIncomeVsExpenseUseCase:
    """Return the income and expense buckets of a month, in that order."""

    def __init__(
        self,
        report_repository: ReportRepositoryPort,
        report_cache: ReportCache | None = None,
        logger=None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._report_repository = report_repository
        self._logger = logger or get_app_logger()
        self._report_cache = report_cache or ReportCache(None, logger=self._logger)
        self._today = today

    def execute(self, user_id: str, month: str | None = None) -> list[ChartItem]:
        year, month_number = resolve_month(month, self._today())
        key = ReportCache.build_key(
            "income-vs-expense", format_month(year, month_number)
        )
        return self._report_cache.get_or_compute(
            user_id,
            key,
            lambda: self._compute(user_id, year, month_number),
        )

    def _compute(self, user_id: str, year: int, month: int) -> list[ChartItem]:
        start_date, end_date = month_bounds(year, month)
        with translate_storage_errors(
            self._logger,
            "compute income vs expense",
            f"user={user_id} year={year} month={month}",
        ):
            totals = self._report_repository.fetch_type_totals(
                user_id, start_date, end_date, REPORTED_STATUS
            )
        return [
            ChartItem(
                name=INCOME_BUCKET_NAME,
                value=totals.get("income", 0),
                color=INCOME_BUCKET_COLOR,
            ),
            ChartItem(
                name=EXPENSE_BUCKET_NAME,
                value=totals.get("expense", 0),
                color=EXPENSE_BUCKET_COLOR,
            ),
        ]


__all__ = ["GetIncomeVsExpenseUseCase"]
