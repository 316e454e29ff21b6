"""Use case to build the monthly income and expense time series."""

from collections import defaultdict
from datetime import date
from typing import Callable

from src.application.ports.report_repository import ReportRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.constants import DEFAULT_MONTHLY_WINDOW, REPORTED_STATUS
from src.domain.models import MonthlyDataItem
from src.domain.services.periods import (
    format_month,
    month_bounds,
    month_label,
    resolve_month,
    trailing_months,
)
from src.domain.services.validation import validate_window_size
from src.infrastructure.logging.logger import get_app_logger


class GetMonthlyDataUseCase:
    """Return income, expense and balance per month over a trailing window."""

    def __init__(
        self,
        report_repository: ReportRepositoryPort,
        report_cache: ReportCache | None = None,
        logger=None,
        default_window: int = DEFAULT_MONTHLY_WINDOW,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            report_repository: Port exposing report aggregates.
            report_cache: Optional cache for computed series.
            logger: Optional logger compatible with logging.Logger-like API.
            default_window: Window size used when none is requested.
            today: Clock used when no month is requested.
        """
        self._report_repository = report_repository
        self._logger = logger or get_app_logger()
        self._report_cache = report_cache or ReportCache(None, logger=self._logger)
        self._default_window = default_window
        self._today = today

    def execute(
        self,
        user_id: str,
        month: str | None = None,
        window_size: int | None = None,
    ) -> list[MonthlyDataItem]:
        """Return ``window_size`` months ending at ``month``, oldest first.

        Totals are computed like the summary: completed transactions only,
        grouped by calendar month. Months without activity report zeros.

        Raises:
            ValidationError: If the month or window size is invalid.
        """
        window = validate_window_size(
            self._default_window if window_size is None else window_size
        )
        year, month_number = resolve_month(month, self._today())
        key = ReportCache.build_key(
            "monthly", format_month(year, month_number), window
        )
        return self._report_cache.get_or_compute(
            user_id,
            key,
            lambda: self._compute(user_id, year, month_number, window),
        )

    def _compute(
        self,
        user_id: str,
        year: int,
        month: int,
        window: int,
    ) -> list[MonthlyDataItem]:
        months = trailing_months(year, month, window)
        oldest_start, _ = month_bounds(*months[-1])
        _, newest_end = month_bounds(*months[0])
        self._logger.info(
            f"Computing monthly data for user={user_id} "
            f"from {oldest_start} to {newest_end}"
        )
        with translate_storage_errors(
            self._logger,
            "compute monthly data",
            f"user={user_id} year={year} month={month} window={window}",
        ):
            rows = self._report_repository.fetch_daily_type_totals(
                user_id, oldest_start, newest_end, REPORTED_STATUS
            )

        buckets: dict[tuple[int, int], dict[str, int]] = defaultdict(
            lambda: {"income": 0, "expense": 0}
        )
        for row in rows:
            buckets[(row.date.year, row.date.month)][row.type] += row.total

        items = [
            MonthlyDataItem(
                month=month_label(item_year, item_month),
                period=format_month(item_year, item_month),
                income=buckets[(item_year, item_month)]["income"],
                expense=buckets[(item_year, item_month)]["expense"],
            )
            for item_year, item_month in months
        ]
        items.reverse()
        return items


__all__ = ["GetMonthlyDataUseCase"]
