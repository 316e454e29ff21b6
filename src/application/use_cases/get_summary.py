"""Use case to build the dashboard summary for a month."""

from datetime import date
from typing import Callable

from src.application.ports.report_repository import ReportRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.constants import RECENT_TRANSACTIONS_LIMIT, REPORTED_STATUS
from src.domain.models import SummaryReport
from src.domain.services.periods import format_month, month_bounds, resolve_month
from src.infrastructure.logging.logger import get_app_logger


class GetSummaryUseCase:
    """Compute balance, monthly totals and the latest transactions."""

    def __init__(
        self,
        report_repository: ReportRepositoryPort,
        report_cache: ReportCache | None = None,
        logger=None,
        recent_limit: int = RECENT_TRANSACTIONS_LIMIT,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            report_repository: Port exposing report aggregates.
            report_cache: Optional cache for computed summaries.
            logger: Optional logger compatible with logging.Logger-like API.
            recent_limit: Number of recent transactions to include.
            today: Clock used when no month is requested.
        """
        self._report_repository = report_repository
        self._logger = logger or get_app_logger()
        self._report_cache = report_cache or ReportCache(None, logger=self._logger)
        self._recent_limit = recent_limit
        self._today = today

    def execute(self, user_id: str, month: str | None = None) -> SummaryReport:
        """Return the summary for ``month`` (``YYYY-MM``, default current).

        ``total_balance`` is the current snapshot over non-archived accounts;
        monthly totals only count completed transactions dated in the month.
        Recent transactions ignore the month.

        Raises:
            ValidationError: If ``month`` is malformed.
        """
        year, month_number = resolve_month(month, self._today())
        period = format_month(year, month_number)
        key = ReportCache.build_key("summary", period, self._recent_limit)
        return self._report_cache.get_or_compute(
            user_id,
            key,
            lambda: self._compute(user_id, year, month_number),
        )

    def _compute(self, user_id: str, year: int, month: int) -> SummaryReport:
        start_date, end_date = month_bounds(year, month)
        self._logger.info(
            f"Computing summary for user={user_id} "
            f"from {start_date} to {end_date}"
        )
        with translate_storage_errors(
            self._logger, "compute summary", f"user={user_id} year={year} month={month}"
        ):
            balances = self._report_repository.fetch_account_balances(user_id)
            totals = self._report_repository.fetch_type_totals(
                user_id, start_date, end_date, REPORTED_STATUS
            )
            recent = self._report_repository.fetch_recent_transactions(
                user_id, self._recent_limit
            )
        return SummaryReport(
            total_balance=sum(
                row.balance for row in balances if not row.is_archived
            ),
            monthly_income=totals.get("income", 0),
            monthly_expense=totals.get("expense", 0),
            recent_transactions=recent,
        )


__all__ = ["GetSummaryUseCase"]
