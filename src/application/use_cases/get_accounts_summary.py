"""Use case to summarize a user's accounts."""

from src.application.ports.report_repository import ReportRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.models import AccountsSummary
from src.infrastructure.logging.logger import get_app_logger


class GetAccountsSummaryUseCase:
    """Return balance and count totals across the user's accounts."""

    def __init__(
        self,
        report_repository: ReportRepositoryPort,
        report_cache: ReportCache | None = None,
        logger=None,
    ) -> None:
        self._report_repository = report_repository
        self._logger = logger or get_app_logger()
        self._report_cache = report_cache or ReportCache(None, logger=self._logger)

    def execute(self, user_id: str) -> AccountsSummary:
        """Return balance and account counts, archived accounts included."""
        return self._report_cache.get_or_compute(
            user_id,
            ReportCache.build_key("accounts-summary"),
            lambda: self._compute(user_id),
        )

    def _compute(self, user_id: str) -> AccountsSummary:
        with translate_storage_errors(
            self._logger, "compute accounts summary", f"user={user_id}"
        ):
            rows = self._report_repository.fetch_account_balances(user_id)
        active = [row for row in rows if not row.is_archived]
        return AccountsSummary(
            total_balance=sum(row.balance for row in rows),
            total_accounts=len(rows),
            active_accounts=len(active),
        )


__all__ = ["GetAccountsSummaryUseCase"]
