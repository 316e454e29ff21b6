"""Use case to list a user's transactions with filters and pagination."""

from src.application.ports.transaction_query_repository import (
    TransactionQueryRepositoryPort,
)
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.models import (
    PageMeta,
    Pagination,
    TransactionFilter,
    TransactionPage,
)
from src.infrastructure.logging.logger import get_app_logger


class ListTransactionsUseCase:
    """Return one page of the user's transactions."""

    def __init__(
        self,
        query_repository: TransactionQueryRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            query_repository: Port running the filtered listing query.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._query_repository = query_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        criteria: TransactionFilter | None = None,
        pagination: Pagination | None = None,
    ) -> TransactionPage:
        """Return the requested page.

        Items are ordered by the requested sort field with the transaction id
        as tie-breaker, so consecutive pages never overlap.

        Args:
            user_id: Owner of the transactions.
            criteria: Validated filter, see ``build_transaction_filter``.
            pagination: Validated page request, see ``build_pagination``.

        Returns:
            TransactionPage: Items plus pagination metadata.
        """
        criteria = criteria or TransactionFilter()
        pagination = pagination or Pagination()
        self._logger.info(
            f"Listing transactions for user={user_id} "
            f"page={pagination.page} limit={pagination.limit} "
            f"sort={criteria.sort} {criteria.order}"
        )
        with translate_storage_errors(
            self._logger, "list transactions", f"user={user_id}"
        ):
            items, total = self._query_repository.find_all(
                user_id, criteria, pagination
            )
        return TransactionPage(
            items=items,
            meta=PageMeta(
                current_page=pagination.page,
                items_per_page=pagination.limit,
                total_items=total,
            ),
        )


__all__ = ["ListTransactionsUseCase"]
