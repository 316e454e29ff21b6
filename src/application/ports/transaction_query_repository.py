"""Port for filtered, sorted and paginated transaction reads."""

from typing import Protocol

from src.domain.models import Pagination, TransactionFilter, TransactionView


class TransactionQueryRepositoryPort(Protocol):
    """Port exposing the transaction log for listing."""

    def find_all(
        self,
        user_id: str,
        criteria: TransactionFilter,
        pagination: Pagination,
    ) -> tuple[list[TransactionView], int]:
        """Return one page of matching transactions and the total count."""


__all__ = ["TransactionQueryRepositoryPort"]
