"""Domain models for transaction listing queries."""

import math
from dataclasses import dataclass
from datetime import date

from src.domain.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
)
from src.domain.models.ledger import TransactionView


@dataclass(frozen=True)
class TransactionFilter:
    """Validated listing filter; every criterion is optional.

    ``start_date``/``end_date`` are derived from a month and year pair and
    bound the range inclusively.
    """

    type: str | None = None
    account_id: str | None = None
    category_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None
    sort: str = DEFAULT_SORT_FIELD
    order: str = DEFAULT_SORT_ORDER


@dataclass(frozen=True)
class Pagination:
    """1-indexed page request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageMeta:
    """Pagination metadata returned with a page of items."""

    current_page: int
    items_per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> dict:
        return {
            "currentPage": self.current_page,
            "itemsPerPage": self.items_per_page,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }


@dataclass(frozen=True)
class TransactionPage:
    """A page of transactions and its metadata."""

    items: list[TransactionView]
    meta: PageMeta

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "meta": self.meta.to_dict(),
        }


__all__ = [
    "TransactionFilter",
    "Pagination",
    "PageMeta",
    "TransactionPage",
]
