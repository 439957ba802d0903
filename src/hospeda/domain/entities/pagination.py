"""Pagination parameters and paginated results."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationParams:
    """Validated page/page size pair.

    Attributes:
        page: 1-indexed page number.
        page_size: Items per page, between 1 and 100.
    """

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ServiceError(ServiceErrorCode.VALIDATION_ERROR, "page must be >= 1")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ServiceError(
                ServiceErrorCode.VALIDATION_ERROR,
                f"page_size must be between 1 and {MAX_PAGE_SIZE}",
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """One page of items plus paging metadata."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1
