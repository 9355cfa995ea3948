"""DTOs for keyset pagination over organization-scoped collections."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationQuery:
    """Page request: page size and the ID of the last entity already seen."""

    items_per_page: int
    last_id: str | None = None

    def __post_init__(self) -> None:
        if self.items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of results.

    last_id is the cursor for the next page, or None when this is the last page.
    """

    items: list[T] = field(default_factory=list)
    last_id: str | None = None
