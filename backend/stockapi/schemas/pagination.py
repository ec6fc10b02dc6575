"""Pagination schemas and utilities."""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


def clamp_page(page: int, page_size: int, default_size: int, max_size: int) -> tuple[int, int]:
    """Coerce out-of-range paging parameters instead of rejecting them.

    ``page < 1`` becomes 1, ``page_size < 1`` becomes the default and sizes
    above ``max_size`` are capped.
    """
    if page < 1:
        page = 1
    if page_size < 1:
        page_size = default_size
    if page_size > max_size:
        page_size = max_size
    return page, page_size


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic page-numbered response wrapper."""

    items: List[T]
    total_items: int = Field(description="Total number of items matching the query")
    page: int = Field(description="1-indexed page number")
    page_size: int = Field(description="Maximum items per page")
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def create(
        cls,
        items: List[T],
        total_items: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response."""
        total_pages = math.ceil(total_items / page_size) if page_size else 0
        return cls(
            items=items,
            total_items=total_items,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )


def paginate_query(db: Session, query: Select, page: int = 1, page_size: int = 20):
    """
    Apply page-number pagination to a SQLAlchemy select.

    Args:
        db: Session to execute with
        query: Ordered select statement
        page: 1-indexed page number
        page_size: Maximum items to return

    Returns:
        Tuple of (page items, total count)
    """
    total = db.execute(select(func.count()).select_from(query.order_by(None).subquery())).scalar_one()
    items = db.execute(query.offset((page - 1) * page_size).limit(page_size)).scalars().all()
    return list(items), total
