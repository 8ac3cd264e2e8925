"""Shared Pydantic schemas for paginated listings."""
from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a listing plus totals computed before slicing."""

    items: list[T] = Field(default_factory=list)
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, items: list[T], *, total: int, page: int, limit: int) -> Page[T]:
        """Assemble a page envelope; ``page`` is 1-indexed."""
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def normalize_paging(page: int, limit: int, max_limit: int) -> tuple[int, int]:
    """Clamp a 1-indexed page and a page size into their valid ranges."""
    return max(page, 1), min(max(limit, 1), max_limit)
