"""Envelope and pagination schemas shared by every endpoint."""

from datetime import datetime, timezone
from math import ceil
from typing import Any, Generic, TypeVar

from pydantic import Field

from fintrack.schemas.base import CamelModel

T = TypeVar("T")


class ApiResponse(CamelModel):
    success: bool
    message: str | None = None
    data: Any = None
    error: str | None = None
    path: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Page(CamelModel, Generic[T]):
    content: list[T]
    page_number: int = 0
    page_size: int = 20
    total_elements: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False

    @classmethod
    def of(cls, items: list[T], page: int, size: int) -> "Page[T]":
        """Slice ``items`` into a zero-based page."""
        total = len(items)
        pages = ceil(total / size) if size > 0 else 0
        start = page * size
        return cls(
            content=items[start:start + size],
            page_number=page,
            page_size=size,
            total_elements=total,
            total_pages=pages,
            has_next=page + 1 < pages,
            has_previous=page > 0,
        )
