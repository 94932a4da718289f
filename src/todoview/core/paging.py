"""Pure pagination helpers - no I/O dependencies."""

import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
PAGE_WINDOW = 5


@dataclass
class PageInfo:
    """Position of one page inside a filtered list."""

    page: int
    total_pages: int
    showing_from: int
    showing_to: int
    total: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def format(self) -> str:
        return f"Showing {self.showing_from} to {self.showing_to} of {self.total} results"


def page_slice(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """
    Items [(page-1)*page_size, page*page_size), clamped to what exists.

    Page numbers below 1 give an empty list.
    """
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def clamp_page(page: int, count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Keep a requested page inside [1, total_pages]."""
    return max(1, min(page, total_pages(count, page_size)))


def page_info(page: int, count: int, page_size: int = DEFAULT_PAGE_SIZE) -> PageInfo:
    return PageInfo(
        page=page,
        total_pages=total_pages(count, page_size),
        showing_from=(page - 1) * page_size + 1 if count > 0 else 0,
        showing_to=min(page * page_size, count),
        total=count,
    )


def page_window(page: int, pages: int, width: int = PAGE_WINDOW) -> list[int]:
    """
    Page numbers to offer around the current page.

    Centred on the current page where possible, shifted to stay inside
    [1, pages]. Nothing is offered when there is a single page.
    """
    if pages <= 1:
        return []
    start = max(1, page - width // 2)
    end = min(pages, start + width - 1)
    if end - start < width - 1:
        start = max(1, end - width + 1)
    return list(range(start, end + 1))


def count_summary(filtered: int, total: int, filters_active: bool) -> str:
    """Count line shown above the list."""
    if filters_active:
        return f"Showing {filtered} of {total} todos"
    return f"{total} todos total"
