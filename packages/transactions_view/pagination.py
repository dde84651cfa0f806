"""Page arithmetic: slicing, page counts and the pagination-control window."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# Maximum number of page buttons shown at once.
WINDOW_WIDTH: int = 5


def _check_page_size(page_size: int) -> None:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError("page_size must be a positive integer")


def total_pages(count: int, page_size: int) -> int:
    """Return ``ceil(count / page_size)``; zero records means zero pages."""

    _check_page_size(page_size)
    if count <= 0:
        return 0
    return -(-count // page_size)


def paginate(records: Sequence[T], page: int, page_size: int) -> list[T]:
    """Return the items of 1-based ``page``.

    The last page may be short. Pages past the end (or below 1) yield an empty
    list rather than an error.
    """

    _check_page_size(page_size)
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(records[start : start + page_size])


def page_window(current_page: int, total: int, *, width: int = WINDOW_WIDTH) -> list[int]:
    """Return up to ``width`` contiguous page numbers around ``current_page``.

    The window starts two pages before the current one, is clipped to
    ``[1, total]``, and slides back near the end so it stays full whenever
    ``total >= width``.

    >>> page_window(1, 3)
    [1, 2, 3]
    >>> page_window(7, 10)
    [5, 6, 7, 8, 9]
    >>> page_window(10, 10)
    [6, 7, 8, 9, 10]
    """

    if total <= 0:
        return []
    span = width - 1
    start = max(1, current_page - width // 2)
    end = min(total, start + span)
    if end - start < span:
        start = max(1, end - span)
    return list(range(start, end + 1))


def page_range(current_page: int, page_size: int, total_count: int) -> tuple[int, int]:
    """Return the 1-based ``(first, last)`` item positions shown on a page.

    Used for the "Showing X to Y of N results" footer. ``(0, 0)`` when there
    is nothing to show.
    """

    _check_page_size(page_size)
    if total_count <= 0 or current_page < 1:
        return (0, 0)
    first = (current_page - 1) * page_size + 1
    if first > total_count:
        return (0, 0)
    return (first, min(current_page * page_size, total_count))


__all__ = ["WINDOW_WIDTH", "page_range", "page_window", "paginate", "total_pages"]
