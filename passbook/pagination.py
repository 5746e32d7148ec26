"""Page slicing over an assembled ledger."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import LedgerEntry, Page

DEFAULT_PAGE_SIZE = 25


def total_pages_for(total: int, *, page_size: int) -> int:
    return math.ceil(total / max(1, page_size))


def paginate(
    entries: Sequence[LedgerEntry],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Return page ``page`` (1-based) of ``entries`` in their given order.

    A page past the end is empty; an empty ledger has zero pages.
    """

    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return Page(
        items=tuple(entries[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(entries),
        total_pages=total_pages_for(len(entries), page_size=page_size),
    )


__all__ = ["DEFAULT_PAGE_SIZE", "paginate", "total_pages_for"]
