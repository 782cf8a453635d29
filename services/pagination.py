"""
services.pagination - page/limit parsing and the shared listing envelope.
"""

from __future__ import annotations

from dataclasses import dataclass

from import_engine.validators import MAX_INTEGER
from services.errors import BadInput


@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def envelope(self, rows: list[dict], total: int) -> dict:
        return {
            "data": rows,
            "pagination": {"total": total, "page": self.page, "limit": self.limit},
        }


def parse_page(page, limit, *, default_limit: int, max_limit: int) -> Page:
    """Clamp limit to [1, max_limit]; page is 1-based."""
    try:
        page_num = int(page) if page not in (None, "") else 1
        limit_num = int(limit) if limit not in (None, "") else default_limit
    except (TypeError, ValueError):
        raise BadInput("page and limit must be integers") from None
    limit_num = min(max(limit_num, 1), max_limit)
    # keep OFFSET inside the store's integer range
    page_num = min(max(page_num, 1), MAX_INTEGER // limit_num)
    return Page(page=page_num, limit=limit_num)


def parse_bound(value, name: str, cast=float):
    """Optional numeric filter from a query string; '' and None mean absent."""
    if value in (None, ""):
        return None
    try:
        bound = cast(value)
    except (TypeError, ValueError):
        raise BadInput(f"{name} must be a number") from None
    if cast is int and abs(bound) > MAX_INTEGER:
        raise BadInput(f"{name} is out of range")
    return bound


def search_keyword(q: str) -> str:
    """Whitespace runs become '-', matching how slugs are written."""
    return "-".join(q.split())
