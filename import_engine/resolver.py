"""
import_engine.resolver - Free-text category name → categories.id.

Names are normalised to slug form (accents stripped, lower-cased,
whitespace runs → "-") and matched against categories.slug.  prefetch()
loads every slug a sheet mentions in one query so that resolve() is a
dictionary lookup rather than a round-trip per row.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import Category
from import_engine.errors import AmbiguousCategory, CategoryNotFound

logger = logging.getLogger(__name__)

# Letters NFKD leaves alone because they are not base + combining mark
_UNDECOMPOSABLE = str.maketrans({
    "đ": "d", "Đ": "D", "ø": "o", "Ø": "O", "ł": "l", "Ł": "L",
    "ß": "ss", "æ": "ae", "Æ": "AE", "œ": "oe", "Œ": "OE",
})

_WS_RE = re.compile(r"\s+")


def category_slug(name: str) -> str:
    """'  Đồ Văn  Phòng ' → 'do-van-phong'"""
    text = unicodedata.normalize("NFKD", name.strip().translate(_UNDECOMPOSABLE))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _WS_RE.sub("-", text.lower())


class CategoryResolver:
    """
    Request-scoped cache of slug → [category ids].

    Slugs never prefetched are looked up on demand, so the resolver is
    still correct if a caller skips prefetch().
    """

    def __init__(self, session: Session):
        self._session = session
        self._ids: dict[str, list[int]] = {}

    def prefetch(self, names: Iterable) -> int:
        """Load all distinct slugs for `names`; returns how many were asked."""
        slugs = {
            category_slug(n) for n in names
            if isinstance(n, str) and n.strip()
        } - self._ids.keys()
        if not slugs:
            return 0
        self._load(slugs)
        return len(slugs)

    def resolve(self, name: str) -> int:
        """Return the category id for `name` or raise a LookupError subclass."""
        key = category_slug(name)
        if key not in self._ids:
            self._load({key})

        ids = self._ids[key]
        if not ids:
            raise CategoryNotFound(name)
        if len(ids) > 1:
            logger.warning(f"Category slug {key!r} matches ids {ids}; refusing to pick one")
            raise AmbiguousCategory(name, len(ids))
        return ids[0]

    # ── Internal ───────────────────────────────────────────────────────

    def _load(self, slugs: set[str]) -> None:
        for s in slugs:
            self._ids.setdefault(s, [])
        stmt = select(Category.id, Category.slug).where(Category.slug.in_(slugs))
        for cat_id, cat_slug in self._session.execute(stmt):
            self._ids[cat_slug].append(cat_id)
