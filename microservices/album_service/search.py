"""
Album Search Query Builder

Translates a validated AlbumSearchForm into a repository-neutral AlbumQuery.
No I/O - repositories decide how to execute the query.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import AlbumOrder, AlbumSearchForm

DEFAULT_COUNT = 100
MAX_COUNT = 1000

# Sort keys the repositories know how to order by
SORTABLE_FIELDS = ("favorite", "name", "created_at", "id")

# (field, descending)
SortKey = Tuple[str, bool]

ORDERINGS = {
    AlbumOrder.FAVORITES: [("favorite", True), ("name", False)],
    AlbumOrder.NAME: [("name", False)],
    AlbumOrder.NEWEST: [("created_at", True)],
    AlbumOrder.OLDEST: [("created_at", False)],
}


@dataclass
class AlbumQuery:
    """Filter, ordering and page of an album lookup"""
    text: Optional[str] = None
    name: Optional[str] = None
    favorite: Optional[bool] = None
    order_by: List[SortKey] = field(default_factory=lambda: [("id", False)])
    limit: Optional[int] = None
    offset: int = 0

    def matches(self, name: str, favorite: bool) -> bool:
        """In-memory evaluation of the filter part (used by fakes and caches)"""
        if self.text and self.text.lower() not in name.lower():
            return False
        if self.name is not None and name != self.name:
            return False
        if self.favorite is not None and favorite != self.favorite:
            return False
        return True


def clamp_page(count: int, offset: int) -> Tuple[int, int]:
    """
    Apply the page bounds.

    A count within 1..MAX_COUNT is used as given; anything else falls back
    to the first DEFAULT_COUNT results.
    """
    if 0 < count <= MAX_COUNT:
        return count, max(offset, 0)
    return DEFAULT_COUNT, 0


def build_album_query(form: AlbumSearchForm) -> AlbumQuery:
    """
    Build the repository query for a search form.

    Args:
        form: Validated search form

    Returns:
        AlbumQuery: limit/offset hold the page actually applied
    """
    limit, offset = clamp_page(form.count, form.offset)

    text = form.q.strip() if form.q else None

    order_by = list(ORDERINGS[form.order])
    # Stable pages across equal sort keys
    order_by.append(("id", False))

    return AlbumQuery(
        text=text or None,
        name=form.name,
        favorite=True if form.favorites else None,
        order_by=order_by,
        limit=limit,
        offset=offset,
    )


def favorites_query(limit: int = MAX_COUNT) -> AlbumQuery:
    """Favorite albums by name, as shown in client navigation"""
    return AlbumQuery(
        favorite=True,
        order_by=[("name", False), ("id", False)],
        limit=limit,
    )


__all__ = [
    "DEFAULT_COUNT",
    "MAX_COUNT",
    "SORTABLE_FIELDS",
    "AlbumQuery",
    "clamp_page",
    "build_album_query",
    "favorites_query",
]
