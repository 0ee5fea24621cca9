"""Sort, filter and paginate helpers shared by the list endpoints.

These work on any list of records (dataclasses or dicts), so each list
screen only has to say which fields it searches and which columns it sorts.
"""
import math
from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

SORT_DIRECTIONS = ('asc', 'desc')

MAX_PER_PAGE = 100


class Pagination:
    """
    One page of an in-memory list.

    Exposes the same attribute names as a Flask-SQLAlchemy pagination object
    (items, total, page, pages, has_prev, has_next, prev_num, next_num).
    """

    def __init__(self, items: List[Any], page: int, per_page: int, total: int):
        self.items = items
        self.page = page
        self.per_page = per_page
        self.total = total

    @property
    def pages(self) -> int:
        # An empty list still renders as "Página 1 de 1"
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def prev_num(self) -> Optional[int]:
        return self.page - 1 if self.has_prev else None

    @property
    def next_num(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None

    def to_dict(self, serialize: Callable[[Any], Any] = None) -> dict:
        serialize = serialize or (lambda item: item.to_dict())
        return {
            'items': [serialize(item) for item in self.items],
            'page': self.page,
            'per_page': self.per_page,
            'pages': self.pages,
            'total': self.total,
            'has_prev': self.has_prev,
            'has_next': self.has_next,
        }


def paginate(items: Sequence[Any], page: int = 1, per_page: int = 8) -> Pagination:
    """
    Slice ``items`` into a page.

    Page numbers below 1 are treated as 1 and pages past the end are clamped
    to the last page. ``per_page`` outside 1..MAX_PER_PAGE falls back to 8.
    """
    if per_page < 1 or per_page > MAX_PER_PAGE:
        per_page = 8

    total = len(items)
    pages = max(1, math.ceil(total / per_page))
    page = min(max(page or 1, 1), pages)

    start = (page - 1) * per_page
    return Pagination(list(items[start:start + per_page]), page, per_page, total)


def _sort_value(value):
    if isinstance(value, str):
        return value.lower()
    return value


def sort_records(items: Iterable[Any], key: Callable[[Any], Any], direction: Optional[str]) -> List[Any]:
    """
    Return a sorted copy of ``items``.

    Text is compared case-insensitively. Records whose key is None always go
    last, whatever the direction. A direction other than 'asc'/'desc' keeps
    the original order.
    """
    items = list(items)
    if direction not in SORT_DIRECTIONS:
        return items

    present = [item for item in items if key(item) is not None]
    missing = [item for item in items if key(item) is None]
    present.sort(key=lambda item: _sort_value(key(item)), reverse=(direction == 'desc'))
    return present + missing


def toggle_sort(column: Optional[str], direction: Optional[str], clicked: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Next sort state after a column header click.

    A new column starts ascending; the same column cycles
    asc -> desc -> unsorted.
    """
    if column != clicked:
        return clicked, 'asc'
    if direction == 'asc':
        return clicked, 'desc'
    if direction == 'desc':
        return None, None
    return clicked, 'asc'


def matches_search(query: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match of ``query`` against any field."""
    if not query:
        return True
    needle = query.strip().lower()
    return any(needle in field.lower() for field in fields if field)


def filter_by_date_range(items: Iterable[Any], get_date: Callable[[Any], Optional[date]],
                         start: Optional[date], end: Optional[date]) -> List[Any]:
    """
    Keep items whose date falls in ``[start, end]`` (both inclusive).

    When either bound is missing the range filter is off. Items without a
    date are kept.
    """
    items = list(items)
    if start is None or end is None:
        return items

    kept = []
    for item in items:
        value = get_date(item)
        if value is None or start <= value <= end:
            kept.append(item)
    return kept


def requested_sort(args) -> Tuple[Optional[str], Optional[str]]:
    """
    Sort state of a list request.

    ``ordenar``/``direcao`` carry the current state; ``alternar`` names a
    clicked column header and advances it with toggle_sort.
    """
    column, direction = args.get('ordenar'), args.get('direcao')
    clicked = args.get('alternar')
    if clicked:
        column, direction = toggle_sort(column, direction, clicked)
    return column, direction
