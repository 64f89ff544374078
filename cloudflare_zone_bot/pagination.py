import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    number: int
    total_pages: int
    start: int

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages - 1

    def numbered(self) -> list[tuple[int, T]]:
        """Items paired with their 1-based position in the full list."""
        return [(self.start + offset + 1, item) for offset, item in enumerate(self.items)]


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """Slice one page out of ``items``, clamping ``page`` into range.

    An empty sequence yields a single empty page.
    """
    if per_page < 1:
        raise ValueError("per_page must be at least 1")

    total_pages = max(1, math.ceil(len(items) / per_page))
    page = min(max(page, 0), total_pages - 1)
    start = page * per_page
    end = min(start + per_page, len(items))
    return Page(items=items[start:end], number=page, total_pages=total_pages, start=start)
