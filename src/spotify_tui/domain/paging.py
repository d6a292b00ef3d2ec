"""
In-memory page cache for paged Spotify resources.

Saved tracks, saved albums, followed artists, saved shows and similar
resources are fetched one page at a time. Every fetched page is retained,
so moving back never touches the network and moving forward only fetches
when the next page has not been seen yet.
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

from loguru import logger


@dataclass
class Page:
    """One page of a paged resource.

    Attributes:
        items: Rows of this page
        offset: Index of the first row within the whole resource
        limit: Requested page size
        total: Size of the whole resource (0 when unknown)
        next: Continuation URL; None at the end of the data
        cursor: Cursor for cursor-paged resources (followed artists,
            recently played)
    """

    items: list[Any] = field(default_factory=list)
    offset: int = 0
    limit: int = 0
    total: int = 0
    next: Optional[str] = None
    cursor: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Page":
        """Build a page from a Spotify paging object.

        Handles both offset paging and cursor paging (``cursors.after``).

        Example:
            >>> Page.from_api({"items": [1, 2], "offset": 0, "limit": 2,
            ...                "total": 5, "next": "https://..."}).total
            5
        """
        cursors = payload.get("cursors") or {}
        return cls(
            items=list(payload.get("items") or []),
            offset=payload.get("offset") or 0,
            limit=payload.get("limit") or 0,
            total=payload.get("total") or 0,
            next=payload.get("next"),
            cursor=cursors.get("after"),
        )


class PageRequest(NamedTuple):
    """Where the next page of a resource starts."""

    offset: int
    cursor: Optional[str] = None


@dataclass
class PaginatedCache:
    """Ordered pages of one resource plus the page currently displayed.

    ``fetching`` is set between dispatching a page request and writing the
    result back, so at most one request per cache is ever outstanding.
    """

    pages: list[Page] = field(default_factory=list)
    index: int = 0
    fetching: bool = False

    def add_page(self, page: Page) -> None:
        """Append a page and select it."""
        self.pages.append(page)
        self.index = len(self.pages) - 1

    def get_current(self) -> Optional[Page]:
        """Return the displayed page, or None when nothing was fetched yet."""
        if not self.pages:
            return None
        return self.pages[self.index]

    def get_results(self, at_index: int) -> Optional[Page]:
        if 0 <= at_index < len(self.pages):
            return self.pages[at_index]
        return None

    def current_items(self) -> list[Any]:
        page = self.get_current()
        return page.items if page else []

    def advance(self) -> Optional[PageRequest]:
        """Move to the next page.

        Selects an already fetched page when there is one. Otherwise marks
        the cache as fetching and returns the request the caller must
        dispatch; returns None when a fetch is already in flight or the
        current page is the last one.

        Returns:
            PageRequest to dispatch, or None if no fetch is needed
        """
        if self.index + 1 < len(self.pages):
            self.index += 1
            return None

        if self.fetching:
            logger.debug("Page fetch already in flight, ignoring advance")
            return None

        current = self.get_current()
        if current is None or not current.next:
            return None

        self.fetching = True
        return PageRequest(offset=current.offset + current.limit, cursor=current.cursor)

    def retreat(self) -> bool:
        """Move to the previous page. Never fetches.

        Returns:
            True if the displayed page changed
        """
        if self.index > 0:
            self.index -= 1
            return True
        return False

    def complete_fetch(self, page: Page) -> None:
        """Write back a fetched page: clear the guard, append and select."""
        self.fetching = False
        self.add_page(page)

    def fail_fetch(self) -> None:
        """Clear the guard after a failed request so it can be retried."""
        self.fetching = False

    def clear(self) -> None:
        self.pages = []
        self.index = 0
        self.fetching = False


def last_page_offset(total: int, page_size: int) -> int:
    """Offset used by jump-to-end on directly paged track tables.

    This is ``total - total % page_size``, which equals ``total`` itself
    when ``total`` is a multiple of ``page_size``.

    Args:
        total: Number of rows in the resource
        page_size: Rows per request

    Returns:
        Offset of the last page

    Examples:
        >>> last_page_offset(237, 100)
        200
        >>> last_page_offset(50, 100)
        0
    """
    if page_size <= 0:
        return 0
    return total - total % page_size
