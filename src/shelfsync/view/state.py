# ABOUTME: ViewState holds the user-driven list parameters: search, filters, paging, layout.
# ABOUTME: Pure transition functions return new states; filter changes reset the page.

from dataclasses import dataclass, replace
from enum import Enum

from shelfsync.catalog.types import BookStatus

DEFAULT_ROWS_PER_PAGE = 10


class ViewMode(str, Enum):
    TABLE = "table"
    GRID = "grid"


@dataclass(frozen=True)
class ViewState:
    """Parameters that drive the derived view.

    Frozen and hashable so it can key the view memo. Change it only through
    the transition functions below.
    """

    search_term: str = ""
    genre_filter: str | None = None
    status_filter: BookStatus | None = None
    page: int = 0
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    view_mode: ViewMode = ViewMode.TABLE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")
        if self.rows_per_page <= 0:
            raise ValueError(f"rows_per_page must be > 0, got {self.rows_per_page}")

    @property
    def has_filters(self) -> bool:
        return bool(self.search_term) or self.genre_filter is not None or (
            self.status_filter is not None
        )


def set_search_term(state: ViewState, term: str) -> ViewState:
    return replace(state, search_term=term, page=0)


def set_genre_filter(state: ViewState, genre: str | None) -> ViewState:
    """Filter by exact genre. An empty string clears the filter."""
    return replace(state, genre_filter=genre or None, page=0)


def set_status_filter(state: ViewState, status: BookStatus | str | None) -> ViewState:
    """Filter by status. Accepts the enum or its wire value; empty clears it."""
    return replace(state, status_filter=BookStatus(status) if status else None, page=0)


def set_page(state: ViewState, page: int) -> ViewState:
    return replace(state, page=page)


def set_rows_per_page(state: ViewState, rows_per_page: int) -> ViewState:
    return replace(state, rows_per_page=rows_per_page, page=0)


def set_view_mode(state: ViewState, mode: ViewMode | str) -> ViewState:
    return replace(state, view_mode=ViewMode(mode))


def reset_filters(state: ViewState) -> ViewState:
    """Clear search and both filters, returning to the first page."""
    return replace(state, search_term="", genre_filter=None, status_filter=None, page=0)
