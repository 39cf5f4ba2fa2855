# ABOUTME: Derived view engine: filters, searches, and paginates the collection snapshot.
# ABOUTME: compute_view is pure; identical inputs always give identical results.

import math
from dataclasses import dataclass
from typing import Sequence

from shelfsync.catalog.types import BookRecord
from shelfsync.view.state import ViewState


@dataclass(frozen=True)
class DerivedView:
    """One page of records plus the pagination metadata for the whole result."""

    page_items: tuple[BookRecord, ...]
    total_filtered: int
    total_pages: int
    page: int = 0

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1


def _matches(record: BookRecord, state: ViewState, needle: str) -> bool:
    fields = record.fields
    if needle and needle not in fields.title.lower() and needle not in fields.author.lower():
        return False
    if state.genre_filter is not None and fields.genre != state.genre_filter:
        return False
    if state.status_filter is not None and fields.status != state.status_filter:
        return False
    return True


def filter_records(snapshot: Sequence[BookRecord], state: ViewState) -> list[BookRecord]:
    """Apply search and attribute filters, preserving snapshot order.

    The search term is a case-insensitive substring of title or author;
    genre and status are exact matches. All conditions must hold.
    """
    needle = state.search_term.lower()
    return [record for record in snapshot if _matches(record, state, needle)]


def compute_view(snapshot: Sequence[BookRecord], state: ViewState) -> DerivedView:
    """Compute the page of records to show for the given view state.

    An out-of-range page yields an empty page_items; the page itself is
    left alone.
    """
    filtered = filter_records(snapshot, state)
    total = len(filtered)
    start = state.page * state.rows_per_page
    return DerivedView(
        page_items=tuple(filtered[start:start + state.rows_per_page]),
        total_filtered=total,
        total_pages=math.ceil(total / state.rows_per_page),
        page=state.page,
    )
