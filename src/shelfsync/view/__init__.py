# ABOUTME: View package: the ViewState parameters and the pure derived view engine.
# ABOUTME: Re-exports state transitions and compute_view.

from shelfsync.view.engine import DerivedView, compute_view, filter_records
from shelfsync.view.state import (
    ViewMode,
    ViewState,
    reset_filters,
    set_genre_filter,
    set_page,
    set_rows_per_page,
    set_search_term,
    set_status_filter,
    set_view_mode,
)

__all__ = [
    "DerivedView",
    "ViewMode",
    "ViewState",
    "compute_view",
    "filter_records",
    "reset_filters",
    "set_genre_filter",
    "set_page",
    "set_rows_per_page",
    "set_search_term",
    "set_status_filter",
    "set_view_mode",
]
