# ABOUTME: Public API for the catalog data model.
# ABOUTME: Exports record types, status enum, and JSON mapping helpers.

from shelfsync.catalog.mapping import (
    fields_from_json,
    fields_to_json,
    record_from_json,
    record_to_json,
)
from shelfsync.catalog.types import (
    BookFields,
    BookRecord,
    BookStatus,
    RecordId,
    unique_genres,
)

__all__ = [
    "BookFields",
    "BookRecord",
    "BookStatus",
    "RecordId",
    "fields_from_json",
    "fields_to_json",
    "record_from_json",
    "record_to_json",
    "unique_genres",
]
