# ABOUTME: Core catalog data structures shared by the store, cache, and view layers.
# ABOUTME: BookRecord pairs a store-assigned id with the editable BookFields.

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable

RecordId = str | int


class BookStatus(str, Enum):
    """Circulation status of a catalog entry. Values match the wire format."""

    AVAILABLE = "Available"
    ISSUED = "Issued"


@dataclass(frozen=True)
class BookFields:
    """Everything about a book except its identity.

    This is the payload sent on create and update. The store assigns the id,
    so a freshly entered book exists only as BookFields until it is saved.
    """

    title: str
    author: str
    genre: str
    published_year: int
    status: BookStatus = BookStatus.AVAILABLE
    cover_image: str | None = None
    description: str | None = None

    def merged(self, **changes: Any) -> "BookFields":
        """Return a copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass(frozen=True)
class BookRecord:
    """A cataloged book: store identity plus its fields."""

    id: RecordId | None
    fields: BookFields

    @property
    def is_saved(self) -> bool:
        """Whether the store has assigned this record an id."""
        return self.id is not None

    @property
    def title(self) -> str:
        return self.fields.title

    @property
    def author(self) -> str:
        return self.fields.author


def unique_genres(records: Iterable[BookRecord]) -> list[str]:
    """Distinct non-empty genres in the order they first appear."""
    seen: dict[str, None] = {}
    for record in records:
        if record.fields.genre:
            seen.setdefault(record.fields.genre, None)
    return list(seen)
