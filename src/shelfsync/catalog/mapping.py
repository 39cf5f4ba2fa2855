# ABOUTME: Converts between BookRecord/BookFields and the store's JSON objects.
# ABOUTME: Handles camelCase wire keys and rejects malformed payloads with ValidationError.

from typing import Any

from shelfsync.catalog.types import BookFields, BookRecord, BookStatus
from shelfsync.errors import ValidationError

_REQUIRED_KEYS = ("title", "author", "genre", "publishedYear", "status")


def fields_to_json(fields: BookFields) -> dict[str, Any]:
    """Convert BookFields to a JSON-ready dict (no id).

    Optional fields are omitted when unset rather than sent as null.
    """
    data: dict[str, Any] = {
        "title": fields.title,
        "author": fields.author,
        "genre": fields.genre,
        "publishedYear": fields.published_year,
        "status": fields.status.value,
    }
    if fields.cover_image:
        data["coverImage"] = fields.cover_image
    if fields.description:
        data["description"] = fields.description
    return data


def record_to_json(record: BookRecord) -> dict[str, Any]:
    """Convert a BookRecord to its JSON object, including the id when saved."""
    data = fields_to_json(record.fields)
    if record.is_saved:
        data = {"id": record.id, **data}
    return data


def _parse_year(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"publishedYear must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    raise ValidationError(f"publishedYear must be an integer, got {value!r}")


def _parse_status(value: Any) -> BookStatus:
    try:
        return BookStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown status {value!r}") from exc


def fields_from_json(data: Any) -> BookFields:
    """Parse the editable fields of a store JSON object.

    Raises:
        ValidationError: If the object is not a dict, a required key is
            missing, or a value has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    return BookFields(
        title=str(data["title"]),
        author=str(data["author"]),
        genre=str(data["genre"]),
        published_year=_parse_year(data["publishedYear"]),
        status=_parse_status(data["status"]),
        cover_image=data.get("coverImage") or None,
        description=data.get("description") or None,
    )


def record_from_json(data: Any) -> BookRecord:
    """Parse a store JSON object into a BookRecord.

    A missing or null id yields an unsaved record; callers that build the
    collection snapshot are responsible for dropping those.
    """
    fields = fields_from_json(data)
    return BookRecord(id=data.get("id"), fields=fields)
