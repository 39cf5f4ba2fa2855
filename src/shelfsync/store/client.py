# ABOUTME: RecordStore protocol and its HTTP implementation for the /books resource.
# ABOUTME: Performs list/create/update/delete and returns whole BookRecords.

import logging
from typing import Any, Protocol, runtime_checkable

from shelfsync.catalog.mapping import fields_to_json, record_from_json
from shelfsync.catalog.types import BookFields, BookRecord, RecordId
from shelfsync.errors import ValidationError
from shelfsync.store.http import HttpClient

logger = logging.getLogger(__name__)

_COLLECTION_PATH = "/books"


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for the remote book collection.

    Implementations return whole records and raise StoreError subclasses
    (TransportError, NotFoundError, ValidationError) on failure.
    """

    async def list(self) -> list[BookRecord]: ...

    async def create(self, fields: BookFields) -> BookRecord: ...

    async def update(self, record_id: RecordId, fields: BookFields) -> BookRecord: ...

    async def delete(self, record_id: RecordId) -> None: ...


class HttpRecordStore:
    """RecordStore backed by a JSON REST collection (json-server style).

    Uses a dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    async def list(self) -> list[BookRecord]:
        """Fetch the whole collection, dropping entries that have no id."""
        data = await self._http.request("GET", _COLLECTION_PATH)
        if not isinstance(data, list):
            raise ValidationError(f"Expected a JSON array from GET {_COLLECTION_PATH}")

        records: list[BookRecord] = []
        for item in data:
            record = record_from_json(item)
            if not record.is_saved:
                logger.warning("Dropping unsaved record from list response: %s", record.title)
                continue
            records.append(record)
        return records

    async def create(self, fields: BookFields) -> BookRecord:
        """POST the fields; the store assigns the id."""
        data = await self._http.request("POST", _COLLECTION_PATH, json=fields_to_json(fields))
        return self._saved_record(data, "POST")

    async def update(self, record_id: RecordId, fields: BookFields) -> BookRecord:
        """PUT the full field set for an existing record."""
        data = await self._http.request(
            "PUT", f"{_COLLECTION_PATH}/{record_id}", json=fields_to_json(fields)
        )
        return self._saved_record(data, "PUT")

    async def delete(self, record_id: RecordId) -> None:
        await self._http.request("DELETE", f"{_COLLECTION_PATH}/{record_id}")

    @staticmethod
    def _saved_record(data: Any, method: str) -> BookRecord:
        record = record_from_json(data)
        if not record.is_saved:
            raise ValidationError(f"{method} {_COLLECTION_PATH} returned a record without an id")
        return record

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HttpRecordStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
