# ABOUTME: Shared pytest fixtures for shelfsync tests.
# ABOUTME: Provides sample records, an in-memory fake store, and a json-server transport.

import pytest

from shelfsync.catalog.mapping import record_from_json
from shelfsync.catalog.types import BookFields, BookRecord, BookStatus
from tests.fixtures.fake_store import FakeRecordStore
from tests.fixtures.json_server import JsonServer
from tests.fixtures.store_responses import BOOKS


@pytest.fixture
def sample_records() -> list[BookRecord]:
    """Four saved records: two Science Fiction, two Romance."""
    return [record_from_json(book) for book in BOOKS]


@pytest.fixture
def new_fields() -> BookFields:
    """Fields for a book that has not been saved yet."""
    return BookFields(
        title="The Left Hand of Darkness",
        author="Ursula K. Le Guin",
        genre="Science Fiction",
        published_year=1969,
        status=BookStatus.AVAILABLE,
    )


@pytest.fixture
def fake_store(sample_records: list[BookRecord]) -> FakeRecordStore:
    """An in-memory store pre-loaded with the sample records."""
    return FakeRecordStore(sample_records)


@pytest.fixture
def json_server() -> JsonServer:
    """A json-server style /books resource pre-loaded with the sample books."""
    return JsonServer(BOOKS)
