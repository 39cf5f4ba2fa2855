# ABOUTME: Unit tests for CollectionCache.
# ABOUTME: Covers freshness, fetch de-duplication, invalidation ordering, and stale-on-error.

import asyncio

import pytest

from shelfsync.catalog.types import BookFields, BookRecord
from shelfsync.errors import TransportError
from shelfsync.sync.cache import CollectionCache
from shelfsync.sync.mutations import MutationCoordinator
from shelfsync.sync.notify import RecordingNotifier
from tests.fixtures.fake_store import FakeRecordStore


class TestGet:
    """Tests for CollectionCache.get."""

    def test_starts_stale_and_empty(self, fake_store: FakeRecordStore) -> None:
        """A new cache has no records and must fetch on first read."""
        cache = CollectionCache(fake_store)
        assert cache.snapshot == ()
        assert cache.is_stale
        assert cache.version == 0

    def test_first_get_fetches(
        self, fake_store: FakeRecordStore, sample_records: list[BookRecord]
    ) -> None:
        """The first get() lists the store and returns its records in order."""
        cache = CollectionCache(fake_store)
        records = asyncio.run(cache.get())
        assert list(records) == sample_records
        assert fake_store.list_calls == 1
        assert not cache.is_stale
        assert cache.version == 1

    def test_fresh_get_does_not_fetch(self, fake_store: FakeRecordStore) -> None:
        """A fresh snapshot is returned without another list() call."""
        cache = CollectionCache(fake_store)

        async def scenario() -> None:
            first = await cache.get()
            second = await cache.get()
            assert second is first

        asyncio.run(scenario())
        assert fake_store.list_calls == 1

    def test_concurrent_gets_share_one_fetch(self, fake_store: FakeRecordStore) -> None:
        """N overlapping get() calls cause exactly one list() call."""
        cache = CollectionCache(fake_store)

        async def scenario() -> list[tuple[BookRecord, ...]]:
            fake_store.list_gate = asyncio.Event()
            tasks = [asyncio.create_task(cache.get()) for _ in range(5)]
            await asyncio.sleep(0)
            assert cache.is_fetching
            fake_store.list_gate.set()
            return await asyncio.gather(*tasks)

        results = asyncio.run(scenario())
        assert fake_store.list_calls == 1
        assert all(result is results[0] for result in results)
        assert not cache.is_fetching

    def test_cancelled_caller_does_not_abort_shared_fetch(
        self, fake_store: FakeRecordStore
    ) -> None:
        """Cancelling one waiter leaves the fetch running for the others."""
        cache = CollectionCache(fake_store)

        async def scenario() -> tuple[BookRecord, ...]:
            fake_store.list_gate = asyncio.Event()
            abandoned = asyncio.create_task(cache.get())
            waiting = asyncio.create_task(cache.get())
            await asyncio.sleep(0)
            abandoned.cancel()
            fake_store.list_gate.set()
            with pytest.raises(asyncio.CancelledError):
                await abandoned
            return await waiting

        records = asyncio.run(scenario())
        assert len(records) == 4
        assert fake_store.list_calls == 1

    def test_unsaved_records_never_enter_snapshot(
        self, fake_store: FakeRecordStore
    ) -> None:
        """Records without an id are filtered out of the snapshot."""
        fake_store.unsaved.append(
            BookRecord(id=None, fields=BookFields(title="Draft", author="Nobody",
                                                  genre="Drafts", published_year=2020))
        )
        cache = CollectionCache(fake_store)
        records = asyncio.run(cache.get())
        assert all(record.is_saved for record in records)
        assert len(records) == 4


class TestInvalidate:
    """Tests for CollectionCache.invalidate."""

    def test_invalidate_only_flags(self, fake_store: FakeRecordStore) -> None:
        """invalidate() marks the cache stale without fetching."""
        cache = CollectionCache(fake_store)
        asyncio.run(cache.get())
        cache.invalidate()
        assert cache.is_stale
        assert fake_store.list_calls == 1

    def test_get_after_invalidate_matches_store(
        self, fake_store: FakeRecordStore, new_fields: BookFields
    ) -> None:
        """After invalidate(), get() returns the store's current list()."""
        cache = CollectionCache(fake_store)

        async def scenario() -> None:
            await cache.get()
            await fake_store.create(new_fields)
            cache.invalidate()
            records = await cache.get()
            assert list(records) == await fake_store.list()

        asyncio.run(scenario())

    def test_repeated_invalidations_coalesce(self, fake_store: FakeRecordStore) -> None:
        """Several invalidations before a read cause a single refetch."""
        cache = CollectionCache(fake_store)

        async def scenario() -> None:
            await cache.get()
            cache.invalidate()
            cache.invalidate()
            cache.invalidate()
            await cache.get()

        asyncio.run(scenario())
        assert fake_store.list_calls == 2

    def test_invalidate_during_fetch_keeps_cache_stale(
        self, fake_store: FakeRecordStore
    ) -> None:
        """A fetch that started before an invalidation does not clear staleness."""
        cache = CollectionCache(fake_store)

        async def scenario() -> None:
            fake_store.list_gate = asyncio.Event()
            pending = asyncio.create_task(cache.get())
            while fake_store.list_calls < 1:
                await asyncio.sleep(0)
            cache.invalidate()
            fake_store.list_gate.set()
            await pending
            assert cache.is_stale
            fake_store.list_gate = None
            await cache.get()
            assert not cache.is_stale

        asyncio.run(scenario())
        assert fake_store.list_calls == 2

    def test_get_after_delete_during_fetch_waits_for_fresh_list(
        self, fake_store: FakeRecordStore
    ) -> None:
        """A get() issued after a delete never returns the pre-delete listing."""
        cache = CollectionCache(fake_store)
        coordinator = MutationCoordinator(fake_store, cache, RecordingNotifier())

        async def scenario() -> tuple[tuple[BookRecord, ...], tuple[BookRecord, ...]]:
            fake_store.list_gate = asyncio.Event()
            early = asyncio.create_task(cache.get())
            while fake_store.list_calls < 1:
                await asyncio.sleep(0)
            await coordinator.delete(1)
            late = asyncio.create_task(cache.get())
            await asyncio.sleep(0)
            fake_store.list_gate.set()
            return await early, await late

        before_delete, after_delete = asyncio.run(scenario())
        assert 1 in [record.id for record in before_delete]
        assert 1 not in [record.id for record in after_delete]
        assert cache.snapshot is after_delete
        assert not cache.is_stale
        assert fake_store.list_calls == 2
        assert fake_store.max_concurrent_lists == 1

    def test_callers_after_invalidation_join_the_follow_up_fetch(
        self, fake_store: FakeRecordStore
    ) -> None:
        """Callers arriving after an invalidation share one follow-up list()."""
        cache = CollectionCache(fake_store)

        async def scenario() -> list[tuple[BookRecord, ...]]:
            fake_store.list_gate = asyncio.Event()
            early = asyncio.create_task(cache.get())
            while fake_store.list_calls < 1:
                await asyncio.sleep(0)
            cache.invalidate()
            late = [asyncio.create_task(cache.get()) for _ in range(3)]
            await asyncio.sleep(0)
            fake_store.list_gate.set()
            await early
            return await asyncio.gather(*late)

        results = asyncio.run(scenario())
        assert fake_store.list_calls == 2
        assert all(result is results[0] for result in results)
        assert not cache.is_fetching


class TestFetchFailure:
    """Tests for stale-but-available behavior on fetch errors."""

    def test_failure_keeps_previous_snapshot(self, fake_store: FakeRecordStore) -> None:
        """A failed refetch raises but leaves the old records readable."""
        cache = CollectionCache(fake_store)

        async def scenario() -> tuple[BookRecord, ...]:
            before = await cache.get()
            cache.invalidate()
            fake_store.fail_list_with = TransportError("Connection refused")
            with pytest.raises(TransportError):
                await cache.get()
            return before

        before = asyncio.run(scenario())
        assert cache.snapshot == before
        assert cache.is_stale
        assert isinstance(cache.last_error, TransportError)
        assert cache.version == 1

    def test_error_reaches_every_waiting_caller(self, fake_store: FakeRecordStore) -> None:
        """All callers sharing a failed fetch receive the error."""
        cache = CollectionCache(fake_store)
        fake_store.fail_list_with = TransportError("Connection refused")

        async def scenario() -> list[BaseException | tuple[BookRecord, ...]]:
            tasks = [asyncio.create_task(cache.get()) for _ in range(3)]
            return await asyncio.gather(*tasks, return_exceptions=True)

        results = asyncio.run(scenario())
        assert all(isinstance(result, TransportError) for result in results)
        assert fake_store.list_calls == 1
        assert cache.snapshot == ()

    def test_next_get_retries_and_clears_error(self, fake_store: FakeRecordStore) -> None:
        """After a failure the next get() fetches again and clears last_error."""
        cache = CollectionCache(fake_store)

        async def scenario() -> tuple[BookRecord, ...]:
            fake_store.fail_list_with = TransportError("Connection refused")
            with pytest.raises(TransportError):
                await cache.get()
            fake_store.fail_list_with = None
            return await cache.get()

        records = asyncio.run(scenario())
        assert len(records) == 4
        assert cache.last_error is None
        assert fake_store.list_calls == 2
