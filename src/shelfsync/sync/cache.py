# ABOUTME: CollectionCache holds the in-memory snapshot of the remote book collection.
# ABOUTME: De-duplicates concurrent refetches and keeps stale data when a fetch fails.

import asyncio
import logging

from shelfsync.catalog.types import BookRecord
from shelfsync.errors import StoreError
from shelfsync.store.client import RecordStore

logger = logging.getLogger(__name__)


class CollectionCache:
    """The canonical local copy of the collection.

    The snapshot is an immutable tuple that is replaced in a single
    assignment, so readers never observe a partially applied fetch. At most
    one list() call is outstanding at a time; every get() that arrives while
    it runs awaits the same task, unless the cache was invalidated after that
    task started. Such a get() queues a follow-up fetch behind the running one
    and later callers join the follow-up.

    Not thread-safe: all access is expected from one event loop.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._snapshot: tuple[BookRecord, ...] = ()
        self._stale = True
        self._inflight: asyncio.Task[tuple[BookRecord, ...]] | None = None
        self._inflight_generation = 0
        # Bumped by invalidate(); lets a fetch detect invalidations it may predate.
        self._generation = 0
        self._version = 0
        self._last_error: StoreError | None = None

    @property
    def snapshot(self) -> tuple[BookRecord, ...]:
        """The current records, possibly stale. Never triggers I/O."""
        return self._snapshot

    @property
    def is_stale(self) -> bool:
        return self._stale

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None

    @property
    def version(self) -> int:
        """Incremented every time a fetch replaces the snapshot."""
        return self._version

    @property
    def last_error(self) -> StoreError | None:
        """The error from the most recent failed fetch, cleared on success."""
        return self._last_error

    async def get(self) -> tuple[BookRecord, ...]:
        """Return the snapshot, refetching first if it is stale.

        A fetch that started before the latest invalidate() may miss the
        write behind it, so it is not joined; a follow-up fetch is queued
        behind it instead.

        Raises:
            StoreError: If the refetch fails. The previous snapshot is kept
                and remains readable through the snapshot property.
        """
        if not self._stale:
            return self._snapshot
        if self._inflight is None or self._inflight_generation != self._generation:
            previous = self._inflight
            if previous is None:
                logger.debug("Snapshot stale, starting collection fetch")
            else:
                logger.debug("Snapshot invalidated during fetch, queueing a follow-up fetch")
            self._inflight_generation = self._generation
            self._inflight = asyncio.ensure_future(self._fetch(previous))
        # Shielded so a cancelled caller does not abort the shared fetch.
        return await asyncio.shield(self._inflight)

    def invalidate(self) -> None:
        """Mark the snapshot stale. The next get() refetches."""
        self._generation += 1
        self._stale = True

    async def _fetch(
        self, previous: asyncio.Task[tuple[BookRecord, ...]] | None = None
    ) -> tuple[BookRecord, ...]:
        this_task = asyncio.current_task()
        try:
            if previous is not None:
                # Its waiters see its outcome; this fetch only needs it finished.
                await asyncio.wait([previous])
            started_at = self._generation
            records = await self._store.list()
        except StoreError as exc:
            self._last_error = exc
            logger.warning("Collection fetch failed, keeping %d cached record(s): %s",
                           len(self._snapshot), exc)
            raise
        finally:
            if self._inflight is this_task:
                self._inflight = None

        self._snapshot = tuple(record for record in records if record.is_saved)
        self._version += 1
        self._last_error = None
        # An invalidation during the fetch may refer to a write this result misses.
        self._stale = self._generation != started_at
        logger.debug("Collection fetched: %d record(s), version %d",
                     len(self._snapshot), self._version)
        return self._snapshot
