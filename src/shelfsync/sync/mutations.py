# ABOUTME: MutationCoordinator runs create/update/delete against the store.
# ABOUTME: Invalidates the collection cache only after a successful response.

import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from shelfsync.catalog.types import BookFields, BookRecord, RecordId
from shelfsync.errors import StoreError
from shelfsync.store.client import RecordStore
from shelfsync.sync.cache import CollectionCache
from shelfsync.sync.notify import LoggingNotifier, Notifier, Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Mutation(Generic[T]):
    """One mutation kind (add, update or delete) and its pending/error state.

    Nothing is written to the cache optimistically: success invalidates it,
    failure leaves it untouched, so there is never anything to roll back.
    Overlapping calls are not serialized, even for the same record id.
    """

    def __init__(
        self,
        action: str,
        operation: Callable[..., Awaitable[T]],
        cache: CollectionCache,
        notifier: Notifier,
    ) -> None:
        self.action = action
        self._operation = operation
        self._cache = cache
        self._notifier = notifier
        self._in_flight = 0
        self.last_result: T | None = None
        self.last_error: StoreError | None = None

    @property
    def is_pending(self) -> bool:
        """True while at least one call of this mutation is outstanding."""
        return self._in_flight > 0

    async def __call__(self, *args: Any, record_id: RecordId | None = None) -> T:
        """Submit the operation to the store.

        Raises:
            StoreError: Forwarded from the store after the failure is reported.
        """
        self._in_flight += 1
        try:
            result = await self._operation(*args)
        except StoreError as exc:
            self.last_error = exc
            logger.warning("Error during %s of book %s: %s", self.action, record_id, exc)
            self._notifier.notify(
                Outcome(action=self.action, success=False, record_id=record_id, error=exc)
            )
            raise
        finally:
            self._in_flight -= 1

        self.last_error = None
        self.last_result = result
        self._cache.invalidate()
        if record_id is None and isinstance(result, BookRecord):
            record_id = result.id
        self._notifier.notify(Outcome(action=self.action, success=True, record_id=record_id))
        return result


class MutationCoordinator:
    """Entry point for all writes to the collection."""

    def __init__(
        self,
        store: RecordStore,
        cache: CollectionCache,
        notifier: Notifier | None = None,
    ) -> None:
        notifier = notifier or LoggingNotifier()
        self._add: Mutation[BookRecord] = Mutation("add", store.create, cache, notifier)
        self._update: Mutation[BookRecord] = Mutation("update", store.update, cache, notifier)
        self._delete: Mutation[None] = Mutation("delete", store.delete, cache, notifier)

    @property
    def mutations(self) -> tuple[Mutation[Any], ...]:
        return (self._add, self._update, self._delete)

    @property
    def is_pending(self) -> bool:
        return any(m.is_pending for m in self.mutations)

    @property
    def add_state(self) -> Mutation[BookRecord]:
        return self._add

    @property
    def update_state(self) -> Mutation[BookRecord]:
        return self._update

    @property
    def delete_state(self) -> Mutation[None]:
        return self._delete

    async def add(self, fields: BookFields) -> BookRecord:
        """Create a book; the store assigns its id."""
        return await self._add(fields)

    async def update(self, record_id: RecordId, fields: BookFields) -> BookRecord:
        """Replace the fields of an existing book."""
        return await self._update(record_id, fields, record_id=record_id)

    async def delete(self, record_id: RecordId) -> None:
        await self._delete(record_id, record_id=record_id)
