# ABOUTME: CatalogSession owns the cache, mutation coordinator, and current view state.
# ABOUTME: Recomputes the derived view on demand, memoized on snapshot version and state.

from typing import Any, Callable

import httpx

from shelfsync.catalog.types import BookRecord, unique_genres
from shelfsync.config import StoreConfig
from shelfsync.errors import StoreError
from shelfsync.store.client import HttpRecordStore, RecordStore
from shelfsync.store.http import ShelfsyncHttpClient
from shelfsync.sync.cache import CollectionCache
from shelfsync.sync.mutations import MutationCoordinator
from shelfsync.sync.notify import LoggingNotifier, Notifier, Outcome
from shelfsync.view.engine import DerivedView, compute_view
from shelfsync.view.state import ViewState


class CatalogSession:
    """The explicit owner of one user's view of the catalog.

    Holds the collection cache, the mutation coordinator, and the ViewState.
    A fetch failure never hides data: refresh() reports it to the notifier
    and computes the view from the last good snapshot.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        notifier: Notifier | None = None,
        state: ViewState | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.cache = CollectionCache(store)
        self.mutations = MutationCoordinator(store, self.cache, self.notifier)
        self._state = state or ViewState()
        self._memo_key: tuple[int, ViewState] | None = None
        self._memo_view: DerivedView | None = None

    @classmethod
    def from_config(
        cls,
        config: StoreConfig,
        *,
        notifier: Notifier | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogSession":
        http_client = ShelfsyncHttpClient(
            config.base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
            transport=transport,
        )
        return cls(
            HttpRecordStore(http_client),
            notifier=notifier,
            state=ViewState(rows_per_page=config.rows_per_page),
        )

    @property
    def state(self) -> ViewState:
        return self._state

    def apply(self, transition: Callable[..., ViewState], *args: Any) -> ViewState:
        """Run a ViewState transition, e.g. apply(set_search_term, "dune")."""
        self._state = transition(self._state, *args)
        return self._state

    @property
    def error(self) -> StoreError | None:
        """The most recent fetch error, if the snapshot could not be refreshed."""
        return self.cache.last_error

    async def records(self) -> tuple[BookRecord, ...]:
        """The collection, refreshed if stale; the retained snapshot if that fails."""
        try:
            return await self.cache.get()
        except StoreError as exc:
            self.notifier.notify(Outcome(action="fetch", success=False, error=exc))
            return self.cache.snapshot

    async def refresh(self) -> DerivedView:
        """Bring the snapshot up to date and return the view for the current state."""
        await self.records()
        return self.view()

    def view(self) -> DerivedView:
        """The derived view of the current snapshot. Never triggers I/O."""
        key = (self.cache.version, self._state)
        if key != self._memo_key or self._memo_view is None:
            self._memo_view = compute_view(self.cache.snapshot, self._state)
            self._memo_key = key
        return self._memo_view

    def genres(self) -> list[str]:
        return unique_genres(self.cache.snapshot)

    def find(self, record_id: Any) -> BookRecord | None:
        """Look up a cached record by id, comparing ids as strings."""
        wanted = str(record_id)
        for record in self.cache.snapshot:
            if str(record.id) == wanted:
                return record
        return None

    async def aclose(self) -> None:
        close = getattr(self.store, "aclose", None)
        if close is not None:
            await close()
