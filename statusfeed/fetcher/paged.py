from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from ..network.client import NetworkError, PageClient
from ..network.endpoints import Endpoint
from .controllers import ItemControllerRegistry
from .state import (
    Error,
    FetchError,
    FetchState,
    Idle,
    Loaded,
    Loading,
    NextPageState,
    SilentFetchError,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

StateListener = Callable[[FetchState], None]


class PagedFetcher(Generic[T]):
    """Accumulates the pages of one cursor-paginated list.

    Items are kept in server order; next pages are appended as they arrive and
    nothing is sorted or de-duplicated. Observers receive every state change
    through :meth:`subscribe`.

    At most one fetch is applied at a time. ``load_next_page`` is ignored while
    another fetch is running; ``load_first_page`` always starts and supersedes
    whatever is in flight, whose result is then dropped.
    """

    def __init__(
        self,
        *,
        client: PageClient,
        endpoint_for: Callable[[str | None], Endpoint],
        decode: Callable[[Any], T],
        controllers: ItemControllerRegistry | None = None,
        name: str = "list",
    ) -> None:
        self._client = client
        self._endpoint_for = endpoint_for
        self._decode = decode
        self._controllers = controllers
        self.name = name
        self._items: list[T] = []
        self._cursor: str | None = None
        self._state: FetchState = Idle()
        self._listeners: list[StateListener] = []
        self._generation = 0
        self._fetching = False

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        if isinstance(self._state, Loaded):
            return self._state.items
        return ()

    @property
    def cursor(self) -> str | None:
        return self._cursor

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load_first_page(self) -> None:
        self._generation += 1
        generation = self._generation
        self._cursor = None
        self._fetching = True
        self._set_state(Loading())
        try:
            page = await self._client.get_page(self._endpoint_for(None), self._decode)
        except NetworkError as exc:
            if generation != self._generation:
                LOGGER.debug("Dropped superseded first page failure", extra={"list": self.name})
                return
            error = FetchError(str(exc))
            error.__cause__ = exc
            self._fetching = False
            LOGGER.warning("First page failed", extra={"list": self.name, "url": exc.url, "status": exc.status})
            self._set_state(Error(error))
            return
        finally:
            if generation == self._generation:
                self._fetching = False

        if generation != self._generation:
            LOGGER.debug("Dropped superseded first page", extra={"list": self.name})
            return
        self._items = list(page.items)
        self._cursor = page.next_cursor
        self._notify_controllers()
        self._set_state(Loaded(tuple(self._items), self._next_page_state()))
        LOGGER.debug(
            "First page loaded",
            extra={"list": self.name, "count": len(self._items), "next_cursor": self._cursor},
        )

    async def load_next_page(self) -> None:
        cursor = self._cursor
        if cursor is None:
            return
        if self._fetching:
            LOGGER.debug("Skip next page: fetch in flight", extra={"list": self.name})
            return
        previous = self._state
        if not isinstance(previous, Loaded):  # pragma: no cover - a cursor only exists after a load
            return

        generation = self._generation
        self._fetching = True
        self._set_state(previous.with_next_page(NextPageState.LOADING_NEXT_PAGE))
        try:
            page = await self._client.get_page(self._endpoint_for(cursor), self._decode)
        except NetworkError as exc:
            if generation != self._generation:
                return
            error = SilentFetchError(str(exc))
            error.__cause__ = exc
            self._fetching = False
            LOGGER.warning(
                "Next page failed; keeping loaded items",
                extra={"list": self.name, "cursor": cursor, "url": exc.url, "status": exc.status},
            )
            self._set_state(Loaded(previous.items, previous.next_page, page_error=error))
            return
        finally:
            if generation == self._generation:
                self._fetching = False

        if generation != self._generation:
            LOGGER.debug("Dropped next page from a superseded list", extra={"list": self.name, "cursor": cursor})
            return
        self._items.extend(page.items)
        self._cursor = page.next_cursor
        self._notify_controllers()
        self._set_state(Loaded(tuple(self._items), self._next_page_state()))
        LOGGER.debug(
            "Next page loaded",
            extra={"list": self.name, "added": len(page.items), "count": len(self._items), "next_cursor": self._cursor},
        )

    def item_appeared(self, item: T) -> None:
        """Called when ``item`` becomes visible. Override to react (e.g. mark read)."""

    def item_disappeared(self, item: T) -> None:
        """Called when ``item`` leaves the screen."""

    def _next_page_state(self) -> NextPageState:
        return NextPageState.HAS_NEXT_PAGE if self._cursor is not None else NextPageState.NONE

    def _notify_controllers(self) -> None:
        if self._controllers is None:
            return
        self._controllers.update_controllers(tuple(self._items), self._client)

    def _set_state(self, state: FetchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                LOGGER.exception("State listener failed", extra={"list": self.name})
