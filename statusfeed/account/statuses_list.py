from __future__ import annotations

import enum
import logging

from ..fetcher.controllers import ItemControllerRegistry
from ..fetcher.paged import PagedFetcher
from ..models import Status
from ..network.client import PageClient
from ..network.endpoints import Accounts, Endpoint

LOGGER = logging.getLogger(__name__)


class StatusesListMode(enum.Enum):
    BOOKMARKS = "bookmarks"
    FAVORITES = "favorites"

    @property
    def title(self) -> str:
        # Localisation key
        return f"accessibility.tabs.profile.picker.{self.value}"

    def endpoint(self, since_id: str | None) -> Endpoint:
        if self is StatusesListMode.BOOKMARKS:
            return Accounts.bookmarks(since_id=since_id)
        return Accounts.favorites(since_id=since_id)


class AccountStatusesListFetcher(PagedFetcher[Status]):
    def __init__(
        self,
        mode: StatusesListMode,
        *,
        client: PageClient,
        controllers: ItemControllerRegistry | None = None,
    ) -> None:
        super().__init__(
            client=client,
            endpoint_for=mode.endpoint,
            decode=Status.from_json,
            controllers=controllers,
            name=mode.value,
        )
        self.mode = mode

    @property
    def statuses(self) -> tuple[Status, ...]:
        return self.items

    async def fetch_newest_statuses(self, pull_to_refresh: bool = False) -> None:
        # Bookmarks and favourites reload the same way whether or not the user pulled
        LOGGER.debug("Fetching newest statuses", extra={"list": self.name, "pull_to_refresh": pull_to_refresh})
        await self.load_first_page()

    async def fetch_next_page(self) -> None:
        await self.load_next_page()

    def status_did_appear(self, status: Status) -> None:
        self.item_appeared(status)

    def status_did_disappear(self, status: Status) -> None:
        self.item_disappeared(status)
