from __future__ import annotations

import logging

from .account.statuses_list import AccountStatusesListFetcher, StatusesListMode
from .config import AppConfig
from .fetcher.controllers import StatusDataControllerRegistry
from .network.client import Client

LOGGER = logging.getLogger(__name__)


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.client = Client(config.instance, config.http)
        self.status_controllers = StatusDataControllerRegistry()

    def statuses_list(self, mode: StatusesListMode | None = None) -> AccountStatusesListFetcher:
        mode = mode or StatusesListMode(self.config.lists.mode)
        LOGGER.debug("Creating statuses list", extra={"mode": mode.value})
        return AccountStatusesListFetcher(mode, client=self.client, controllers=self.status_controllers)

    async def startup(self) -> None:
        await self.client.startup()

    async def shutdown(self) -> None:
        await self.client.shutdown()
