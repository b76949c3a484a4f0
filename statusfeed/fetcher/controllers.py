from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from ..models import Status

LOGGER = logging.getLogger(__name__)


class ClientKey(Protocol):
    instance_key: str


class ItemControllerRegistry(Protocol):
    def update_controllers(self, items: Sequence[Any], client: ClientKey) -> None: ...


@dataclass(slots=True)
class StatusDataController:
    status_id: str
    is_bookmarked: bool = False
    is_favorited: bool = False
    is_reblogged: bool = False
    favorites_count: int = 0
    reblogs_count: int = 0
    replies_count: int = 0

    def update_from(self, status: Status) -> None:
        self.is_bookmarked = status.bookmarked
        self.is_favorited = status.favourited
        self.is_reblogged = status.reblogged
        self.favorites_count = status.favourites_count
        self.reblogs_count = status.reblogs_count
        self.replies_count = status.replies_count


class StatusDataControllerRegistry:
    """Interaction state per status, shared by every list showing that status."""

    def __init__(self) -> None:
        self._controllers: dict[tuple[str, str], StatusDataController] = {}

    def __len__(self) -> int:
        return len(self._controllers)

    def controller_for(self, status: Status, client: ClientKey) -> StatusDataController:
        return self._get_or_create(status.target, client)

    def update_controllers(self, items: Sequence[Status], client: ClientKey) -> None:
        for status in items:
            target = status.target
            self._get_or_create(target, client).update_from(target)
        LOGGER.debug(
            "Status controllers updated",
            extra={"instance": client.instance_key, "count": len(items), "total": len(self._controllers)},
        )

    def _get_or_create(self, target: Status, client: ClientKey) -> StatusDataController:
        key = (client.instance_key, target.id)
        controller = self._controllers.get(key)
        if controller is None:
            controller = StatusDataController(status_id=target.id)
            controller.update_from(target)
            self._controllers[key] = controller
        return controller
