from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Union


class FetchError(Exception):
    """First page could not be loaded; replaces the list with an error."""


class SilentFetchError(Exception):
    """A further page could not be loaded; the list already shown is kept."""


class NextPageState(enum.Enum):
    HAS_NEXT_PAGE = "has_next_page"
    LOADING_NEXT_PAGE = "loading_next_page"
    NONE = "none"


@dataclass(slots=True, frozen=True)
class Idle:
    pass


@dataclass(slots=True, frozen=True)
class Loading:
    pass


@dataclass(slots=True, frozen=True)
class Loaded:
    items: tuple[Any, ...]
    next_page: NextPageState
    page_error: SilentFetchError | None = None

    @property
    def has_more(self) -> bool:
        return self.next_page is NextPageState.HAS_NEXT_PAGE

    @property
    def is_loading_more(self) -> bool:
        return self.next_page is NextPageState.LOADING_NEXT_PAGE

    def with_next_page(self, next_page: NextPageState) -> "Loaded":
        return replace(self, next_page=next_page, page_error=None)


@dataclass(slots=True, frozen=True)
class Error:
    cause: FetchError


FetchState = Union[Idle, Loading, Loaded, Error]
