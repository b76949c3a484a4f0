from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(slots=True, frozen=True)
class Endpoint:
    path: str
    query: tuple[tuple[str, str | None], ...] = ()

    @property
    def params(self) -> dict[str, str]:
        return {key: value for key, value in self.query if value is not None}

    def url(self, base_url: str) -> str:
        url = base_url.rstrip("/") + "/" + self.path.lstrip("/")
        params = self.params
        if params:
            url = f"{url}?{urlencode(params)}"
        return url


class Accounts:
    """Endpoints of the signed-in account's own lists."""

    @staticmethod
    def bookmarks(since_id: str | None = None) -> Endpoint:
        return Endpoint("/api/v1/bookmarks", (("max_id", since_id),))

    @staticmethod
    def favorites(since_id: str | None = None) -> Endpoint:
        return Endpoint("/api/v1/favourites", (("max_id", since_id),))
