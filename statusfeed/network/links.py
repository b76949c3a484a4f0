from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from yarl import URL


@dataclass(slots=True, frozen=True)
class LinkHandler:
    next_url: URL

    @property
    def max_id(self) -> str | None:
        return self.next_url.query.get("max_id") or None

    @classmethod
    def from_links(cls, links: Mapping[str, Mapping[str, Any]]) -> "LinkHandler | None":
        # Shape of aiohttp's ClientResponse.links: {"next": {"url": URL(...), "rel": "next"}, ...}
        entry = links.get("next")
        if not entry:
            return None
        url = entry.get("url")
        if url is None:
            return None
        return cls(next_url=url if isinstance(url, URL) else URL(str(url)))
