from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True, frozen=True)
class Account:
    id: str
    username: str
    acct: str
    display_name: str | None = None
    url: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Account":
        if not isinstance(payload, Mapping):
            raise TypeError(f"account must be an object, got {type(payload).__name__}")
        return cls(
            id=str(payload["id"]),
            username=payload.get("username") or "",
            acct=payload.get("acct") or payload.get("username") or "",
            display_name=payload.get("display_name") or None,
            url=payload.get("url"),
        )


@dataclass(slots=True, frozen=True)
class Status:
    id: str
    created_at: str
    content: str
    account: Account
    url: str | None = None
    favourited: bool = False
    bookmarked: bool = False
    reblogged: bool = False
    favourites_count: int = 0
    reblogs_count: int = 0
    replies_count: int = 0
    reblog: "Status | None" = None

    @property
    def target(self) -> "Status":
        """The status actions apply to: the boosted one for a reblog."""
        return self.reblog if self.reblog is not None else self

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Status":
        if not isinstance(payload, Mapping):
            raise TypeError(f"status must be an object, got {type(payload).__name__}")
        reblog = payload.get("reblog")
        return cls(
            id=str(payload["id"]),
            created_at=payload.get("created_at") or "",
            content=payload.get("content") or "",
            account=Account.from_json(payload["account"]),
            url=payload.get("url"),
            favourited=bool(payload.get("favourited")),
            bookmarked=bool(payload.get("bookmarked")),
            reblogged=bool(payload.get("reblogged")),
            favourites_count=int(payload.get("favourites_count") or 0),
            reblogs_count=int(payload.get("reblogs_count") or 0),
            replies_count=int(payload.get("replies_count") or 0),
            reblog=cls.from_json(reblog) if reblog else None,
        )
