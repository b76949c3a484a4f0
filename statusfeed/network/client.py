from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Protocol, TypeVar

import aiohttp
import orjson

from ..config import HttpConfig, InstanceConfig
from .endpoints import Endpoint
from .links import LinkHandler

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class NetworkError(Exception):
    def __init__(self, url: str, message: str, *, status: int | None = None) -> None:
        super().__init__(f"{message} ({url})" if status is None else f"HTTP {status}: {message} ({url})")
        self.url = url
        self.status = status
        self.message = message


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: str | None = None


class PageClient(Protocol):
    instance_key: str

    async def get_page(self, endpoint: Endpoint, decode: Callable[[Any], T]) -> Page[T]: ...


class Client:
    def __init__(self, instance: InstanceConfig, http: HttpConfig) -> None:
        self._instance = instance
        self._http = http
        self.instance_key = instance.key
        self._session: aiohttp.ClientSession | None = None
        self._rate_lock = asyncio.Lock()
        self._min_interval = 1.0 / http.rate_limit_rps if http.rate_limit_rps > 0 else 0.0
        self._last_request = 0.0

    async def startup(self) -> None:
        if self._session is not None:
            return
        timeout = aiohttp.ClientTimeout(total=self._http.timeout_seconds)
        headers = {
            "User-Agent": self._http.user_agent,
            "Accept": "application/json",
        }
        if self._instance.access_token:
            headers["Authorization"] = f"Bearer {self._instance.access_token}"
        self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)
        LOGGER.debug("HTTP session opened", extra={"instance": self.instance_key})

    async def shutdown(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def get_with_link(self, endpoint: Endpoint) -> tuple[list[Any], LinkHandler | None]:
        session = await self._ensure_session()
        url = endpoint.url(self._instance.base_url)
        LOGGER.debug("Fetching", extra={"url": url})
        await self._throttle()
        try:
            async with session.get(url) as response:
                body = await response.read()
                if not 200 <= response.status < 300:
                    message = _error_text(body) or response.reason or "request failed"
                    raise NetworkError(url, message, status=response.status)
                link = LinkHandler.from_links(response.links)
        except aiohttp.ClientError as exc:
            raise NetworkError(url, str(exc) or exc.__class__.__name__) from exc
        except asyncio.TimeoutError as exc:
            raise NetworkError(url, "request timed out") from exc

        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError as exc:
            raise NetworkError(url, "response is not valid JSON", status=response.status) from exc
        if not isinstance(payload, list):
            raise NetworkError(url, "expected a JSON array", status=response.status)
        return payload, link

    async def get_page(self, endpoint: Endpoint, decode: Callable[[Any], T]) -> Page[T]:
        payload, link = await self.get_with_link(endpoint)
        url = endpoint.url(self._instance.base_url)
        try:
            items = [decode(entry) for entry in payload]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise NetworkError(url, f"malformed item: {exc!r}") from exc
        page = Page(items=items, next_cursor=link.max_id if link else None)
        LOGGER.debug("Fetched page", extra={"url": url, "count": len(items), "next_cursor": page.next_cursor})
        return page

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            await self.startup()
        if self._session is None:  # pragma: no cover
            raise RuntimeError("HTTP session is not initialized")
        return self._session

    async def _throttle(self) -> None:
        if self._min_interval <= 0:
            return
        async with self._rate_lock:
            now = time.monotonic()
            sleep_for = self._last_request + self._min_interval - now
            if sleep_for > 0:
                await asyncio.sleep(sleep_for)
            self._last_request = time.monotonic()


def _error_text(body: bytes) -> str:
    # Mastodon reports failures as {"error": "..."}
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError:
        return body.decode("utf-8", errors="replace").strip()[:200]
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return ""
