from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {value}")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid float for {name}: {value}")


@dataclass(slots=True)
class InstanceConfig:
    base_url: str
    access_token: Optional[str] = None

    @property
    def key(self) -> str:
        # Identifies the server for per-item state; trailing slash is not significant
        return self.base_url.rstrip("/").lower()


@dataclass(slots=True)
class HttpConfig:
    timeout_seconds: int = 10
    rate_limit_rps: float = 2.0
    user_agent: str = "statusfeed/0.1"


@dataclass(slots=True)
class ListConfig:
    mode: str = "bookmarks"
    pages_default: int = 2


@dataclass(slots=True)
class LoggingConfig:
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    timezone: str = field(default_factory=lambda: os.getenv("TZ", "UTC"))


@dataclass(slots=True)
class AppConfig:
    instance: InstanceConfig
    http: HttpConfig
    lists: ListConfig
    logging: LoggingConfig


LIST_MODES = ("bookmarks", "favorites")


def load_config() -> AppConfig:
    token = os.getenv("ACCESS_TOKEN")
    if not token:
        raise RuntimeError("ACCESS_TOKEN is not set")

    mode = (os.getenv("LIST_MODE") or "bookmarks").strip().lower()
    if mode not in LIST_MODES:
        raise ValueError(f"Invalid LIST_MODE: {mode} (expected one of {', '.join(LIST_MODES)})")

    pages = _get_int("PAGES_DEFAULT", 2)
    if pages < 1:
        raise ValueError(f"PAGES_DEFAULT must be positive: {pages}")

    return AppConfig(
        instance=InstanceConfig(
            base_url=os.getenv("INSTANCE_URL", "https://mastodon.social"),
            access_token=token,
        ),
        http=HttpConfig(
            timeout_seconds=_get_int("HTTP_TIMEOUT_SECONDS", 10),
            rate_limit_rps=_get_float("RATE_LIMIT_RPS", 2.0),
            user_agent=os.getenv("HTTP_USER_AGENT", "statusfeed/0.1"),
        ),
        lists=ListConfig(mode=mode, pages_default=pages),
        logging=LoggingConfig(),
    )
