from __future__ import annotations

import pytest

from statusfeed.config import InstanceConfig, load_config

ENV_VARS = (
    "ACCESS_TOKEN",
    "INSTANCE_URL",
    "HTTP_TIMEOUT_SECONDS",
    "RATE_LIMIT_RPS",
    "HTTP_USER_AGENT",
    "LIST_MODE",
    "PAGES_DEFAULT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_token_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="ACCESS_TOKEN"):
        load_config()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN", "tok")
    config = load_config()
    assert config.instance.base_url == "https://mastodon.social"
    assert config.instance.access_token == "tok"
    assert config.http.timeout_seconds == 10
    assert config.http.rate_limit_rps == 2.0
    assert config.lists.mode == "bookmarks"
    assert config.lists.pages_default == 2


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN", "tok")
    monkeypatch.setenv("INSTANCE_URL", "https://fosstodon.org")
    monkeypatch.setenv("RATE_LIMIT_RPS", "0")
    monkeypatch.setenv("LIST_MODE", "Favorites")
    monkeypatch.setenv("PAGES_DEFAULT", "5")
    config = load_config()
    assert config.instance.base_url == "https://fosstodon.org"
    assert config.http.rate_limit_rps == 0.0
    assert config.lists.mode == "favorites"
    assert config.lists.pages_default == 5


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("HTTP_TIMEOUT_SECONDS", "ten", "Invalid integer"),
        ("RATE_LIMIT_RPS", "fast", "Invalid float"),
        ("LIST_MODE", "home", "Invalid LIST_MODE"),
        ("PAGES_DEFAULT", "0", "must be positive"),
    ],
)
def test_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str, message: str) -> None:
    monkeypatch.setenv("ACCESS_TOKEN", "tok")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=message):
        load_config()


def test_instance_key_ignores_trailing_slash_and_case() -> None:
    assert InstanceConfig(base_url="https://Mastodon.Social/").key == "https://mastodon.social"
