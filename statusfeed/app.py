from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys
from typing import BinaryIO

import orjson

from .account.statuses_list import AccountStatusesListFetcher
from .config import load_config
from .di import Container
from .fetcher.state import Error, Loaded
from .logging_config import configure_logging
from .util.signals import cancel_on_signal

LOGGER = logging.getLogger(__name__)


async def collect(fetcher: AccountStatusesListFetcher, pages: int) -> bool:
    """Load up to ``pages`` pages; returns False when the first page failed."""
    await fetcher.fetch_newest_statuses()
    if isinstance(fetcher.state, Error):
        LOGGER.error("Could not load %s", fetcher.mode.value, extra={"error": str(fetcher.state.cause)})
        return False
    for _ in range(pages - 1):
        state = fetcher.state
        if not isinstance(state, Loaded) or not state.has_more:
            break
        await fetcher.fetch_next_page()
        state = fetcher.state
        if isinstance(state, Loaded) and state.page_error is not None:
            break
    return True


def write_statuses(fetcher: AccountStatusesListFetcher, out: BinaryIO) -> int:
    written = 0
    for status in fetcher.statuses:
        out.write(orjson.dumps(dataclasses.asdict(status)) + b"\n")
        written += 1
    out.flush()
    return written


async def main() -> int:
    config = load_config()
    configure_logging(config.logging.level, config.logging.timezone)
    container = Container(config)
    current = asyncio.current_task()
    if current is not None:
        cancel_on_signal(current)

    try:
        await container.startup()
        fetcher = container.statuses_list()
        ok = await collect(fetcher, config.lists.pages_default)
        written = write_statuses(fetcher, sys.stdout.buffer)
        LOGGER.info("Statuses written", extra={"mode": fetcher.mode.value, "count": written})
        return 0 if ok else 1
    except asyncio.CancelledError:
        LOGGER.info("Interrupted")
        return 130
    finally:
        await container.shutdown()


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
