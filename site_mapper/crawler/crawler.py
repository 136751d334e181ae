# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import signal
import time
from contextlib import AsyncExitStack
from typing import Optional, Sequence

from site_mapper.aggregator import Aggregator
from site_mapper.config import CrawlConfig
from site_mapper.crawler.dispatcher import CompletionBarrier, Dispatcher
from site_mapper.crawler.fetcher import Fetcher, FetchFunc
from site_mapper.crawler.models import CrawlOutcome, CrawlStatus, Message
from site_mapper.logger import get_logger
from site_mapper.shutdown import DEFAULT_SIGNALS, ShutdownController

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """Concurrent depth-bounded crawler producing a URL -> links SiteMap.

    *fetch* is any ``async`` callable ``url -> text``; when omitted an
    aiohttp :class:`Fetcher` is opened for the duration of :meth:`run`.
    """

    def __init__(
        self,
        config: CrawlConfig,
        fetch: Optional[FetchFunc] = None,
        signals: Sequence[signal.Signals] = DEFAULT_SIGNALS,
    ) -> None:
        self.config = config
        self.fetch = fetch
        self.signals = signals
        self.logger = get_logger("crawler")
        self.aggregator: Optional[Aggregator] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.shutdown: Optional[ShutdownController] = None

    async def crawl(self) -> CrawlOutcome:
        self.logger.info("Starting to crawl %s (max depth %d)", self.config.base_url, self.config.max_depth)
        start = time.monotonic()
        async with AsyncExitStack() as stack:
            fetch = self.fetch
            if fetch is None:
                fetch = await stack.enter_async_context(Fetcher(self.config))

            inbox: asyncio.Queue[Message] = asyncio.Queue()
            barrier = CompletionBarrier()
            self.aggregator = Aggregator(inbox)
            self.dispatcher = Dispatcher(
                self.config.base_url, self.config.max_depth, fetch, inbox, barrier
            )
            self.shutdown = stack.enter_context(ShutdownController(inbox, self.signals))

            self.dispatcher.spawn(0, self.config.base_url)
            watcher = asyncio.create_task(self.shutdown.watch(barrier), name="crawl:completion")
            try:
                outcome = await self.aggregator.run()
            finally:
                watcher.cancel()
                await asyncio.gather(watcher, return_exceptions=True)
                if self.dispatcher.in_flight:
                    self.logger.debug("Cancelling %d unfinished tasks", self.dispatcher.in_flight)
                await self.dispatcher.cancel()

        outcome.elapsed = time.monotonic() - start
        if outcome.status is CrawlStatus.COMPLETED:
            self.logger.info(
                "Finished: %d pages in %.2f s", len(outcome.site_map), outcome.elapsed
            )
        return outcome

    # alias for compatibility
    run = crawl
