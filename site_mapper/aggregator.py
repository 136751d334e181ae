# File: site_mapper/aggregator.py
"""site_mapper.aggregator: the single consumer that owns the SiteMap.

Dispatcher tasks, the completion watcher and the signal handlers all talk to
the aggregator through one ``asyncio.Queue``. Whatever message decides the run
(completion, fatal failure or interrupt) ends :meth:`Aggregator.run`.
"""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import List, Mapping, Optional

from site_mapper.crawler.models import (
    Completed,
    CrawlOutcome,
    CrawlStatus,
    Failure,
    Interrupted,
    Message,
    PageRecord,
    SiteMap,
)
from site_mapper.logger import get_logger

__all__ = ["Aggregator"]

log = get_logger("aggregator")


class Aggregator:
    """Collects PageRecords into the SiteMap until a terminal message arrives."""

    def __init__(self, inbox: Optional[asyncio.Queue[Message]] = None) -> None:
        self.inbox: asyncio.Queue[Message] = inbox if inbox is not None else asyncio.Queue()
        self._site_map: SiteMap = {}

    @property
    def site_map(self) -> Mapping[str, List[str]]:
        """Read-only view of the map collected so far."""
        return MappingProxyType(self._site_map)

    def snapshot(self) -> SiteMap:
        return {url: list(links) for url, links in self._site_map.items()}

    def add(self, record: PageRecord) -> bool:
        if record.url in self._site_map:
            log.debug("Duplicate record for %s ignored", record.url)
            return False
        self._site_map[record.url] = list(record.links)
        return True

    async def run(self) -> CrawlOutcome:
        while True:
            message = await self.inbox.get()
            if isinstance(message, PageRecord):
                self.add(message)
                continue
            if isinstance(message, Completed):
                self._drain()
                log.debug("Completion received with %d pages", len(self._site_map))
                return CrawlOutcome(CrawlStatus.COMPLETED, self.snapshot())
            if isinstance(message, Failure):
                log.debug("Run aborted by %r", message.error)
                return CrawlOutcome(CrawlStatus.FAILED, self.snapshot(), error=message.error)
            if isinstance(message, Interrupted):
                log.info("Interrupted by %s", message.signal_name)
                return CrawlOutcome(
                    CrawlStatus.INTERRUPTED, self.snapshot(), signal_name=message.signal_name
                )
            raise TypeError(f"Unexpected message {message!r}")

    def _drain(self) -> None:
        # records queued behind the completion signal still belong to this run
        while True:
            try:
                message = self.inbox.get_nowait()
            except asyncio.QueueEmpty:
                return
            if isinstance(message, PageRecord):
                self.add(message)
