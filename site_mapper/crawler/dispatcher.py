# site_mapper/crawler/dispatcher.py
"""
Recursive task dispatch: one asyncio task per newly discovered link.

Every task fetches its page, hands a :class:`PageRecord` to the aggregator
and spawns children one level deeper. A :class:`CompletionBarrier` counts
live tasks so the caller can tell when the whole tree has finished.
"""
from __future__ import annotations

import asyncio
from typing import Iterator, Set

from site_mapper.crawler.fetcher import FetchFunc
from site_mapper.crawler.link_extractor import extract_links
from site_mapper.crawler.models import Failure, Message, PageRecord
from site_mapper.errors import FetchError, InvalidTarget
from site_mapper.logger import get_logger

__all__ = ("SeenSet", "CompletionBarrier", "Dispatcher")

log = get_logger("dispatcher")


class SeenSet:
    """URLs already dispatched in this run. Grows monotonically."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark *url* as seen; ``False`` if somebody got there first.

        Check and insert happen without an ``await`` in between, so no other
        task on the loop can interleave.
        """
        if url in self._urls:
            return False
        self._urls.add(url)
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)


class CompletionBarrier:
    """Counter of live tasks plus an event that is set whenever it drops to zero."""

    def __init__(self) -> None:
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> int:
        return self._pending

    def add(self, n: int = 1) -> None:
        self._pending += n
        if self._pending > 0:
            self._idle.clear()

    def done(self) -> None:
        if self._pending <= 0:
            raise RuntimeError("CompletionBarrier.done() called more times than add()")
        self._pending -= 1
        if self._pending == 0:
            self._idle.set()

    async def wait(self) -> None:
        await self._idle.wait()


class Dispatcher:
    """Turns ``(depth, url)`` into a fetch plus zero or more concurrent sub-tasks."""

    def __init__(
        self,
        base_url: str,
        max_depth: int,
        fetch: FetchFunc,
        outbox: asyncio.Queue[Message],
        barrier: CompletionBarrier,
    ) -> None:
        self.base_url = base_url
        self.max_depth = max_depth
        self.fetch = fetch
        self.outbox = outbox
        self.barrier = barrier
        self.seen = SeenSet()
        self._tasks: Set[asyncio.Task[None]] = set()

    async def process(self, depth: int, url: str) -> None:
        if depth > self.max_depth:
            return
        if not url:
            raise InvalidTarget("incorrect input to process: empty url")
        if not self.seen.claim(url):
            log.debug("Already seen %s", url)
            return

        log.debug("Fetching %s (depth %d)", url, depth)
        try:
            body = await self.fetch(url)
        except FetchError as exc:
            log.warning("%s", exc)
            return
        except Exception as exc:
            # injected fetchers may raise their own errors; still local to this page
            log.warning("Error while fetching url [%s]: %s", url, exc)
            return

        links = extract_links(body, self.base_url)
        self.outbox.put_nowait(PageRecord(url=url, links=links))

        for link in links:
            if link == url or link in self.seen:
                continue
            self.spawn(depth + 1, link)

    def spawn(self, depth: int, url: str) -> asyncio.Task[None]:
        """Start :meth:`process` as its own task, tracked by the barrier."""
        self.barrier.add()
        task = asyncio.create_task(self._run(depth, url), name=f"crawl:{url}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, depth: int, url: str) -> None:
        try:
            await self.process(depth, url)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            log.error("Fatal error while processing %s: %s", url, exc)
            self.outbox.put_nowait(Failure(exc))
        finally:
            self.barrier.done()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def cancel(self) -> None:
        """Cancel whatever is still running once the outcome of the run is known."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
