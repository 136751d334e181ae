# File: site_mapper/shutdown.py
"""site_mapper.shutdown: turns OS signals and natural completion into aggregator messages."""

from __future__ import annotations

import asyncio
import signal
from typing import Optional, Sequence

from site_mapper.crawler.dispatcher import CompletionBarrier
from site_mapper.crawler.models import Completed, Interrupted, Message
from site_mapper.logger import get_logger

__all__ = ["ShutdownController", "DEFAULT_SIGNALS"]

log = get_logger("shutdown")

DEFAULT_SIGNALS: Sequence[signal.Signals] = (signal.SIGINT, signal.SIGTERM)


class ShutdownController:
    """First signal wins: either an interrupt or the completion barrier opening."""

    def __init__(
        self,
        inbox: asyncio.Queue[Message],
        signals: Sequence[signal.Signals] = DEFAULT_SIGNALS,
    ) -> None:
        self.inbox = inbox
        self.signals = tuple(signals)
        self.triggered: Optional[str] = None
        self._installed: list[signal.Signals] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def install(self) -> None:
        self._loop = asyncio.get_running_loop()
        for sig in self.signals:
            try:
                self._loop.add_signal_handler(sig, self.interrupt, sig.name)
            except (NotImplementedError, RuntimeError) as exc:
                # e.g. Windows event loops, or not running in the main thread
                log.debug("Cannot watch %s: %s", sig.name, exc)
                continue
            self._installed.append(sig)

    def uninstall(self) -> None:
        if self._loop is None:
            return
        for sig in self._installed:
            self._loop.remove_signal_handler(sig)
        self._installed.clear()

    def interrupt(self, signal_name: str) -> None:
        if self.triggered is not None:
            log.info("Ignoring %s, shutdown already triggered by %s", signal_name, self.triggered)
            return
        self.triggered = signal_name
        log.info("Received %s, rendering what has been collected so far", signal_name)
        self.inbox.put_nowait(Interrupted(signal_name))

    async def watch(self, barrier: CompletionBarrier) -> None:
        """Post :class:`Completed` once every dispatched task has returned."""
        await barrier.wait()
        if self.triggered is not None:
            return
        self.triggered = "completion"
        self.inbox.put_nowait(Completed())

    def __enter__(self) -> ShutdownController:
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.uninstall()
