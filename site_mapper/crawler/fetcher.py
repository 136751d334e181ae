# site_mapper/crawler/fetcher.py
"""
Fetcher module: the pluggable page retrieval used by the dispatcher.

Any ``async`` callable taking a URL and returning the page text satisfies
:data:`FetchFunc`; failures are signalled by raising :class:`FetchError`.
:class:`Fetcher` is the default aiohttp-based implementation.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.config import CrawlConfig
from site_mapper.errors import FetchError

FetchFunc = Callable[[str], Awaitable[str]]


class Fetcher:
    """Plain GET with a shared session. No retries, no rate limiting."""

    def __init__(self, config: CrawlConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def __call__(self, url: str) -> str:
        return await self.fetch(url)

    async def fetch(self, url: str) -> str:
        """Return the body of *url* as text or raise FetchError."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                return await resp.text()
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except (ClientError, UnicodeDecodeError) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
