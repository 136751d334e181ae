# File: site_mapper/errors.py
"""site_mapper.errors: Exceptions raised by the crawler and its configuration layer."""

from __future__ import annotations

from typing import Optional


class CrawlerError(Exception):
    """Base class for all SiteMapper errors."""


class ConfigError(CrawlerError):
    """Invalid user input detected before crawling starts."""


class MissingURL(ConfigError):
    def __init__(self) -> None:
        super().__init__("No URL provided")


class MalformedURL(ConfigError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Wrong URL format provided: {url!r}")
        self.url = url


class InvalidTarget(CrawlerError):
    """A dispatcher received a target it cannot process. Fatal for the run."""


class FetchError(CrawlerError):
    """A single page could not be retrieved."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"Error while fetching url [{url}]: {reason}")
        self.url = url
        self.status = status


__all__ = [
    "CrawlerError",
    "ConfigError",
    "MissingURL",
    "MalformedURL",
    "InvalidTarget",
    "FetchError",
]
