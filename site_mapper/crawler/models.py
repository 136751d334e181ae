# site_mapper/crawler/models.py
"""
Data models and coordination messages for the SiteMapper crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

SiteMap = Dict[str, List[str]]


@dataclass(slots=True, frozen=True)
class PageRecord:
    """A fetched page: its absolute URL and the ordered outbound links found on it."""

    url: str
    links: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class Completed:
    """Every dispatched task has returned."""


@dataclass(slots=True, frozen=True)
class Failure:
    """A dispatch-fatal error; aborts the run without a report."""

    error: BaseException


@dataclass(slots=True, frozen=True)
class Interrupted:
    """An external signal asked the run to stop."""

    signal_name: str


Message = Union[PageRecord, Completed, Failure, Interrupted]


class CrawlStatus(str, enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    INTERRUPTED = "interrupted"


@dataclass(slots=True)
class CrawlOutcome:
    """How a run ended plus a snapshot of everything aggregated until then."""

    status: CrawlStatus
    site_map: SiteMap = field(default_factory=dict)
    elapsed: float = 0.0
    error: Optional[BaseException] = None
    signal_name: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.status is CrawlStatus.COMPLETED else 1

    @property
    def has_report(self) -> bool:
        return self.status is not CrawlStatus.FAILED
