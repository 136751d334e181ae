# site_mapper/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteMapper.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Final, List
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.logger import get_logger
from site_mapper.utils import remove_duplicates

__all__ = ("MAX_LINKS_PER_PAGE", "extract_links", "href_pattern")

#: hard cap on matching anchors considered per page
MAX_LINKS_PER_PAGE: Final[int] = 30

log = get_logger("extractor")


@lru_cache(maxsize=32)
def href_pattern(base_url: str) -> re.Pattern[str]:
    """
    Pattern for hrefs worth following: ``<base_url>/...`` or root-relative ``/...``.

    The path alphabet is deliberately narrow (letters, digits, ``_-/&?``), so
    links to static assets such as ``favicon.png`` never match.
    """
    return re.compile(rf"^(?:{re.escape(base_url)})?/[a-zA-Z_0-9\-/&?]+$")


def extract_links(content: str, base_url: str) -> List[str]:
    """
    Extract internal links from page *content*.

    Only anchors whose href is rooted at *base_url* (or at ``/``) are
    considered, at most :data:`MAX_LINKS_PER_PAGE` of them. Links mentioning
    ``redirect`` are dropped, relative ones are resolved against *base_url*.
    The result keeps first-occurrence order with duplicates removed.
    """
    pattern = href_pattern(base_url)
    soup = BeautifulSoup(content, "html.parser")

    links: List[str] = []
    matched = 0
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        # the parser has already decoded entities: "&amp;" is checked as "&"
        href = tag.get("href")
        if not isinstance(href, str) or not pattern.fullmatch(href):
            continue
        matched += 1
        if matched > MAX_LINKS_PER_PAGE:
            break
        if "redirect" in href:
            continue
        try:
            parsed = urlsplit(href)
        except ValueError as exc:
            log.warning("Skipping unparsable link %r: %s", href, exc)
            continue
        links.append(href if parsed.scheme and parsed.netloc else urljoin(base_url, href))
    return remove_duplicates(links)
