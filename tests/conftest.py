# File: tests/conftest.py
from typing import Callable, Dict, List

import pytest

from site_mapper.config import CrawlConfig
from site_mapper.errors import FetchError
from site_mapper.logger import init_logging

BASE_URL = "https://mmmmm.com"


def _page(*hrefs: str) -> str:
    anchors = "".join(f'<p><a href="{href}">link</a></p>' for href in hrefs)
    return f"<html><body>{anchors}</body></html>"


#: small site: base -> faq, about; faq -> about, info; about -> careers, faq;
#: info -> about, generic; careers -> generic; generic -> nothing
MOCK_PAGES: Dict[str, str] = {
    BASE_URL: _page(
        "/faq",
        "https://mmmmm.com/about",
        "https://notthisone.com/about",
        "/static/images/favicon.png",
    ),
    f"{BASE_URL}/faq": _page("/about", "/info", "/about"),
    f"{BASE_URL}/about": _page("https://mmmmm.com/careers", "/faq", "/-play-store-redirect"),
    f"{BASE_URL}/info": _page("/about", "/generic"),
    f"{BASE_URL}/careers": _page("/generic"),
    f"{BASE_URL}/generic": "<html><body><h1>Nothing to see</h1></body></html>",
}


class MockFetch:
    """Serves MOCK_PAGES-like content and records every requested URL."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        try:
            return self.pages[url]
        except KeyError:
            raise FetchError(url, "HTTP 404", status=404) from None


@pytest.fixture()
def mock_pages() -> Dict[str, str]:
    return dict(MOCK_PAGES)


@pytest.fixture()
def mock_fetch(mock_pages) -> MockFetch:
    return MockFetch(mock_pages)


@pytest.fixture()
def make_config() -> Callable[..., CrawlConfig]:
    """
    Return a factory for CrawlConfig rooted at the mock site.
    """

    def _make(depth: int = 1, **extra) -> CrawlConfig:
        return CrawlConfig(base_url=BASE_URL, max_depth=depth, **extra)

    return _make


@pytest.fixture(autouse=True)
def _fresh_log_handlers():
    """CliRunner swaps sys.stderr; rebind the project logger after every test."""
    yield
    init_logging()
