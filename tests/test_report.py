# File: tests/test_report.py
import copy
import json

from site_mapper.crawler.models import CrawlOutcome, CrawlStatus
from site_mapper.report import render_json, render_sitemap

from conftest import BASE_URL

FAQ = f"{BASE_URL}/faq"
ABOUT = f"{BASE_URL}/about"
INFO = f"{BASE_URL}/info"
CAREERS = f"{BASE_URL}/careers"

DEPTH_1_MAP = {
    BASE_URL: [FAQ, ABOUT],
    FAQ: [ABOUT, INFO],
    ABOUT: [CAREERS, FAQ],
}


def test_tree_layout():
    report = render_sitemap(DEPTH_1_MAP, 1, BASE_URL, offset="  ")
    lines = report.splitlines()

    assert lines[0] == "SiteMap display"
    assert lines[-1] == "The END"
    assert "  * https://mmmmm.com (depth 0)" in lines
    assert "     number of links = 2" in lines
    assert "    - 0 - [https://mmmmm.com/faq]" in lines
    assert "    - 1 - [https://mmmmm.com/about]" in lines
    assert "    * https://mmmmm.com/faq (depth 1)" in lines
    assert "    * https://mmmmm.com/about (depth 1)" in lines


def test_links_beyond_max_depth_not_expanded():
    report = render_sitemap(DEPTH_1_MAP, 1, BASE_URL)
    assert "(depth 2)" not in report
    assert INFO not in report
    assert CAREERS not in report


def test_depth_zero_lists_only_base_page():
    report = render_sitemap({BASE_URL: [FAQ, ABOUT]}, 0, BASE_URL)
    assert f"* {BASE_URL} (depth 0)" in report
    assert "number of links = 2" in report
    assert FAQ not in report


def test_unfetched_page_shows_zero_links():
    report = render_sitemap({BASE_URL: [FAQ]}, 2, BASE_URL)
    assert f"* {FAQ} (depth 1)" in report
    assert "number of links = 0" in report


def test_self_link_not_expanded():
    loop = f"{BASE_URL}/loop"
    report = render_sitemap({BASE_URL: [BASE_URL, loop], loop: [loop]}, 5, BASE_URL)

    assert report.count(f"* {BASE_URL} (depth") == 1
    assert report.count(f"* {loop} (depth") == 1
    assert f"- 0 - [{BASE_URL}]" in report


def test_cycle_marked_as_displayed_before():
    a, b, c = f"{BASE_URL}/a", f"{BASE_URL}/b", f"{BASE_URL}/c"
    site_map = {a: [b, c], b: [a], c: []}
    report = render_sitemap(site_map, 3, a)

    assert report.count("(links displayed before)") == 1
    assert f"* {c} (depth 3)" in report
    assert f"* {c} (depth 1)" not in report


def test_render_does_not_mutate_map():
    site_map = copy.deepcopy(DEPTH_1_MAP)
    render_sitemap(site_map, 3, BASE_URL)
    assert site_map == DEPTH_1_MAP


def test_render_is_deterministic():
    assert render_sitemap(DEPTH_1_MAP, 2, BASE_URL) == render_sitemap(DEPTH_1_MAP, 2, BASE_URL)


def test_render_json(tmp_path):
    outcome = CrawlOutcome(CrawlStatus.INTERRUPTED, dict(DEPTH_1_MAP), elapsed=1.23456, signal_name="SIGINT")
    path = render_json(outcome, tmp_path / "out" / "sitemap.json", base_url=BASE_URL)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["base_url"] == BASE_URL
    assert data["status"] == "interrupted"
    assert data["elapsed"] == 1.235
    assert data["pages"] == DEPTH_1_MAP
