# File: tests/test_engine.py
from site_mapper.crawler.models import CrawlStatus
from site_mapper.engine import Engine

from conftest import BASE_URL


def test_engine_runs_crawl_synchronously(make_config, mock_fetch):
    outcome = Engine(make_config(0), fetch=mock_fetch).start_crawl()

    assert outcome.status is CrawlStatus.COMPLETED
    assert outcome.site_map == {BASE_URL: [f"{BASE_URL}/faq", f"{BASE_URL}/about"]}
    assert outcome.elapsed >= 0


def test_engine_load_config(tmp_path):
    cfg_file = tmp_path / "site.yaml"
    cfg_file.write_text("base_url: https://example.com\n", encoding="utf-8")

    cfg = Engine.load_config(cfg_file, max_depth=5)
    assert cfg.base_url == "https://example.com"
    assert cfg.max_depth == 5
