# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_mapper.config import MAX_DEPTH, CrawlConfig, load_config, validate_config
from site_mapper.errors import MalformedURL, MissingURL


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize("url", ["", "   ", None])
def test_missing_url(url):
    with pytest.raises(MissingURL):
        validate_config(url, 3)


@pytest.mark.parametrize(
    "url",
    [
        "htttp://aaa.com",
        "aaa.com",
        "ftp://aaa.com",
        "https://aaa.com/docs",
        "https://aaa.com?q=1",
        "https://aaa.com:8080",
        "https://",
    ],
)
def test_malformed_url(url):
    with pytest.raises(MalformedURL):
        validate_config(url, 3)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://aaa.com", "https://aaa.com"),
        ("  https://aaa.com/  ", "https://aaa.com"),
        ("http://sub-domain_1.aaa.com/", "http://sub-domain_1.aaa.com"),
    ],
)
def test_url_normalized(raw, expected):
    cfg = validate_config(raw, 3)
    assert cfg.base_url == expected
    assert cfg.base_parts.hostname == expected.split("://", 1)[1]


@pytest.mark.parametrize("depth,expected", [(15, MAX_DEPTH), (10, 10), (3, 3), (0, 0), (-2, 0)])
def test_depth_clamped(depth, expected):
    assert validate_config("https://aaa.com", depth).max_depth == expected


def test_defaults():
    cfg = CrawlConfig()
    assert cfg.base_url == "https://docs.docker.com"
    assert cfg.max_depth == 3
    assert cfg.timeout is None


def test_config_is_frozen():
    cfg = validate_config("https://aaa.com", 2)
    with pytest.raises(ValidationError):
        cfg.max_depth = 5


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        CrawlConfig(base_url="https://aaa.com", rate_limit=1.0)


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: https://example.com\nmax_depth: 2", ".yaml", None),
        (json.dumps({"base_url": "https://example.com", "max_depth": 2}), ".json", None),
        ("- just\n- a list", ".yaml", TypeError),
        ("not: a: mapping", ".yaml", ValueError),
        ("{broken json", ".json", ValueError),
        ("base_url = 'https://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert cfg.base_url == "https://example.com"
        assert cfg.max_depth == 2


def test_load_config_overrides_file(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: https://example.com\nmax_depth: 2", ".yaml")
    cfg = load_config(cfg_path, base_url="https://other.org/", max_depth=None)
    assert cfg.base_url == "https://other.org"
    assert cfg.max_depth == 2


def test_load_config_without_file_uses_defaults():
    cfg = load_config(None, max_depth=1)
    assert cfg.base_url == "https://docs.docker.com"
    assert cfg.max_depth == 1


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_malformed_url_in_file(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: https://example.com/path", ".yaml")
    with pytest.raises(MalformedURL):
        load_config(cfg_path)
