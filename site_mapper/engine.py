# File: site_mapper/engine.py
"""site_mapper.engine: Orchestration layer для запуска обхода из CLI и тестов."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Union

from site_mapper.config import CrawlConfig, load_config
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.fetcher import FetchFunc
from site_mapper.crawler.models import CrawlOutcome
from site_mapper.logger import logger

__all__ = ["Engine", "run_crawl"]


async def run_crawl(config: CrawlConfig, fetch: Optional[FetchFunc] = None) -> CrawlOutcome:
    """Корутина: один полный обход с заданной конфигурацией."""
    return await SiteCrawler(config, fetch=fetch).crawl()


class Engine:
    """Фасад для CLI и тестов: загрузка конфига и синхронный запуск обхода."""

    @staticmethod
    def load_config(path: Union[str, Path, None], **overrides) -> CrawlConfig:
        """Загружает конфиг из YAML/JSON, CLI-значения имеют приоритет."""
        return load_config(path, **overrides)

    def __init__(self, config: CrawlConfig, fetch: Optional[FetchFunc] = None) -> None:
        self.config = config
        self.fetch = fetch

    def start_crawl(self) -> CrawlOutcome:
        """Запускает асинхронный обход и возвращает его итог."""
        logger.info("Starting crawl…")
        try:
            outcome = asyncio.run(run_crawl(self.config, self.fetch))
        except Exception as exc:
            logger.error("Crawling failed: %s", exc)
            raise
        return outcome
