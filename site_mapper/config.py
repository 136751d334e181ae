# === FILE: site_mapper/config.py ===
"""
Модуль для загрузки и валидации конфигурации обхода SiteMapper.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Final, Optional, Union
from urllib.parse import SplitResult, urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from site_mapper.errors import MalformedURL, MissingURL
from site_mapper.logger import logger

DEFAULT_BASE_URL: Final[str] = "https://docs.docker.com"
DEFAULT_DEPTH: Final[int] = 3
MAX_DEPTH: Final[int] = 10

# scheme + host only: no port, path or query
_BASE_URL_RE: Final[re.Pattern[str]] = re.compile(r"^https?://[a-zA-Z0-9\-_.]+/?$")


def normalize_base_url(raw: Any) -> str:
    """Trim whitespace and a single trailing slash, then check the base URL format."""
    if raw is None:
        raise MissingURL()
    url = str(raw).strip()
    if not url:
        raise MissingURL()
    url = url.removesuffix("/")
    if not _BASE_URL_RE.match(url):
        raise MalformedURL(url)
    return url


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(DEFAULT_BASE_URL, description="Корневой URL, с которого начинается обход.")
    max_depth: int = Field(DEFAULT_DEPTH, description="Максимальная глубина обхода ссылок (0..10).")
    timeout: Optional[float] = Field(None, gt=0, description="Таймаут на один запрос (секунд), None - без таймаута.")
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="Заголовок User-Agent.")

    @field_validator("base_url", mode="before")
    def _normalize_base_url(cls, v: Any) -> str:
        return normalize_base_url(v)

    @field_validator("max_depth", mode="after")
    def _clamp_depth(cls, v: int) -> int:
        if v > MAX_DEPTH:
            logger.warning(
                "Up to %d levels of crawling are allowed. Capping at %d.", MAX_DEPTH, MAX_DEPTH
            )
            return MAX_DEPTH
        if v < 0:
            logger.warning("Negative depth %d requested, crawling the base page only.", v)
            return 0
        return v

    @model_validator(mode="after")
    def _check_structure(self) -> CrawlConfig:
        try:
            parts = urlsplit(self.base_url)
        except ValueError as exc:
            raise MalformedURL(self.base_url) from exc
        if not parts.scheme or not parts.hostname:
            raise MalformedURL(self.base_url)
        return self

    @property
    def base_parts(self) -> SplitResult:
        """Структурное представление base_url для разрешения относительных ссылок."""
        return urlsplit(self.base_url)


def validate_config(url: Any, depth: int = DEFAULT_DEPTH, **extra: Any) -> CrawlConfig:
    """Собирает CrawlConfig из «сырых» значений командной строки."""
    return CrawlConfig(base_url=url, max_depth=depth, **extra)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON и возвращает «сырой» mapping без проверки схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlConfig:
    """
    Возвращает проверенный CrawlConfig.
    Значения из файла (если указан) перекрываются непустыми overrides.
    """
    data: Dict[str, Any] = {} if path is None else read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)
