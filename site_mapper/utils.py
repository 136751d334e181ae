# File: site_mapper/utils.py
"""site_mapper.utils: Утилитарные функции для обработки списков URL и вывода времени."""

from __future__ import annotations

from typing import Collection, List, Sequence

from site_mapper.logger import logger

__all__: Sequence[str] = (
    "remove_duplicates",
    "format_elapsed",
)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def format_elapsed(seconds: float) -> str:
    """Человекочитаемая длительность: ``850ms``, ``3.42s``, ``2m5.1s``."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m{rest:.1f}s"
