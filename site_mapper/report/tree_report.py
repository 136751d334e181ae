# site_mapper/report/tree_report.py

"""
Текстовый отчёт: дерево страниц и их ссылок, начиная с базового URL.

Каждая страница раскрывается не глубже max_depth; страница, чьи ссылки уже
были выведены в этом отчёте, помечается ``(links displayed before)``.
"""
from __future__ import annotations

from typing import List, Mapping, Sequence, Set

HEADER = "SiteMap display"
FOOTER = "The END"
PAGE_RULE = "=" * 32
SECTION_RULE = "-" * 32
DEFAULT_OFFSET = "   "


def _offset(unit: str, depth: int) -> str:
    return unit * (depth + 1)


def _render_page(
    site_map: Mapping[str, Sequence[str]],
    max_depth: int,
    displayed: Set[str],
    unit: str,
    depth: int,
    url: str,
    out: List[str],
) -> None:
    url_ofs = _offset(unit, depth)
    link_ofs = url_ofs + unit
    links = site_map.get(url, ())

    out.append(PAGE_RULE)
    out.append(f"{url_ofs}* {url} (depth {depth})")
    out.append(f"{link_ofs} number of links = {len(links)}")
    out.append(SECTION_RULE)

    if depth + 1 > max_depth:
        return
    for i, link in enumerate(links):
        out.append(f"{link_ofs}- {i} - [{link}]")
        if link == url:
            continue
        if url in displayed:
            out.append(f"{link_ofs} (links displayed before)")
            continue
        _render_page(site_map, max_depth, displayed, unit, depth + 1, link, out)
    displayed.add(url)
    out.append(SECTION_RULE)


def render_sitemap(
    site_map: Mapping[str, Sequence[str]],
    max_depth: int,
    start_url: str,
    offset: str = DEFAULT_OFFSET,
) -> str:
    """
    Возвращает текст отчёта для site_map, начиная со start_url.

    :param site_map: отображение URL -> список ссылок (не изменяется)
    :param max_depth: глубина, дальше которой ссылки не раскрываются
    :param start_url: корень дерева
    :param offset: единица отступа на один уровень
    """
    lines: List[str] = [HEADER, ""]
    _render_page(site_map, max_depth, set(), offset, 0, start_url, lines)
    lines.extend(["", FOOTER])
    return "\n".join(lines)
