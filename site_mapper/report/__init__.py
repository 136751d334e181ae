# File: site_mapper/report/__init__.py
"""site_mapper.report: Генерация отчётов (текстовое дерево и JSON) для CLI и тестов."""

from site_mapper.report.json_report import render_json
from site_mapper.report.tree_report import render_sitemap

__all__ = ["render_json", "render_sitemap"]
