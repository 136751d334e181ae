# site_mapper/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteMapper.

Сериализация итога обхода (CrawlOutcome) в файл.
"""
import json
from pathlib import Path

from site_mapper.crawler.models import CrawlOutcome


def render_json(outcome: CrawlOutcome, output_path: Path | str, *, base_url: str = "") -> Path:
    """
    Сохраняет карту сайта в формате JSON по указанному пути.

    :param outcome: итог обхода с картой сайта
    :param output_path: путь к JSON-файлу
    :param base_url: корневой URL обхода
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(outcome, 'reports/sitemap.json', base_url=cfg.base_url)
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'base_url': base_url,
        'status': outcome.status.value,
        'elapsed': round(outcome.elapsed, 3),
        'pages': outcome.site_map,
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
