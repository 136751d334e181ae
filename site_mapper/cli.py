# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteMapper через командную строку.

Команды:
  crawl     Обойти сайт и вывести дерево страниц и ссылок
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязателен)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --url URL           Базовый URL (default: https://docs.docker.com)
  --depth INT         Глубина обхода, 0..10 (default: 3)
  --timeout SEC       Таймаут на один запрос
  --json PATH         Дополнительно сохранить карту сайта в JSON

Дополнительно:
  --version, -v       Показать версию SiteMapper

Пример:
  site_mapper crawl --url https://docs.docker.com --depth 2 --json sitemap.json
"""
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.crawler.models import CrawlStatus
from site_mapper.engine import Engine
from site_mapper.errors import ConfigError
from site_mapper.logger import init_logging
from site_mapper.report.json_report import render_json
from site_mapper.report.tree_report import render_sitemap
from site_mapper.utils import format_elapsed

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

# pydantic.ValidationError is a ValueError
_CONFIG_ERRORS = (ConfigError, OSError, ValueError, TypeError)


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _config_from_ctx(ctx, **overrides):
    try:
        return load_config(ctx.obj.get('config_path'), **overrides)
    except _CONFIG_ERRORS as e:
        print_error(f'ERROR: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteMapper CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--url', '-u', 'url',
    default=None,
    help='Базовый URL, с которого начинается обход (default: https://docs.docker.com)'
)
@click.option(
    '--depth', '-d', 'depth',
    type=int,
    default=None,
    help='Глубина обхода, до 10 уровней (default: 3)'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут на один запрос (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить карту сайта в JSON-файл'
)
@click.pass_context
def crawl(ctx, url, depth, timeout, json_output):
    """Обойти сайт и вывести дерево страниц."""
    cfg = _config_from_ctx(ctx, base_url=url, max_depth=depth, timeout=timeout)

    click.echo('\n--- Starting to crawl ---\n')
    try:
        outcome = Engine(cfg).start_crawl()
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if not outcome.has_report:
        click.secho(f'\nfailure!: {outcome.error}\n', fg='red', err=True)
        sys.exit(outcome.exit_code)

    click.echo(render_sitemap(outcome.site_map, cfg.max_depth, cfg.base_url))
    elapsed = format_elapsed(outcome.elapsed)
    if outcome.status is CrawlStatus.INTERRUPTED:
        click.echo(f'\nInterrupted by {outcome.signal_name} after {elapsed}\n')
    else:
        click.echo(f'\n>> The crawler took {elapsed} <<\n')

    if json_output:
        try:
            saved_json = render_json(outcome, json_output, base_url=cfg.base_url)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    sys.exit(outcome.exit_code)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = _config_from_ctx(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
