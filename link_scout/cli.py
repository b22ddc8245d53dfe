# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of the LinkScout crawler.

Commands:
  crawl     Crawl the URLs read from stdin and print what was found
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (default: ./linkscout.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file (stderr always)
  --log-format FORMAT Logging format string

crawl options:
  -t, --threads N     Parallel requests per seed [8]
  -d, --depth N       Crawl depth, 0 for unlimited [2]
  --insecure          Disable TLS verification
  --subs              Include subdomains in scope
  -s, --source        Prefix results with [href], [script] or [form]
  -h, --headers STR   Custom headers, "Cookie: foo=bar;;Referer: http://example.com/"
  -u, --unique        Show only unique results
  --timeout SEC       Per-request timeout

Additionally:
  --version, -v       Show the LinkScout version

Example:
  cat urls.txt | link-scout crawl -d 3 -s -u
"""
import asyncio
import sys
from pathlib import Path

import click
from click.core import ParameterSource

from link_scout import __version__
from link_scout.config import ValidationError, apply_overrides, load_config
from link_scout.headers import HeaderFormatError, parse_headers
from link_scout.logger import DEFAULT_FORMAT, configure
from link_scout.runner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

# crawl option name -> CrawlerConfig field
_OVERRIDABLE = {
    "threads": "threads",
    "depth": "depth",
    "insecure": "insecure",
    "subs": "subs",
    "show_source": "show_source",
    "raw_headers": "headers",
    "unique": "unique",
    "timeout": "timeout",
}


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkScout: enumerate links, scripts and forms of web properties."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Error loading configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--threads', '-t', 'threads', type=int, default=8, show_default=True,
              help='Number of threads to utilise.')
@click.option('--depth', '-d', 'depth', type=int, default=2, show_default=True,
              help='Depth to crawl.')
@click.option('--insecure', is_flag=True, help='Disable TLS verification.')
@click.option('--subs', is_flag=True, help='Include subdomains for crawling.')
@click.option('--source', '-s', 'show_source', is_flag=True,
              help='Show the source of URL based on where it was found (href, form, script).')
@click.option('--headers', '-h', 'raw_headers', default='',
              help='Custom headers separated by two semi-colons. '
                   'E.g. -h "Cookie: foo=bar;;Referer: http://example.com/"')
@click.option('--unique', '-u', 'unique', is_flag=True, help='Show only unique urls.')
@click.option('--timeout', 'timeout', type=float, default=10.0, show_default=True,
              help='Per-request timeout (seconds).')
@click.pass_context
def crawl(ctx, **options):
    """Crawl every URL read from stdin."""
    overrides = {
        field: options[name]
        for name, field in _OVERRIDABLE.items()
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE
    }
    try:
        cfg = apply_overrides(ctx.obj['config'], overrides)
    except ValidationError as e:
        print_error(f'Invalid option: {e}')

    try:
        headers = parse_headers(cfg.headers)
    except HeaderFormatError as e:
        print_error(f'Error parsing headers: {e}')

    if _stdin_is_tty():
        print_error('No urls detected. Hint: cat urls.txt | link-scout crawl')

    asyncio.run(start_crawl(cfg, headers, sys.stdin, sys.stdout))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
