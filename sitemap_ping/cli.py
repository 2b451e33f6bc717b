# === FILE: sitemap_ping/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for the post-deploy sitemap ping.

Commands:
  run       Check the build output and ping the search engines
  config    Show the resolved configuration
  targets   List the ping endpoints

Common options:
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file (stdout only by default)
  --log-format FORMAT Logging format string

Options of run / config:
  --publish-dir DIR   Build output directory (env PUBLISH_DIR)
  --site-url URL      Public site URL (falls back to env URL)
  --sitemap-path PATH Sitemap path inside the site (default /sitemap-index.xml)
  --inputs FILE       YAML/JSON file with plugin inputs (siteUrl, sitemapPath)

Options of run:
  --timeout SEC       Per-request timeout
  --concurrent        Send the pings at the same time
  --json PATH         Save a JSON report of the run

Example:
  PUBLISH_DIR=dist URL=https://example.com sitemap-ping run
"""
import sys
from pathlib import Path

import click

from sitemap_ping import __version__
from sitemap_ping.config import PluginInputs, load_inputs, resolve_config
from sitemap_ping.hook import run_hook
from sitemap_ping.logger import configure
from sitemap_ping.models import Stop
from sitemap_ping.notifier import DEFAULT_TARGETS
from sitemap_ping.report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _collect_inputs(inputs_file, site_url, sitemap_path) -> PluginInputs:
    data = {}
    if inputs_file is not None:
        try:
            data = load_inputs(inputs_file).model_dump(exclude_none=True)
        except Exception as e:
            print_error(f'Could not load inputs: {e}')
    if site_url:
        data['site_url'] = site_url
    if sitemap_path:
        data['sitemap_path'] = sitemap_path
    return PluginInputs.model_validate(data)


def input_options(func):
    """Options shared by commands that resolve the configuration."""
    options = [
        click.option(
            '--publish-dir', '-d', 'publish_dir',
            envvar='PUBLISH_DIR', required=True,
            type=click.Path(file_okay=False, path_type=Path),
            help='Build output directory (env PUBLISH_DIR)'
        ),
        click.option('--site-url', '-u', 'site_url', default=None, help='Public site URL (env URL as fallback)'),
        click.option('--sitemap-path', '-s', 'sitemap_path', default=None, help='Sitemap path, e.g. /sitemap.xml'),
        click.option(
            '--inputs', '-i', 'inputs_file',
            default=None,
            type=click.Path(dir_okay=False, path_type=Path),
            help='YAML/JSON file with plugin inputs'
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='sitemap-ping, version %(version)s')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(message)s',
    show_default=True,
    help='Logging format string'
)
def cli(log_level, log_file, log_format):
    """Ping search engines with the site's sitemap after a deploy."""
    configure(level=log_level, log_file=log_file, log_format=log_format)


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@input_options
@click.option('--timeout', '-t', 'timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Per-request timeout in seconds [10]')
@click.option('--concurrent', is_flag=True, help='Send all pings at the same time')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report of the run'
)
def run(publish_dir, site_url, sitemap_path, inputs_file, timeout, concurrent, json_output):
    """Run the hook. Exits 0 whatever the pings return."""
    inputs = _collect_inputs(inputs_file, site_url, sitemap_path)
    report = run_hook(
        {'PUBLISH_DIR': str(publish_dir)},
        inputs,
        timeout=timeout,
        concurrent=concurrent or None,
    )
    if json_output:
        try:
            saved = render_json(report, json_output)
            click.echo(f'JSON report: {saved}')
        except OSError as e:
            click.secho(f'Could not save JSON report: {e}', fg='yellow', err=True)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@input_options
def show_config(publish_dir, site_url, sitemap_path, inputs_file):
    """Show the resolved configuration as JSON."""
    inputs = _collect_inputs(inputs_file, site_url, sitemap_path)
    resolved = resolve_config(inputs, publish_dir)
    if isinstance(resolved, Stop):
        print_error(f'Configuration unresolved: {resolved.reason}')
    click.echo(resolved.value.model_dump_json(indent=2))


@cli.command('targets', context_settings=CONTEXT_SETTINGS)
def show_targets():
    """List the ping endpoints in the order they are called."""
    for target in DEFAULT_TARGETS:
        click.echo(f'{target.name}\t{target.url_template}')


if __name__ == "__main__":
    cli()
