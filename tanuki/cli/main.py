"""
CLI entry point for Tanuki.

Provides a thin command-line interface over the client core: issue raw API
requests, follow pagination links and inspect the effective configuration.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from tanuki._version import __version__
from tanuki.cli.context import CLIContext, pass_context
from tanuki.config.settings import get_default_config_path, load_config
from tanuki.core.pagination import PaginationDescriptor, link_url
from tanuki.core.request import METHODS
from tanuki.exceptions import APIError, InvalidConfigurationError, TanukiError
from tanuki.logging_config import setup_logging


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Override the configured logging level',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='tanuki')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    Tanuki - GitLab API client.

    Issues requests against the GitLab REST API using the endpoint and token
    from the configuration file or the GITLAB_API_* environment variables.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)
    except TanukiError as e:
        click.echo(f"Error: Failed to load configuration: {e}", err=True)
        sys.exit(1)

    effective_log_level = log_level.upper() if log_level else ctx.config.logging.level
    log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None
    setup_logging(
        level=effective_log_level,
        log_file=log_file,
        json_format=ctx.config.logging.json_format,
    )

    if verbose:
        logger = logging.getLogger("tanuki")
        logger.info(f"Loaded configuration from: {ctx.config_path or 'defaults'}")
        logger.info(f"Log level: {effective_log_level}")


def parse_param_options(items: Tuple[str, ...]) -> Dict[str, str]:
    """Turn repeated ``key=value`` options into a params mapping."""
    params: Dict[str, str] = {}
    for item in items:
        if '=' not in item:
            raise click.BadParameter(
                f"Invalid parameter format '{item}'. Expected key=value",
                param_hint="'--param'",
            )
        key, value = item.split('=', 1)
        key = key.strip()
        if not key:
            raise click.BadParameter(
                f"Invalid parameter format '{item}'. Key must not be empty",
                param_hint="'--param'",
            )
        params[key] = value
    return params


def render_pagination(console: Console, endpoint: str, pagination: PaginationDescriptor) -> None:
    """Print pagination links and counters as a table, if there are any."""
    table = Table(title="Pagination", show_header=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for name in ("first", "prev", "next", "last"):
        descriptor = getattr(pagination, name)
        if descriptor is not None:
            table.add_row(name, link_url(endpoint, descriptor)[1])
    for name in ("page", "per_page", "total", "total_pages"):
        value = getattr(pagination, name)
        if value is not None:
            table.add_row(name, str(value))

    if table.row_count:
        console.print(table)


@cli.command('request')
@click.argument('method', type=click.Choice(METHODS, case_sensitive=False))
@click.argument('path')
@click.option(
    '--param',
    '-p',
    'param_items',
    multiple=True,
    help='Request parameter as key=value (can be specified multiple times)',
)
@click.option(
    '--json-body',
    default=None,
    help='JSON document sent as the body of a POST or PUT',
)
@click.option('--endpoint', '-e', default=None, help='Override the configured API endpoint')
@click.option('--token', '-t', default=None, help='Override the configured private token')
@click.option('--timeout', type=float, default=None, help='Request timeout in seconds')
@click.option(
    '--pages',
    type=click.IntRange(min=1),
    default=1,
    help='Follow "next" links until this many pages were fetched (default: 1)',
)
@click.option(
    '--format',
    '-f',
    'output_format',
    type=click.Choice(['pretty', 'json'], case_sensitive=False),
    default='pretty',
    help='Output format (default: pretty)',
)
@pass_context
def request(
    ctx: CLIContext,
    method: str,
    path: str,
    param_items: Tuple[str, ...],
    json_body: Optional[str],
    endpoint: Optional[str],
    token: Optional[str],
    timeout: Optional[float],
    pages: int,
    output_format: str,
):
    """
    Issue one API request and print the decoded response.

    Examples:

        tanuki request GET /projects/42/deploy_keys

        tanuki request POST /projects/42/repository/tags \\
            -p tag_name=v1.0.0 -p ref=main

        tanuki request GET /projects --pages 3 -p per_page=100
    """
    params = parse_param_options(param_items)

    body = None
    if json_body is not None:
        try:
            body = json.loads(json_body)
        except ValueError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="'--json-body'")

    console = Console()
    try:
        with ctx.make_client(endpoint=endpoint, token=token, timeout=timeout) as client:
            response = client.request(method.upper(), path, params, json=body)
            fetched = [response]
            while len(fetched) < pages and response.pagination.next is not None:
                response = client.execute(response.pagination.next)
                fetched.append(response)
            endpoint_url = client.config.endpoint
    except APIError as e:
        click.echo(f"Error: {e.kind} ({e.http_status}): {e.message}", err=True)
        sys.exit(1)
    except TanukiError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for page in fetched:
        if output_format.lower() == 'json':
            click.echo(json.dumps(page.value, indent=2))
            continue
        if page.value is None:
            console.print("(no content)")
        else:
            console.print_json(data=page.value)
        render_pagination(console, endpoint_url, page.pagination)


@cli.command('show-config')
@pass_context
def show_config(ctx: CLIContext):
    """
    Show the effective client configuration.

    The token is never printed; only whether one is configured.
    """
    client_config = ctx.config.client

    table = Table(title="Tanuki configuration", show_header=True)
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_row("config_file", ctx.config_path or get_default_config_path())
    table.add_row("endpoint", client_config.endpoint)
    table.add_row("token", "(anonymous)" if client_config.anonymous else "***")
    table.add_row("auth_header", client_config.auth_header)
    table.add_row("user_agent", client_config.user_agent)
    table.add_row("timeout", "none" if client_config.timeout is None else str(client_config.timeout))
    table.add_row("verify_ssl", str(client_config.verify_ssl).lower())
    for key, value in client_config.default_params.items():
        table.add_row(f"default_params.{key}", str(value))
    table.add_row("logging.level", ctx.config.logging.level)

    Console().print(table)


if __name__ == '__main__':
    cli()
