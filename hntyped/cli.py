"""Command line driver: print validated Hacker News items."""
import json
import logging

import click

from . import __version__, registry
from .client import HackerNewsClient
from .errors import HackerNewsError
from .formatting import format_item
from .logs import configure_logging

logger = logging.getLogger(__name__)

MAX_COUNT = 500


@click.group()
@click.version_option(version=__version__, prog_name="hntyped")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--base-url", default=None, help="API root (default: $HACKERNEWS_BASE_URL or the public API).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_json: bool, base_url):
    """Fetch Hacker News items and check them against their schemas."""
    configure_logging(verbose=verbose, log_json=log_json)
    ctx.obj = HackerNewsClient(base_url=base_url)


def _fail(err: HackerNewsError):
    logger.error("%s: %s", type(err).__name__, err)
    click.echo(f"error: {err}", err=True)
    raise SystemExit(1)


@cli.command()
@click.option("-n", "--count", default=15, show_default=True,
              type=click.IntRange(1, MAX_COUNT, clamp=True), help="How many top items to print.")
@click.pass_obj
def top(client: HackerNewsClient, count: int):
    """Print the current top items, one line each."""
    try:
        items = client.fetch_top_items(count)
    except HackerNewsError as e:
        _fail(e)
    for item in items:
        click.echo(format_item(item) + "\n")


@cli.command()
@click.argument("item_id", type=click.IntRange(min=0))
@click.pass_obj
def item(client: HackerNewsClient, item_id: int):
    """Print a single item."""
    try:
        it = client.fetch_item(item_id)
    except HackerNewsError as e:
        _fail(e)
    click.echo(format_item(it))


@cli.command()
@click.argument("name", type=click.Choice(sorted(registry.SCHEMAS)))
@click.option("--indent", default=2, show_default=True, help="JSON indentation.")
def schema(name: str, indent: int):
    """Print a schema as a JSON Schema document."""
    click.echo(json.dumps(registry.SCHEMAS[name].json_schema(), indent=indent))
