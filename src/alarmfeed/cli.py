"""Command-line interface for alarmfeed."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from alarmfeed.core.config import Config, load_config
from alarmfeed.core.errors import ConfigError
from alarmfeed.core.handler import handle_request
from alarmfeed.core.models import ShowType
from alarmfeed.services.classifier import classify

console = Console()


def configure_logging(level: int) -> None:
    """Send log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def display_podcasts(payload: dict, console: Console) -> None:
    """Display a page of podcasts in a table."""
    podcasts = payload["podcasts"]
    if not podcasts:
        console.print("[yellow]No podcasts found.[/yellow]")
    else:
        table = Table(title="Podcasts")
        table.add_column("Title", style="bold")
        table.add_column("Show", style="cyan")
        table.add_column("Music", width=5)
        table.add_column("Published", style="green")
        table.add_column("Duration", style="dim")

        for podcast in podcasts:
            created = podcast["createdDate"]
            table.add_row(
                podcast["title"],
                podcast["showType"],
                "yes" if podcast["withMusic"] else "no",
                created[:10] if created else "-",
                podcast["duration"] or "-",
            )

        console.print(table)

    console.print(
        f"Page {payload['page']} of {payload['totalPages']} "
        f"({payload['totalItems']} podcasts)"
    )


@click.group()
@click.version_option(package_name="alarmfeed")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """alarmfeed - paginated JSON listing of the Alarm sa Daskom i Mladjom podcast feed."""
    try:
        config = load_config()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    configure_logging(logging.DEBUG if verbose else config.logging.get_level())
    ctx.obj = config


@main.command()
@click.option("--host", default=None, help="Interface to bind (default: from config)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind (default: from config)")
@click.pass_obj
def serve(config: Config, host: str | None, port: int | None) -> None:
    """Serve the podcast listing over HTTP.

    Example: alarmfeed serve --port 8080
    """
    from alarmfeed.server import serve as run_server

    run_server(config, host=host, port=port)


@main.command()
@click.option("--page", "-n", default="1", help="Page number (default: 1)")
@click.option("--date", "date_", default=None, help="ISO 8601 date bound")
@click.option(
    "--before/--after",
    "is_before",
    default=False,
    help="Keep podcasts before (or after, the default) --date",
)
@click.option(
    "--show",
    type=click.Choice([show.value for show in ShowType]),
    default=None,
    help="Only list podcasts of this show",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON response")
@click.pass_obj
def episodes(
    config: Config,
    page: str,
    date_: str | None,
    is_before: bool,
    show: str | None,
    as_json: bool,
) -> None:
    """List one page of podcasts from the feed.

    Example: alarmfeed episodes --show punaUstaPoezije
    """
    params: dict[str, str] = {"page": page, "is_before": "true" if is_before else "false"}
    if date_ is not None:
        params["date"] = date_
    if show is not None:
        params["show"] = show

    response = handle_request(params, config)

    if not response.ok:
        message = response.body
        if response.content_type.startswith("application/json"):
            message = json.loads(response.body)["error"]
        click.echo(f"Error: {message}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(response.body)
    else:
        display_podcasts(json.loads(response.body), console)


@main.command(name="classify")
@click.argument("media")
@click.option("--title", "-t", default="", help="Episode title")
def classify_command(media: str, title: str) -> None:
    """Show the show type of a media filename or URL.

    Example: alarmfeed classify pup_123.mp3
    """
    classification = classify(media, title)
    click.echo(f"showType: {classification.show_type}")
    click.echo(f"withMusic: {str(classification.with_music).lower()}")


if __name__ == "__main__":
    main()
