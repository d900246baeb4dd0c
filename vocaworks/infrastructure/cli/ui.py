"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable
import functools
import json
from typing import Any, ParamSpec, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from vocaworks.application.utilities.results import AggregationResult
from vocaworks.config import get_logger

console = Console()
logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Logs the failure with Loguru, prints a short message with Rich and
    converts it into a non-zero Typer exit.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except (typer.Exit, typer.BadParameter):
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def display_works(
    items: list[dict[str, Any]],
    result: AggregationResult,
    title: str = "Works",
    output_format: str = "table",
) -> None:
    """Print the rendered collection and a warning for missing songs.

    Args:
        items: Display payloads in collection order
        result: Aggregation result the payloads were rendered from
        title: Table title
        output_format: "table" or "json"
    """
    if output_format == "json":
        payload = {
            "songs": items,
            "missing": result.error_count,
            "errors": [
                {"songId": error.song_id, "kind": str(error.kind), "message": error.message}
                for error in result.errors
            ],
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="yellow")
    table.add_column("Song", style="green")
    table.add_column("Vocalists", style="magenta")
    table.add_column("Staff", style="cyan")
    table.add_column("PVs", style="dim")

    for position, item in enumerate(items, start=1):
        staff = "\n".join(
            f"{bucket['role']}: {', '.join(bucket['names'])}" for bucket in item["artists"]
        )
        services = ", ".join(pv["service"] for pv in item["pvs"])
        table.add_row(
            str(position),
            item["publishDate"],
            f"[link={item['url']}]{escape(item['name'])}[/link]",
            escape(", ".join(item["vocalists"])),
            escape(staff),
            services,
        )

    console.print(table)
    display_missing_summary(result)


def display_missing_summary(result: AggregationResult) -> None:
    """Warn about songs that could not be aggregated."""
    if not result.is_partial:
        return

    console.print(
        f"\n[bold yellow]⚠ {result.error_count} of {result.requested_count} "
        f"songs are missing[/bold yellow]"
    )
    for kind, count in sorted(result.error_summary.items()):
        console.print(f"  [yellow]{kind}[/yellow]: {count}")
