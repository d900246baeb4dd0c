"""vocaworks CLI - Main application entry point."""

import asyncio
from typing import Annotated

import typer

from vocaworks import __version__
from vocaworks.application.use_cases.aggregate_works import AggregateWorksUseCase
from vocaworks.application.utilities.results import AggregationResult
from vocaworks.config import get_logger, log_startup_info, settings, setup_loguru_logger
from vocaworks.domain.transforms.display import render_collection
from vocaworks.infrastructure.cli.ui import command_error_handler, display_works
from vocaworks.infrastructure.connectors.discovery import DiscoveryConnector
from vocaworks.infrastructure.connectors.vocadb import VocaDBConnector

logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 vocaworks v{__version__} - Producer works from VocaDB",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

JsonOption = Annotated[
    bool, typer.Option("--json", help="Print the display payload as JSON")
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable debug logging")
]


def _render(result: AggregationResult, title: str, as_json: bool) -> None:
    items = render_collection(
        list(result.songs),
        site_url=settings.api.vocadb_site_url,
        date_format=settings.display.date_format,
        unknown_label=settings.display.unknown_date_label,
    )
    display_works(items, result, title=title, output_format="json" if as_json else "table")


async def _aggregate_entry(
    entry: str, artist_id: bool, discovery_url: str
) -> AggregationResult:
    async with VocaDBConnector() as vocadb:
        if artist_id:
            use_case = AggregateWorksUseCase(fetcher=vocadb, artist_songs=vocadb)
            return await use_case.execute_for_artist(int(entry))

        async with DiscoveryConnector(base_url=discovery_url) as discovery:
            use_case = AggregateWorksUseCase(fetcher=vocadb, discovery=discovery)
            return await use_case.execute_for_entry(entry)


async def _aggregate_song(song_id: int) -> AggregationResult:
    async with VocaDBConnector() as vocadb:
        return await AggregateWorksUseCase(fetcher=vocadb).execute([song_id])


@app.command(name="works", help="Aggregate every song of a producer")
@command_error_handler
def works(
    entry: Annotated[str, typer.Argument(help="Producer entry alias, or artist id with --artist-id")],
    artist_id: Annotated[
        bool,
        typer.Option("--artist-id", help="Treat ENTRY as a VocaDB artist id"),
    ] = False,
    dev: Annotated[
        bool,
        typer.Option("--dev", help="Use the local development discovery backend"),
    ] = False,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Aggregate, sort and print a producer's works."""
    setup_loguru_logger(verbose)
    log_startup_info()
    logger.info("Aggregating works for {!r}", entry, artist_id=artist_id, dev=dev)

    if artist_id and not entry.isdigit():
        raise typer.BadParameter("ENTRY must be a numeric artist id with --artist-id")

    discovery_url = (
        settings.api.discovery_development_url if dev else settings.discovery_base_url
    )
    result = asyncio.run(_aggregate_entry(entry, artist_id, discovery_url))
    _render(result, title=f"Works of {entry}", as_json=as_json)


@app.command(name="song", help="Aggregate a single song")
@command_error_handler
def song(
    song_id: Annotated[int, typer.Argument(help="VocaDB song id")],
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Aggregate and print one song."""
    setup_loguru_logger(verbose)
    result = asyncio.run(_aggregate_song(song_id))
    _render(result, title=f"Song {song_id}", as_json=as_json)


@app.command(name="version", help="Show the installed version")
def version() -> None:
    typer.echo(f"vocaworks {__version__}")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
