"""CLI commands for fillerinfo.

- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console for consistent, styled UX.
- Every command builds its own provider, identity cache and filler database
  from resolved settings, so nothing is shared between invocations.
"""

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fillerinfo.__about__ import __version__
from fillerinfo.core.classifier import FillerClassifier, FillerStatus, describe
from fillerinfo.core.episode_mapper import EpisodeQuery
from fillerinfo.core.filler_db import load_filler_database
from fillerinfo.core.id_cache import IdentityCache
from fillerinfo.core.matcher import DEFAULT_THRESHOLD, find_best_match
from fillerinfo.metadata.cache import MemoryCache
from fillerinfo.metadata.clients.tmdb import TMDBClient
from fillerinfo.metadata.settings import MissingAPIKeyError, Settings
from fillerinfo.utils.config import (
    filler_db_path,
    id_cache_path,
    resolve_setting,
    set_setting,
)
from fillerinfo.utils.debug import setup_logger

app = typer.Typer(
    name="fillerinfo",
    help="Look up whether anime episodes are canon, filler or mixed.",
    add_completion=False,
)
console = Console()


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    NO_DATA = 2


_STATUS_STYLES: dict[FillerStatus | None, str] = {
    FillerStatus.FILLER: "bold red",
    FillerStatus.MIXED: "bold yellow",
    FillerStatus.CANON: "bold green",
    None: "dim",
}

FILLER_DB = Annotated[
    Optional[Path],
    typer.Option("--db", help="Filler database JSON file (data.filler_db)."),
]

ID_CACHE = Annotated[
    Optional[Path],
    typer.Option("--cache", help="Identity cache JSON file (data.id_cache)."),
]

THRESHOLD = Annotated[
    Optional[float],
    typer.Option("--threshold", help="Minimum fuzzy match score (match.threshold)."),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the result as JSON, including the provider's own absolute number.",
    ),
]


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging (or set FILLERINFO_DEBUG=1)."
    ),
) -> None:
    """Configure logging for every command."""
    setup_logger(logging.DEBUG if verbose else None)


def _build_classifier(
    db: Path | None, cache: Path | None, threshold: float | None
) -> FillerClassifier:
    settings = Settings()
    try:
        settings.require_keys()
    except MissingAPIKeyError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(ExitCode.ERROR)

    ttl = resolve_setting("metadata.cache_ttl", default=0.0)
    size = resolve_setting("metadata.cache_size", default=1024)
    provider = TMDBClient(
        settings,
        series_cache=MemoryCache(max_entries=size, ttl=ttl or None),
        season_cache=MemoryCache(max_entries=size, ttl=ttl or None),
    )
    return FillerClassifier(
        provider,
        IdentityCache(id_cache_path(cache)),
        load_filler_database(filler_db_path(db)),
        threshold=resolve_setting(
            "match.threshold", default=DEFAULT_THRESHOLD, cli_value=threshold
        ),
    )


def _render(
    query: EpisodeQuery,
    status: FillerStatus | None,
    as_json: bool,
    provider_absolute: int | None = None,
) -> None:
    if as_json:
        console.print_json(
            json.dumps(
                {
                    "identifier": query.identifier,
                    "season": query.season,
                    "episode": query.episode,
                    "status": status.value if status else None,
                    "provider_absolute": provider_absolute,
                }
            )
        )
        return
    headline, detail = describe(status)
    console.print(
        Panel(
            f"[{_STATUS_STYLES[status]}]{headline}[/]\n{detail}",
            title=f"{query.identifier} S{query.season}E{query.episode}",
            expand=False,
        )
    )


async def _classify_query(
    classifier: FillerClassifier, query: EpisodeQuery, with_provider_absolute: bool
) -> tuple[FillerStatus | None, int | None]:
    """Classify *query*, optionally asking the provider for its own absolute number."""
    status = await classifier.classify(query.identifier, query.season, query.episode)
    if not with_provider_absolute:
        return status, None
    return status, await classifier.mapper.provider_absolute_number(query)


def _run_classify(
    query: EpisodeQuery,
    db: Path | None,
    cache: Path | None,
    threshold: float | None,
    as_json: bool,
) -> None:
    classifier = _build_classifier(db, cache, threshold)
    status, provider_absolute = asyncio.run(_classify_query(classifier, query, as_json))
    _render(query, status, as_json, provider_absolute)
    if status is None:
        raise typer.Exit(ExitCode.NO_DATA)


@app.command()
def classify(
    identifier: Annotated[str, typer.Argument(help="IMDb ID (tt...) or kitsu:<id>.")],
    season: Annotated[int, typer.Argument(min=1, help="Season number.")],
    episode: Annotated[int, typer.Argument(min=1, help="Episode number.")],
    db: FILLER_DB = None,
    cache: ID_CACHE = None,
    threshold: THRESHOLD = None,
    as_json: JSON_OUTPUT = False,
) -> None:
    """Classify an episode as canon, filler or mixed."""
    query = EpisodeQuery(identifier=identifier, season=season, episode=episode)
    _run_classify(query, db, cache, threshold, as_json)


@app.command("classify-stream")
def classify_stream(
    stream_id: Annotated[
        str, typer.Argument(help="Stream ID such as tt0409591:1:5 or kitsu:9253:50.")
    ],
    db: FILLER_DB = None,
    cache: ID_CACHE = None,
    threshold: THRESHOLD = None,
    as_json: JSON_OUTPUT = False,
) -> None:
    """Classify the episode addressed by a colon-separated stream ID."""
    try:
        query = EpisodeQuery.from_stream_id(stream_id)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(ExitCode.ERROR)
    _run_classify(query, db, cache, threshold, as_json)


@app.command()
def match(
    name: Annotated[str, typer.Argument(help="Series title to look up.")],
    db: FILLER_DB = None,
    threshold: THRESHOLD = None,
) -> None:
    """Show which filler database entry a title resolves to."""
    database = load_filler_database(filler_db_path(db))
    result = find_best_match(
        name,
        database,
        resolve_setting("match.threshold", default=DEFAULT_THRESHOLD, cli_value=threshold),
    )
    if result is None:
        console.print(f"[yellow]No match found for[/yellow] {name!r}")
        raise typer.Exit(ExitCode.NO_DATA)
    console.print(
        f"[bold]{result.name}[/bold] ([cyan]{result.key}[/cyan]) "
        f"score {max(0.0, result.score):.2f}"
    )


@app.command("cache")
def show_cache(cache: ID_CACHE = None) -> None:
    """List identity cache entries."""
    entries = asyncio.run(IdentityCache(id_cache_path(cache)).entries())
    if not entries:
        console.print("[dim]Identity cache is empty.[/dim]")
        return
    table = Table()
    table.add_column("Identifier", style="cyan")
    table.add_column("Filler key", style="magenta")
    for identifier, key in sorted(entries.items()):
        table.add_row(identifier, key)
    console.print(table)


@app.command("config")
def config_set(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. data.filler_db.")],
    value: Annotated[str, typer.Argument(help="Value to store.")],
) -> None:
    """Store a setting in the fillerinfo config file."""
    set_setting(key, value)
    console.print(f"Set [bold]{key}[/bold] = {value}")


@app.command()
def version() -> None:
    """Show the version of fillerinfo."""
    console.print(f"FillerInfo version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
