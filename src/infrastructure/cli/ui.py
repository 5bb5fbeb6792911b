"""UI helpers for CLI interaction.

This module provides reusable Rich rendering for listening statistics and
match results, keeping presentation separate from the statistics engine.
"""

from collections.abc import Callable
import functools
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
import typer

from src.config import get_logger
from src.domain.matching.types import NoCandidates, TitleMatch
from src.domain.statistics.types import (
    AlbumListening,
    ArtistListening,
    CollectionCounts,
    InsufficientData,
    ListeningDuration,
    NoData,
    StatisticsSnapshot,
)

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

NOT_ENOUGH_DATA = "[dim italic]Not enough listening yet[/dim italic]"
NO_DATA = "[dim]-[/dim]"


def command_error_handler[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with integrated error handling
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


# =============================================================================
# FORMATTERS
# =============================================================================


def format_duration(seconds: int) -> str:
    """Human readable duration such as '1h 05m 12s'."""
    duration = ListeningDuration.from_seconds(seconds)
    if duration.hours:
        return f"{duration.hours}h {duration.minutes:02d}m {duration.seconds:02d}s"
    return f"{duration.minutes}m {duration.seconds:02d}s"


def format_album(result: AlbumListening | NoData | InsufficientData) -> str:
    if isinstance(result, InsufficientData):
        return NOT_ENOUGH_DATA
    if isinstance(result, NoData):
        return NO_DATA
    return f"{result.album.display_title()} - {result.album.artist} ({format_duration(result.seconds)})"


def format_artist(result: ArtistListening | NoData | InsufficientData) -> str:
    if isinstance(result, InsufficientData):
        return NOT_ENOUGH_DATA
    if isinstance(result, NoData):
        return NO_DATA
    return f"{result.artist} ({result.minutes} mins)"


def format_counts(result: CollectionCounts | InsufficientData, noun: str = "albums") -> str:
    if isinstance(result, InsufficientData):
        return NOT_ENOUGH_DATA
    return f"{result.albums} {noun} w/ {result.artists} distinct artists"


# =============================================================================
# DISPLAY
# =============================================================================


def display_statistics(stats: StatisticsSnapshot, title: str = "Listening Summary") -> None:
    """Render a statistics snapshot as Rich tables."""
    console.print(f"\n[bold blue]{title}[/bold blue]")

    if not stats.available:
        remaining = max(0, stats.required_seconds - stats.total_seconds)
        console.print(
            Panel(
                f"Recorded {format_duration(stats.total_seconds)} of listening. "
                f"Statistics appear after {format_duration(stats.required_seconds)} "
                f"({format_duration(remaining)} to go).",
                title="Not enough data yet",
                border_style="yellow",
                expand=False,
            )
        )

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Statistic", style="cyan")
    summary.add_column("Value")

    total = stats.total_listening
    summary.add_row(
        "Total Time",
        NOT_ENOUGH_DATA
        if isinstance(total, InsufficientData)
        else format_duration(total.total_seconds),
    )
    summary.add_row("Top Album", format_album(stats.top_album))
    summary.add_row("Unloved", format_album(stats.least_played_album))
    summary.add_row("Top Artist", format_artist(stats.top_artist))
    summary.add_row("Listened", format_counts(stats.listened))
    summary.add_row("Collection", format_counts(stats.collection, noun="vinyls"))

    top_genre = stats.top_genre
    if isinstance(stats.genres, InsufficientData):
        summary.add_row("Top Genre", NOT_ENOUGH_DATA)
    elif top_genre is None:
        summary.add_row("Top Genre", NO_DATA)
    else:
        summary.add_row(
            "Top Genre", f"{top_genre.tag} ({top_genre.percentage}% of total listening)"
        )
    console.print(summary)

    if not isinstance(stats.ranked_albums, InsufficientData) and stats.ranked_albums:
        albums = Table(title="Top Albums", title_justify="left")
        albums.add_column("#", justify="right", style="dim")
        albums.add_column("Album")
        albums.add_column("Artist")
        albums.add_column("Minutes", justify="right")
        for position, entry in enumerate(stats.ranked_albums, start=1):
            albums.add_row(
                str(position), entry.album.display_title(), entry.album.artist, str(entry.minutes)
            )
        console.print(albums)

    if not isinstance(stats.ranked_artists, InsufficientData) and stats.ranked_artists:
        artists = Table(title="Top Artists", title_justify="left")
        artists.add_column("#", justify="right", style="dim")
        artists.add_column("Artist")
        artists.add_column("Minutes", justify="right")
        for position, entry in enumerate(stats.ranked_artists, start=1):
            artists.add_row(str(position), entry.artist, str(entry.minutes))
        console.print(artists)

    if not isinstance(stats.genres, InsufficientData) and stats.genres:
        genres = Table(title="Genres", title_justify="left")
        genres.add_column("Style")
        genres.add_column("Minutes", justify="right")
        genres.add_column("Share", justify="right")
        for genre in stats.genres:
            genres.add_row(genre.tag, str(genre.seconds // 60), f"{genre.percentage}%")
        console.print(genres)


def display_match(
    result: TitleMatch | NoCandidates,
    accepted: bool,
    threshold: float,
) -> None:
    """Render the outcome of a fuzzy title lookup."""
    if isinstance(result, NoCandidates):
        console.print("[yellow]No candidates: the collection is empty or no text was given[/yellow]")
        return

    status = "[green]accepted[/green]" if accepted else "[red]rejected[/red]"
    console.print(
        f"[bold]{result.album.title}[/bold] - {result.album.artist} "
        f"[dim](id {result.album.id})[/dim]\n"
        f"Score: {result.score:.3f} (threshold {threshold:.2f}, {status})"
    )


def display_settings(config: dict[str, Any]) -> None:
    """Render the effective configuration grouped by section."""
    table = Table(title="Effective Settings", title_justify="left")
    table.add_column("Section", style="cyan")
    table.add_column("Key")
    table.add_column("Value")
    for section, values in config.items():
        if isinstance(values, dict):
            for key, value in values.items():
                table.add_row(section, key, str(value))
        else:
            table.add_row(section, "", str(values))
    console.print(table)
