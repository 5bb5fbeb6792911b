"""Listening statistics commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from src.application.services.listening_service import ListeningService
from src.config import settings
from src.domain.collection.index import CollectionIndex
from src.domain.matching.types import TitleMatch
from src.infrastructure.cli.ui import (
    command_error_handler,
    display_match,
    display_settings,
    display_statistics,
)
from src.infrastructure.connectors.files import (
    DEFAULT_PAGE_SIZE,
    DetectionLogFile,
    JsonCollectionFile,
)

CollectionPath = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Collection export (JSON list of catalog records)",
    ),
]


def register_stats_commands(app: typer.Typer) -> None:
    """Register statistics commands on the main app."""

    @app.command(rich_help_panel="📊 Listening")
    @command_error_handler
    def stats(
        collection: CollectionPath,
        detections: Annotated[
            Path,
            typer.Argument(
                exists=True,
                file_okay=True,
                dir_okay=False,
                help="Detection log (JSON lines)",
            ),
        ],
        page_size: Annotated[
            int, typer.Option("--page-size", help="Albums per collection page")
        ] = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Replay a detection log against a collection and show statistics."""
        service = ListeningService.from_settings(settings)
        result = asyncio.run(
            service.run(
                DetectionLogFile(detections).detections(),
                JsonCollectionFile(collection, page_size=page_size).collection_pages(),
            )
        )
        display_statistics(result)

    @app.command(rich_help_panel="📊 Listening")
    @command_error_handler
    def match(
        collection: CollectionPath,
        title: Annotated[str, typer.Argument(help="Recognized album or song title")],
        artist: Annotated[
            str | None, typer.Option("--artist", "-a", help="Recognized artist")
        ] = None,
    ) -> None:
        """Show the best fuzzy match for a title in the collection."""
        matching = settings.matching
        index = CollectionIndex.build(
            JsonCollectionFile(collection).read_all(),
            title_weight=matching.title_weight,
            artist_weight=matching.artist_weight,
            tie_epsilon=matching.tie_epsilon,
        )
        result = index.find_best_title_match(title, artist)
        accepted = (
            isinstance(result, TitleMatch)
            and result.score <= matching.acceptance_threshold
        )
        display_match(result, accepted, matching.acceptance_threshold)

    @app.command(name="settings", rich_help_panel="⚙️ System")
    def show_settings() -> None:
        """Show effective configuration."""
        display_settings(settings.model_dump(mode="json"))
