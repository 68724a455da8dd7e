"""
Main CLI application using Typer with router-based command dispatch.

Command groups are registered through the CliRouter so the command surface
is declared in one place.
"""

from __future__ import annotations

import typer

from ..infra.logging import configure_logging
from .commands import playlist
from .router import get_router

app = typer.Typer(help="storecast operator CLI")

router = get_router(app)

router.register(
    "playlist",
    playlist.app,
    help_text="Playlist scheduling operations",
)


@app.callback()
def main(
    ctx: typer.Context,
    json: bool = typer.Option(False, "--json", help="Output in JSON format"),
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL for this run"),
):
    """storecast - broadcast-day playlists for in-store audio."""
    configure_logging(log_level)
    # Store JSON flag in context for subcommands to use
    ctx.ensure_object(dict)
    ctx.obj["json"] = json


def cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
