"""
Main CLI application using Typer.

Operator commands for running the playlist server, creating the schema and
rendering playlists straight from the database for inspection.
"""

from __future__ import annotations

from datetime import datetime

import typer

from ..infra.db import init_schema
from ..infra.exceptions import OnAirError
from ..infra.logging import configure_logging
from ..infra.schedule_repository import ScheduleRepository
from ..infra.settings import settings
from ..infra.uow import session
from ..runtime.clock import FixedClock, MasterClock
from ..runtime.config import PlaylistConfig
from ..usecases.episode_playlist import build_episode_playlist
from ..usecases.live_playlist import build_live_playlist

app = typer.Typer(help="OnAir operator CLI")
db_app = typer.Typer(name="db", help="Database operations")
playlist_app = typer.Typer(name="playlist", help="Render playlists from the schedule")

app.add_typer(db_app)
app.add_typer(playlist_app)


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        typer.echo(f"Error: --at must be an ISO-8601 instant, got {value!r}", err=True)
        raise typer.Exit(2)


@app.command("serve")
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (defaults to HOST)"),
    port: int = typer.Option(None, "--port", help="Bind port (defaults to PORT)"),
):
    """Run the HTTP playlist server."""
    from ..web.server import run_server

    run_server(host=host, port=port)


@db_app.command("init")
def db_init():
    """Create the schedule tables if they do not exist."""
    configure_logging()
    init_schema()
    typer.echo("Schema created")


@playlist_app.command("channel")
def channel_playlist(
    channel_id: str = typer.Argument(..., help="Channel id"),
    at: str = typer.Option(None, "--at", help="Render as of this ISO-8601 instant instead of now"),
):
    """Print the live playlist of a channel."""
    configure_logging()
    clock = FixedClock(_parse_instant(at)) if at else MasterClock()
    config = PlaylistConfig.from_settings(settings)
    try:
        with session() as db:
            body = build_live_playlist(ScheduleRepository(db), channel_id, clock.now_utc(), config)
    except OnAirError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)
    typer.echo(body, nl=False)


@playlist_app.command("episode")
def episode_playlist(episode_id: str = typer.Argument(..., help="Episode id")):
    """Print the static playlist of one episode."""
    configure_logging()
    config = PlaylistConfig.from_settings(settings)
    try:
        with session() as db:
            body = build_episode_playlist(ScheduleRepository(db), episode_id, config.format)
    except OnAirError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)
    typer.echo(body, nl=False)


cli = app
