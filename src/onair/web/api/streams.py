"""
Playlist endpoints.

``/streams/channel/{channel_id}/playlist.m3u8`` answers the live sliding
window; ``/streams/episode/{episode_id}/playlist.m3u8`` answers the finite
single-episode playlist. Both are recomputed on every request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...domain.interfaces import ScheduleStore
from ...infra.schedule_repository import ScheduleRepository
from ...infra.settings import settings
from ...infra.uow import get_db
from ...runtime.clock import Clock, MasterClock
from ...runtime.config import PlaylistConfig
from ...streaming.playlist import PLAYLIST_MEDIA_TYPE
from ...usecases.episode_playlist import build_episode_playlist
from ...usecases.live_playlist import build_live_playlist

router = APIRouter(prefix="/streams", tags=["streams"])

PLAYLIST_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Access-Control-Allow-Origin": "*",
}


def get_store(db: Session = Depends(get_db)) -> ScheduleStore:
    """Schedule store bound to the request's session."""
    return ScheduleRepository(db)


def get_clock() -> Clock:
    return MasterClock()


def get_playlist_config() -> PlaylistConfig:
    return PlaylistConfig.from_settings(settings)


def _playlist_response(body: str) -> Response:
    return Response(content=body, media_type=PLAYLIST_MEDIA_TYPE, headers=PLAYLIST_HEADERS)


@router.get("/episode/{episode_id}/playlist.m3u8")
def episode_playlist(
    episode_id: str,
    store: ScheduleStore = Depends(get_store),
    config: PlaylistConfig = Depends(get_playlist_config),
) -> Response:
    """Serve the static playlist of one episode."""
    return _playlist_response(build_episode_playlist(store, episode_id, config.format))


@router.get("/channel/{channel_id}/playlist.m3u8")
def channel_playlist(
    channel_id: str,
    store: ScheduleStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    config: PlaylistConfig = Depends(get_playlist_config),
) -> Response:
    """Serve the live playlist of a channel, as of the moment of the request."""
    now = clock.now_utc()
    return _playlist_response(build_live_playlist(store, channel_id, now, config))
