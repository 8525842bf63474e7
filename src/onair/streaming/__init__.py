"""
Streaming output for OnAir: HLS playlist text.
"""

from .playlist import (
    PLAYLIST_MEDIA_TYPE,
    PlaylistFormat,
    render_episode_playlist,
    render_live_playlist,
)

__all__ = [
    "PLAYLIST_MEDIA_TYPE",
    "PlaylistFormat",
    "render_episode_playlist",
    "render_live_playlist",
]
