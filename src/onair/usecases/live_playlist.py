"""Build the live playlist for a channel at a given instant."""

from __future__ import annotations

from datetime import datetime

import structlog

from ..domain.interfaces import ScheduleStore
from ..infra.exceptions import ChannelNotFoundError
from ..runtime.config import PlaylistConfig
from ..runtime.schedule_window import resolve_window
from ..runtime.slot_resolver import resolve_slots
from ..streaming.playlist import render_live_playlist

_log = structlog.get_logger(__name__)


def build_live_playlist(
    store: ScheduleStore,
    channel_id: str,
    now: datetime,
    config: PlaylistConfig,
) -> str:
    """Render the sliding-window playlist for ``channel_id`` as of ``now``.

    The store is queried once for the window's candidates. Only when that
    comes back empty is the channel itself looked up, to tell an unknown
    channel (not found) from a known one with nothing on air (header only).

    Raises:
        ChannelNotFoundError: the channel does not exist.
        StoreUnavailableError: the store could not be queried.
    """
    window, programs = resolve_window(store, channel_id, now, config.clock, config.window_size)
    if not programs and not store.channel_exists(channel_id):
        raise ChannelNotFoundError(channel_id)

    slots = resolve_slots(window, programs, config.clock)
    if len(slots) < window.window_size:
        _log.info(
            "live_playlist_short",
            channel_id=channel_id,
            first_sequence=window.first_sequence,
            resolved=len(slots),
            window_size=window.window_size,
        )
    return render_live_playlist(window, slots, config.format)
