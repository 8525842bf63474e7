"""
HLS media playlist rendering.

Two shapes are produced:

* the live channel playlist: a sliding window over already-resolved slots,
  never terminated with ``#EXT-X-ENDLIST``;
* the static episode playlist: every chunk of one stream, in order, then
  ``#EXT-X-ENDLIST``.

Chunk URIs follow the static file layout ``/streams/<stream_id>/<NNN>.ts``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from ..runtime.schedule_window import ScheduleWindow
from ..runtime.sequence import DEFAULT_SEGMENT_DURATION_MS, ensure_aware
from ..runtime.slot_resolver import ResolvedSlot

PLAYLIST_MEDIA_TYPE = "application/vnd.apple.mpegurl"
HLS_VERSION = 3
STREAMS_PREFIX = "/streams"
CHUNK_INDEX_WIDTH = 3
DEFAULT_DATERANGE_PREFIX = "arema"


@dataclass(frozen=True)
class PlaylistFormat:
    """Formatting knobs shared by both playlist shapes."""

    segment_duration_ms: int = DEFAULT_SEGMENT_DURATION_MS
    daterange_id_prefix: str = DEFAULT_DATERANGE_PREFIX

    @property
    def segment_seconds(self) -> float:
        return self.segment_duration_ms / 1000

    @property
    def target_duration(self) -> int:
        return math.ceil(self.segment_seconds)


def format_timestamp(instant: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    utc = ensure_aware(instant).astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def chunk_uri(stream_id: str, chunk_index: int) -> str:
    return f"{STREAMS_PREFIX}/{stream_id}/{chunk_index:0{CHUNK_INDEX_WIDTH}d}.ts"


def _header(fmt: PlaylistFormat, media_sequence: int) -> list[str]:
    return [
        "#EXTM3U",
        f"#EXT-X-TARGETDURATION:{fmt.target_duration}",
        f"#EXT-X-VERSION:{HLS_VERSION}",
        f"#EXT-X-MEDIA-SEQUENCE:{media_sequence}",
    ]


def _extinf(fmt: PlaylistFormat) -> str:
    return f"#EXTINF:{fmt.segment_seconds:.6f},"


def render_live_playlist(
    window: ScheduleWindow, slots: Iterable[ResolvedSlot], fmt: PlaylistFormat
) -> str:
    """Render the live playlist for ``window``.

    ``slots`` must already be in ascending sequence order and truncated at
    the first gap; every slot given is emitted.
    """
    lines = _header(fmt, window.first_sequence)
    lines.append(f"#EXT-X-PROGRAM-DATE-TIME:{format_timestamp(window.start)}")
    for slot in slots:
        if slot.is_discontinuity:
            lines.append("#EXT-X-DISCONTINUITY")
        lines.append(_extinf(fmt))
        lines.append(chunk_uri(slot.stream_id, slot.chunk_index))
        lines.append(
            "#EXT-X-DATERANGE:"
            + ",".join(
                [
                    f'ID="{fmt.daterange_id_prefix}-{slot.sequence}"',
                    f'START-DATE="{format_timestamp(slot.slot_start)}"',
                    f"DURATION={fmt.segment_seconds}",
                ]
            )
        )
    return "\n".join(lines) + "\n"


def render_episode_playlist(stream_id: str, number_of_chunks: int, fmt: PlaylistFormat) -> str:
    """Render the finite playlist listing every chunk of one stream once."""
    lines = _header(fmt, 1)
    for chunk_index in range(max(number_of_chunks, 0)):
        lines.append(_extinf(fmt))
        lines.append(chunk_uri(stream_id, chunk_index))
    lines.append("#EXT-X-ENDLIST")
    return "\n".join(lines) + "\n"
