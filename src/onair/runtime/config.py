"""
Playlist engine configuration.

Bundles the sequence clock, window size and rendering format so a request
handler passes one value down instead of reading global settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from ..streaming.playlist import DEFAULT_DATERANGE_PREFIX, PlaylistFormat
from .schedule_window import DEFAULT_WINDOW_SIZE
from .sequence import SequenceClock

if TYPE_CHECKING:
    from ..infra.settings import Settings


@dataclass(frozen=True)
class PlaylistConfig:
    """Parameters shared by window resolution, slot resolution and rendering."""

    clock: SequenceClock = field(default_factory=SequenceClock)
    window_size: int = DEFAULT_WINDOW_SIZE
    daterange_id_prefix: str = DEFAULT_DATERANGE_PREFIX

    def __post_init__(self) -> None:
        if self.window_size <= 0:
            raise ValueError("window_size must be positive")

    @property
    def format(self) -> PlaylistFormat:
        return PlaylistFormat(
            segment_duration_ms=self.clock.segment_duration_ms,
            daterange_id_prefix=self.daterange_id_prefix,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> PlaylistConfig:
        return cls(
            clock=SequenceClock(
                segment_duration_ms=settings.segment_duration_ms,
                schedule_offset=timedelta(hours=settings.schedule_offset_hours),
            ),
            window_size=settings.window_size,
            daterange_id_prefix=settings.daterange_id_prefix,
        )
