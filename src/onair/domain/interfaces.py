"""Domain interfaces for the read-only schedule store."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable


class StreamLike(Protocol):
    id: str
    number_of_chunks: int


class EpisodeLike(Protocol):
    id: str
    stream: StreamLike


class ProgramLike(Protocol):
    id: str
    channel_id: str
    start_at: datetime
    end_at: datetime
    episode: EpisodeLike


@runtime_checkable
class ScheduleStore(Protocol):
    """Read-only view of the schedule consumed by the playlist engine."""

    def find_programs(
        self, channel_id: str, start: datetime, end: datetime
    ) -> Sequence[ProgramLike]:
        """
        Return programs on ``channel_id`` whose ``[start_at, end_at)`` overlaps
        ``[start, end]``, ordered by ``start_at`` ascending, with episode and
        stream loaded.
        """
        ...

    def find_episode(self, episode_id: str) -> EpisodeLike | None:
        """Return the episode with its stream, or None."""
        ...

    def channel_exists(self, channel_id: str) -> bool:
        """Return True when the channel is known to the store."""
        ...
