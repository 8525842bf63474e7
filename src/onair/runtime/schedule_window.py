"""
Schedule window resolution.

Turns the request's ``now`` into the run of sequences the live playlist
reports and fetches, in a single store query, every program that can cover
any of them.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog

from ..domain.interfaces import ProgramLike, ScheduleStore
from .sequence import SequenceClock

_log = structlog.get_logger(__name__)

DEFAULT_WINDOW_SIZE = 10


@dataclass(frozen=True)
class ScheduleWindow:
    """The sequences ``[first_sequence, first_sequence + window_size)``.

    ``start``/``end`` are the wall-clock starts of the first and last slot;
    the ``*_adjusted`` values are the same instants in the schedule frame.
    """

    channel_id: str
    first_sequence: int
    window_size: int
    start: datetime
    end: datetime
    start_adjusted: datetime
    end_adjusted: datetime

    @property
    def last_sequence(self) -> int:
        return self.first_sequence + self.window_size - 1

    def sequences(self) -> Iterator[int]:
        return iter(range(self.first_sequence, self.first_sequence + self.window_size))


def compute_window(
    channel_id: str,
    now: datetime,
    clock: SequenceClock,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> ScheduleWindow:
    """Window ending ``window_size`` slots behind the slot containing ``now``.

    The playlist lags live by a full window so it only ever lists slots whose
    time has already passed.
    """
    if window_size <= 0:
        raise ValueError("window_size must be positive")

    first_sequence = clock.sequence_of(now) - window_size
    last_sequence = first_sequence + window_size - 1
    start = clock.slot_start(first_sequence)
    end = clock.slot_start(last_sequence)
    return ScheduleWindow(
        channel_id=channel_id,
        first_sequence=first_sequence,
        window_size=window_size,
        start=start,
        end=end,
        start_adjusted=clock.to_schedule_frame(start),
        end_adjusted=clock.to_schedule_frame(end),
    )


def fetch_candidates(store: ScheduleStore, window: ScheduleWindow) -> Sequence[ProgramLike]:
    """Programs overlapping the window, ordered by start, in one store round trip.

    Raises:
        StoreUnavailableError: the store could not be queried.
    """
    programs = store.find_programs(window.channel_id, window.start_adjusted, window.end_adjusted)

    _log.debug(
        "playlist_window_resolved",
        channel_id=window.channel_id,
        first_sequence=window.first_sequence,
        window_start=window.start_adjusted.isoformat(),
        window_end=window.end_adjusted.isoformat(),
        candidates=len(programs),
    )
    return programs


def resolve_window(
    store: ScheduleStore,
    channel_id: str,
    now: datetime,
    clock: SequenceClock,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> tuple[ScheduleWindow, Sequence[ProgramLike]]:
    """Compute the window for ``now`` and fetch its candidate programs."""
    window = compute_window(channel_id, now, clock, window_size)
    return window, fetch_candidates(store, window)
