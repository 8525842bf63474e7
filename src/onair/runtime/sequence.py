"""
Sequence math: wall-clock instants to segment sequence numbers and back.

Pure functions. A sequence is the index of a fixed-duration slot counted from
the Unix epoch, so every integer names exactly one slot and consecutive
integers name adjacent slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

DEFAULT_SEGMENT_DURATION_MS = 2_000
# Schedule stamps live in a frame shifted ahead of UTC by this much.
DEFAULT_SCHEDULE_OFFSET = timedelta(hours=9)


def ensure_aware(instant: datetime) -> datetime:
    """Return ``instant`` as an aware datetime; naive values are taken as UTC."""
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def epoch_millis(instant: datetime) -> int:
    """Whole milliseconds since the epoch, floored."""
    return (ensure_aware(instant) - EPOCH) // _ONE_MS


def sequence_of(instant: datetime, segment_duration_ms: int = DEFAULT_SEGMENT_DURATION_MS) -> int:
    """Sequence number of the slot containing ``instant``.

    Args:
        instant: Wall-clock time (aware preferred; naive is read as UTC).
        segment_duration_ms: Slot length in milliseconds, must be positive.
    """
    if segment_duration_ms <= 0:
        raise ValueError("segment_duration_ms must be positive")
    return epoch_millis(instant) // segment_duration_ms


def time_of(sequence: int, segment_duration_ms: int = DEFAULT_SEGMENT_DURATION_MS) -> datetime:
    """Start instant (UTC) of the slot numbered ``sequence``."""
    if segment_duration_ms <= 0:
        raise ValueError("segment_duration_ms must be positive")
    return EPOCH + timedelta(milliseconds=sequence * segment_duration_ms)


@dataclass(frozen=True)
class SequenceClock:
    """Segment duration and schedule-frame offset bundled as one value.

    Everything that turns a sequence into a time the schedule can be compared
    against goes through :meth:`slot_start` and :meth:`to_schedule_frame`, so
    the offset is applied exactly once per instant.
    """

    segment_duration_ms: int = DEFAULT_SEGMENT_DURATION_MS
    schedule_offset: timedelta = DEFAULT_SCHEDULE_OFFSET

    def __post_init__(self) -> None:
        if self.segment_duration_ms <= 0:
            raise ValueError("segment_duration_ms must be positive")

    @property
    def segment_duration(self) -> timedelta:
        return timedelta(milliseconds=self.segment_duration_ms)

    @property
    def segment_seconds(self) -> float:
        return self.segment_duration_ms / 1000

    def sequence_of(self, instant: datetime) -> int:
        return sequence_of(instant, self.segment_duration_ms)

    def slot_start(self, sequence: int) -> datetime:
        """Wall-clock (UTC) start of ``sequence``."""
        return time_of(sequence, self.segment_duration_ms)

    def to_schedule_frame(self, instant: datetime) -> datetime:
        """Shift a wall-clock instant into the schedule store's frame."""
        return ensure_aware(instant) + self.schedule_offset

    def schedule_time_of(self, sequence: int) -> datetime:
        """Start of ``sequence`` expressed in the schedule frame."""
        return self.to_schedule_frame(self.slot_start(sequence))

    def slots_between(self, start: datetime, instant: datetime) -> int:
        """Whole slots elapsed from ``start`` to ``instant`` (same frame), floored."""
        elapsed = ensure_aware(instant) - ensure_aware(start)
        return elapsed // self.segment_duration
