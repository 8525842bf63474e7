"""
Slot resolution.

For each sequence of a window, decide which program is on air and which
chunk of its stream plays in that slot. Works only on the candidate list the
window resolver already fetched; it never goes back to the store.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog

from ..domain.interfaces import ProgramLike, StreamLike
from .schedule_window import ScheduleWindow
from .sequence import SequenceClock, ensure_aware

_log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolvedSlot:
    """One on-air slot of the live playlist."""

    sequence: int
    slot_start: datetime
    stream_id: str
    chunk_index: int
    is_discontinuity: bool
    program_id: str | None = None


def find_covering_program(
    programs: Iterable[ProgramLike], instant: datetime
) -> ProgramLike | None:
    """First program whose half-open ``[start_at, end_at)`` contains ``instant``."""
    for program in programs:
        if ensure_aware(program.start_at) <= instant < ensure_aware(program.end_at):
            return program
    return None


def chunk_index_for(slot_index: int, stream: StreamLike) -> int | None:
    """Chunk playing ``slot_index`` slots into a program, looping the stream.

    Returns None when the stream has no usable chunk count.
    """
    number_of_chunks = getattr(stream, "number_of_chunks", None)
    if (
        not isinstance(number_of_chunks, int)
        or isinstance(number_of_chunks, bool)
        or number_of_chunks <= 0
    ):
        return None
    return slot_index % number_of_chunks


def resolve_slot(
    sequence: int, programs: Sequence[ProgramLike], clock: SequenceClock
) -> ResolvedSlot | None:
    """Resolve a single sequence, or None when nothing usable is on air."""
    slot_time = clock.schedule_time_of(sequence)
    program = find_covering_program(programs, slot_time)
    if program is None:
        return None

    episode = getattr(program, "episode", None)
    stream = getattr(episode, "stream", None)
    if stream is None:
        _log.warning("stream_missing", program_id=program.id, sequence=sequence)
        return None

    slot_index = clock.slots_between(program.start_at, slot_time)
    chunk_index = chunk_index_for(slot_index, stream)
    if chunk_index is None:
        _log.warning(
            "stream_misconfigured",
            stream_id=stream.id,
            number_of_chunks=getattr(stream, "number_of_chunks", None),
            program_id=program.id,
            sequence=sequence,
        )
        return None

    return ResolvedSlot(
        sequence=sequence,
        slot_start=clock.slot_start(sequence),
        stream_id=str(stream.id),
        chunk_index=chunk_index,
        # Loop restart or program start: the player must resync timestamps
        is_discontinuity=chunk_index == 0,
        program_id=str(program.id),
    )


def resolve_slots(
    window: ScheduleWindow, programs: Sequence[ProgramLike], clock: SequenceClock
) -> list[ResolvedSlot]:
    """Resolve the window's sequences in order, stopping at the first gap.

    A live feed cannot skip ahead, so once a sequence is unresolved none of
    the later ones are reported even if a later program would cover them.
    """
    slots: list[ResolvedSlot] = []
    for sequence in window.sequences():
        slot = resolve_slot(sequence, programs, clock)
        if slot is None:
            _log.debug(
                "slot_resolution_stopped",
                channel_id=window.channel_id,
                sequence=sequence,
                resolved=len(slots),
            )
            break
        slots.append(slot)
    return slots
