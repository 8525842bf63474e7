"""
Live playlist engine: sequence math, window resolution and slot resolution.
"""

from .schedule_window import ScheduleWindow, compute_window, resolve_window
from .sequence import SequenceClock, sequence_of, time_of
from .slot_resolver import ResolvedSlot, resolve_slots

__all__ = [
    "ResolvedSlot",
    "ScheduleWindow",
    "SequenceClock",
    "compute_window",
    "resolve_slots",
    "resolve_window",
    "sequence_of",
    "time_of",
]
