"""Clock sources for playlist requests.

Each request reads ``now`` exactly once from a clock and passes it down; no
other part of the engine looks at the wall clock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from .sequence import ensure_aware


@runtime_checkable
class Clock(Protocol):
    """Protocol implemented by clock providers."""

    def now_utc(self) -> datetime:
        """Return the current time as an aware UTC datetime."""


class MasterClock:
    """Wall clock providing timezone-aware UTC timestamps."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at one instant. Used by tests and by ``playlist --at``."""

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_aware(instant).astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._instant
