"""
Global test configuration for OnAir.

Provides a fixed request instant, an in-memory schedule store and builders for
programs/episodes/streams so engine tests never touch a database or the wall
clock.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from onair.infra.exceptions import StoreUnavailableError  # noqa: E402
from onair.runtime.config import PlaylistConfig  # noqa: E402
from onair.runtime.schedule_window import compute_window  # noqa: E402
from onair.runtime.sequence import SequenceClock  # noqa: E402

# 2025-01-15T12:00:00Z sits exactly on a 2 s slot boundary
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
CHANNEL_ID = "channel-news"
WINDOW_SIZE = 10


@dataclass
class FakeStream:
    id: str
    number_of_chunks: int


@dataclass
class FakeEpisode:
    id: str
    stream: FakeStream
    title: str = ""


@dataclass
class FakeProgram:
    id: str
    channel_id: str
    start_at: datetime
    end_at: datetime
    episode: FakeEpisode


@dataclass
class InMemoryScheduleStore:
    """ScheduleStore backed by lists; records every query it answers."""

    programs: list[FakeProgram] = field(default_factory=list)
    episodes: dict[str, FakeEpisode] = field(default_factory=dict)
    channels: set[str] = field(default_factory=set)
    fail: bool = False
    program_queries: list[tuple[str, datetime, datetime]] = field(default_factory=list)

    def find_programs(self, channel_id, start, end):
        if self.fail:
            raise StoreUnavailableError("store offline")
        self.program_queries.append((channel_id, start, end))
        matching = [
            p
            for p in self.programs
            if p.channel_id == channel_id and p.start_at <= end and start < p.end_at
        ]
        return sorted(matching, key=lambda p: p.start_at)

    def find_episode(self, episode_id):
        if self.fail:
            raise StoreUnavailableError("store offline")
        return self.episodes.get(episode_id)

    def channel_exists(self, channel_id):
        if self.fail:
            raise StoreUnavailableError("store offline")
        return channel_id in self.channels or any(
            p.channel_id == channel_id for p in self.programs
        )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> SequenceClock:
    return SequenceClock(segment_duration_ms=2000, schedule_offset=timedelta(hours=9))


@pytest.fixture
def config(clock) -> PlaylistConfig:
    return PlaylistConfig(clock=clock, window_size=WINDOW_SIZE, daterange_id_prefix="arema")


@pytest.fixture
def window(clock):
    return compute_window(CHANNEL_ID, NOW, clock, WINDOW_SIZE)


@pytest.fixture
def store() -> InMemoryScheduleStore:
    return InMemoryScheduleStore(channels={CHANNEL_ID})


@pytest.fixture
def add_program(store, clock, window):
    """Schedule a program covering ``slots`` slots from ``first_sequence + offset``.

    Stamps are written in the schedule frame, as the store holds them.
    """
    counter = {"n": 0}

    def _add(
        offset: int,
        slots: int,
        number_of_chunks: int,
        stream_id: str | None = None,
        channel_id: str = CHANNEL_ID,
        start_shift: timedelta = timedelta(0),
    ) -> FakeProgram:
        counter["n"] += 1
        n = counter["n"]
        start_at = clock.schedule_time_of(window.first_sequence + offset) + start_shift
        stream = FakeStream(id=stream_id or f"stream-{n}", number_of_chunks=number_of_chunks)
        episode = FakeEpisode(id=f"episode-{n}", stream=stream)
        program = FakeProgram(
            id=f"program-{n}",
            channel_id=channel_id,
            start_at=start_at,
            end_at=start_at + clock.segment_duration * slots,
            episode=episode,
        )
        store.programs.append(program)
        store.episodes[episode.id] = episode
        return program

    return _add
