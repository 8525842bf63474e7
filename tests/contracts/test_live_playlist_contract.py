"""
Live playlist contract tests.

Runs the whole pipeline (window -> candidates -> slots -> text) against the
in-memory store with an injected instant. No wall clock, no database.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import CHANNEL_ID, NOW, WINDOW_SIZE
from onair.infra.exceptions import (
    ChannelNotFoundError,
    EpisodeNotFoundError,
    StoreUnavailableError,
    StreamConfigurationError,
)
from onair.runtime.sequence import sequence_of
from onair.usecases.episode_playlist import build_episode_playlist
from onair.usecases.live_playlist import build_live_playlist


def _entries(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.startswith("/streams/")]


def _media_sequence(text: str) -> int:
    for line in text.splitlines():
        if line.startswith("#EXT-X-MEDIA-SEQUENCE:"):
            return int(line.split(":", 1)[1])
    raise AssertionError("no media sequence")


def _discontinuity_positions(text: str) -> list[int]:
    """Entry indexes preceded by a discontinuity tag."""
    positions = []
    pending = False
    index = 0
    for line in text.splitlines():
        if line == "#EXT-X-DISCONTINUITY":
            pending = True
        elif line.startswith("/streams/"):
            if pending:
                positions.append(index)
            pending = False
            index += 1
    return positions


class TestLivePlaylistContract:
    def test_full_window_single_program(self, store, config, add_program):
        add_program(offset=0, slots=WINDOW_SIZE, number_of_chunks=WINDOW_SIZE, stream_id="s")
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)

        assert _entries(text) == [f"/streams/s/{i:03d}.ts" for i in range(WINDOW_SIZE)]
        assert _discontinuity_positions(text) == [0]
        assert "#EXT-X-ENDLIST" not in text

    def test_three_chunk_stream_over_seven_slots(self, store, config, add_program):
        add_program(offset=0, slots=7, number_of_chunks=3, stream_id="loop")
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)

        assert _entries(text) == [
            f"/streams/loop/{i:03d}.ts" for i in [0, 1, 2, 0, 1, 2, 0]
        ]
        assert _discontinuity_positions(text) == [0, 3, 6]

    def test_gap_at_fifth_slot_yields_four_entries(self, store, config, add_program):
        add_program(offset=0, slots=4, number_of_chunks=20)
        add_program(offset=5, slots=5, number_of_chunks=20)
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)

        first = sequence_of(NOW, 2000) - WINDOW_SIZE
        assert len(_entries(text)) == 4
        assert [line for line in text.splitlines() if line.startswith("#EXT-X-DATERANGE")] == [
            f'#EXT-X-DATERANGE:ID="arema-{first + i}",'
            f'START-DATE="{(NOW - timedelta(seconds=20 - 2 * i)).strftime("%Y-%m-%dT%H:%M:%S")}.000Z",'
            "DURATION=2.0"
            for i in range(4)
        ]

    def test_uncovered_first_slot_gives_header_only(self, store, config, add_program):
        add_program(offset=1, slots=9, number_of_chunks=20)
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)

        assert _entries(text) == []
        assert text.startswith("#EXTM3U\n")
        assert "#EXT-X-PROGRAM-DATE-TIME:" in text

    def test_known_channel_without_programs_gives_header_only(self, store, config):
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)
        assert _entries(text) == []

    @pytest.mark.parametrize("shift_ms", [0, 1, 999, 1999, 7_777_777])
    def test_media_sequence_tracks_injected_now(self, store, config, shift_ms):
        now = NOW + timedelta(milliseconds=shift_ms)
        text = build_live_playlist(store, CHANNEL_ID, now, config)
        assert _media_sequence(text) == sequence_of(now, 2000) - WINDOW_SIZE

    def test_one_store_query_per_request(self, store, config, add_program):
        add_program(offset=-3, slots=3, number_of_chunks=5)
        add_program(offset=0, slots=10, number_of_chunks=5)
        build_live_playlist(store, CHANNEL_ID, NOW, config)
        assert len(store.program_queries) == 1

    def test_unknown_channel_is_not_found(self, store, config):
        with pytest.raises(ChannelNotFoundError):
            build_live_playlist(store, "no-such-channel", NOW, config)

    def test_store_outage_fails_whole_request(self, store, config, add_program):
        add_program(offset=0, slots=10, number_of_chunks=5)
        store.fail = True
        with pytest.raises(StoreUnavailableError):
            build_live_playlist(store, CHANNEL_ID, NOW, config)

    def test_zero_chunk_stream_truncates_playlist(self, store, config, add_program):
        add_program(offset=0, slots=2, number_of_chunks=5)
        add_program(offset=2, slots=8, number_of_chunks=0)
        text = build_live_playlist(store, CHANNEL_ID, NOW, config)
        assert len(_entries(text)) == 2


class TestEpisodePlaylistContract:
    def test_lists_each_chunk_once_then_ends(self, store, config, add_program):
        program = add_program(offset=0, slots=1, number_of_chunks=12, stream_id="ep")
        text = build_episode_playlist(store, program.episode.id, config.format)

        assert _entries(text) == [f"/streams/ep/{i:03d}.ts" for i in range(12)]
        assert text.count("#EXTINF:") == 12
        assert text.rstrip("\n").endswith("#EXT-X-ENDLIST")

    def test_unknown_episode_is_not_found(self, store, config):
        with pytest.raises(EpisodeNotFoundError):
            build_episode_playlist(store, "missing", config.format)

    def test_zero_chunk_episode_is_a_configuration_error(self, store, config, add_program):
        program = add_program(offset=0, slots=1, number_of_chunks=0, stream_id="broken")
        with pytest.raises(StreamConfigurationError) as excinfo:
            build_episode_playlist(store, program.episode.id, config.format)
        assert excinfo.value.stream_id == "broken"

    def test_boolean_chunk_count_is_a_configuration_error(self, store, config, add_program):
        program = add_program(offset=0, slots=1, number_of_chunks=3)
        program.episode.stream.number_of_chunks = True
        with pytest.raises(StreamConfigurationError):
            build_episode_playlist(store, program.episode.id, config.format)
