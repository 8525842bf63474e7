"""Build the static, finite playlist for a single episode."""

from __future__ import annotations

from ..domain.interfaces import ScheduleStore
from ..infra.exceptions import EpisodeNotFoundError, StreamConfigurationError
from ..streaming.playlist import PlaylistFormat, render_episode_playlist


def build_episode_playlist(store: ScheduleStore, episode_id: str, fmt: PlaylistFormat) -> str:
    """
    Render every chunk of the episode's stream once, ending with ``#EXT-X-ENDLIST``.

    Raises:
        EpisodeNotFoundError: no episode with that id.
        StreamConfigurationError: the stream has no usable chunk count.
        StoreUnavailableError: the store could not be queried.
    """
    episode = store.find_episode(episode_id)
    if episode is None:
        raise EpisodeNotFoundError(episode_id)

    stream = episode.stream
    number_of_chunks = getattr(stream, "number_of_chunks", None)
    if (
        stream is None
        or not isinstance(number_of_chunks, int)
        or isinstance(number_of_chunks, bool)
        or number_of_chunks <= 0
    ):
        raise StreamConfigurationError(getattr(stream, "id", "?"), number_of_chunks)
    return render_episode_playlist(str(stream.id), number_of_chunks, fmt)
