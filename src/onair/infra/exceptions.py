"""
Custom exceptions for OnAir operations.

Every exception carries a stable ``code`` and the HTTP ``status_code`` the web
layer answers with, so that playlist pollers see the same response for the
same failure on every request.
"""


class OnAirError(Exception):
    """Base exception for all OnAir errors."""

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(OnAirError):
    """Raised when the requested schedule data does not exist."""

    code = "not_found"
    status_code = 404


class EpisodeNotFoundError(NotFoundError):
    """Raised when an episode id has no matching record."""

    code = "episode_not_found"

    def __init__(self, episode_id: str):
        super().__init__(f"The episode is not found: {episode_id}")
        self.episode_id = episode_id


class ChannelNotFoundError(NotFoundError):
    """Raised when a channel id has no matching record."""

    code = "channel_not_found"

    def __init__(self, channel_id: str):
        super().__init__(f"The channel is not found: {channel_id}")
        self.channel_id = channel_id


class StoreUnavailableError(OnAirError):
    """Raised when the schedule store cannot be queried."""

    code = "store_unavailable"
    status_code = 503


class StreamConfigurationError(OnAirError):
    """Raised when stream metadata cannot be used to address chunks."""

    code = "stream_misconfigured"

    def __init__(self, stream_id: str, number_of_chunks: int | None):
        super().__init__(
            f"Stream {stream_id} has an invalid chunk count: {number_of_chunks!r}"
        )
        self.stream_id = stream_id
        self.number_of_chunks = number_of_chunks
