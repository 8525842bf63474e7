"""
Schedule repository for database operations.

Thin wrapper around SQLAlchemy that implements the read-only
:class:`~onair.domain.interfaces.ScheduleStore` contract. Database errors are
translated to :class:`StoreUnavailableError` so the web layer can answer with
a stable status instead of a half-built playlist.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..domain.entities import Channel, Episode, Program
from ..runtime.sequence import ensure_aware
from .exceptions import StoreUnavailableError

_log = structlog.get_logger(__name__)


def _utc(instant: datetime) -> datetime:
    return ensure_aware(instant).astimezone(timezone.utc)


class ScheduleRepository:
    """
    Repository for schedule lookups.

    All program stamps are compared in UTC; the schedule-frame shift has
    already been applied by the caller.
    """

    def __init__(self, db: Session):
        """
        Initialize the repository with a database session.

        Args:
            db: SQLAlchemy session instance
        """
        self.db = db

    def find_programs(self, channel_id: str, start: datetime, end: datetime) -> list[Program]:
        """
        Programs on a channel whose ``[start_at, end_at)`` overlaps ``[start, end]``.

        One statement, ordered by ``start_at`` ascending, with episode and
        stream eager-loaded so slot resolution never lazy-loads.

        Raises:
            StoreUnavailableError: If the query fails
        """
        stmt = (
            select(Program)
            .where(
                Program.channel_id == channel_id,
                Program.start_at <= _utc(end),
                Program.end_at > _utc(start),
            )
            .order_by(Program.start_at.asc())
            .options(joinedload(Program.episode).joinedload(Episode.stream))
        )
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            _log.error("schedule_store_error", op="find_programs", channel_id=channel_id, error=str(e))
            raise StoreUnavailableError(f"Schedule store query failed: {e}") from e

    def find_episode(self, episode_id: str) -> Episode | None:
        """
        Find an episode with its stream.

        Raises:
            StoreUnavailableError: If the query fails
        """
        stmt = (
            select(Episode)
            .where(Episode.id == episode_id)
            .options(joinedload(Episode.stream))
        )
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            _log.error("schedule_store_error", op="find_episode", episode_id=episode_id, error=str(e))
            raise StoreUnavailableError(f"Schedule store query failed: {e}") from e

    def channel_exists(self, channel_id: str) -> bool:
        """
        Fast existence check for a channel id.

        Raises:
            StoreUnavailableError: If the query fails
        """
        stmt = select(exists().where(Channel.id == channel_id))
        try:
            return bool(self.db.scalar(stmt))
        except SQLAlchemyError as e:
            _log.error("schedule_store_error", op="channel_exists", channel_id=channel_id, error=str(e))
            raise StoreUnavailableError(f"Schedule store query failed: {e}") from e
