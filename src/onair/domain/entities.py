"""
Domain entities for OnAir.

Channels, programs, episodes and streams are created and edited by external
schedule management. The playlist engine only reads them.
"""

from __future__ import annotations

import uuid as uuid_module
from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ..infra.db import Base, UTCDateTime


def _new_id() -> str:
    return str(uuid_module.uuid4())


class Channel(Base):
    """A live channel whose programs make up one continuous playlist."""

    __tablename__ = "channels"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, name={self.name})>"


class Stream(Base):
    """Pre-segmented media asset; chunks are stored as ``<id>/<NNN>.ts``."""

    __tablename__ = "streams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    number_of_chunks: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Chunk count; chunks are indexed 0..n-1"
    )

    def __repr__(self) -> str:
        return f"<Stream(id={self.id}, number_of_chunks={self.number_of_chunks})>"


class Episode(Base):
    """Content metadata bound to exactly one stream."""

    __tablename__ = "episodes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    stream_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("streams.id", ondelete="RESTRICT"), nullable=False
    )

    stream: Mapped[Stream] = relationship("Stream", lazy="joined")

    def __repr__(self) -> str:
        return f"<Episode(id={self.id}, title={self.title}, stream_id={self.stream_id})>"


class Program(Base):
    """
    A scheduled airing of an episode on a channel.

    ``start_at``/``end_at`` form a half-open interval and are stored in the
    schedule's shifted reference frame (see ``SequenceClock.to_schedule_frame``).
    """

    __tablename__ = "programs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    channel_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("channels.id", ondelete="CASCADE"), nullable=False
    )
    episode_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("episodes.id", ondelete="RESTRICT"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    start_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    channel: Mapped[Channel | None] = relationship("Channel", passive_deletes=True)
    episode: Mapped[Episode] = relationship("Episode")

    __table_args__ = (
        CheckConstraint("start_at < end_at", name="start_before_end"),
        Index("ix_programs_channel_window", "channel_id", "start_at", "end_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Program(id={self.id}, channel_id={self.channel_id}, "
            f"start_at={self.start_at}, end_at={self.end_at})>"
        )
