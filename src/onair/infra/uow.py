"""
This is the canonical Unit of Work boundary for OnAir.

Playlist requests only read the schedule, but they still go through one
session per request so that a cancelled or failed request releases its
connection and never leaves a transaction open.
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from sqlalchemy.orm import Session

from . import db as db_module


@contextlib.contextmanager
def session() -> Generator[Session, None, None]:
    """
    Database session context manager for CLI operations.

    - Opens a DB session
    - Yields it for use
    - On success: commits the transaction
    - On exception: rolls back and re-raises the exception
    - Always closes the session
    """
    db = db_module.SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency generator for database sessions.

    Same Unit of Work semantics as session(), shaped for ``Depends``.
    """
    with session() as db:
        yield db
