from datetime import datetime, timezone

from sqlalchemy import DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.schema import MetaData
from sqlalchemy.types import TypeDecorator

from onair.infra.settings import settings

# Deterministic constraint/index names
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime stored as UTC.

    SQLite keeps only the clock reading and drops the offset, so values are
    converted to UTC before binding and read back with UTC attached.
    Naive inputs are taken as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def _connect_args(url: str) -> dict[str, object]:
    if "sqlite" in url:
        return {"check_same_thread": False}
    if "postgresql" in url:
        return {"connect_timeout": settings.connect_timeout}
    return {}


def get_engine(db_url: str | None = None) -> Engine:
    """Create a database engine for ``db_url`` (defaults to ``settings.database_url``)."""
    chosen_url = db_url or settings.database_url
    kwargs: dict[str, object] = {}
    if "postgresql" in chosen_url:
        kwargs["pool_timeout"] = settings.pool_timeout
    return create_engine(
        chosen_url,
        echo=settings.echo_sql,
        pool_pre_ping=True,
        connect_args=_connect_args(chosen_url),
        **kwargs,
    )


engine = get_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_schema(bind: Engine | None = None) -> None:
    """Create all tables known to the ORM metadata."""
    # Register mapped classes on Base.metadata before create_all
    from onair.domain import entities  # noqa: F401

    Base.metadata.create_all(bind or engine)
