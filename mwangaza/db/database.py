from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from mwangaza.core.config import settings

Base = declarative_base()

_engine = None


def create_db_engine(database_url: str):
    """Build an engine for the given URL (sqlite or postgres)"""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # Single shared connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=2,
    )


def get_engine():
    """Process-wide engine built from settings on first use"""
    global _engine
    if _engine is None:
        _engine = create_db_engine(settings.get_database_url())
    return _engine


def init_db(engine=None) -> None:
    # Import models so they register with Base.metadata
    from mwangaza.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
