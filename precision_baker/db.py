"""Database engine and session handling.

Nothing connects at import time: the engine is built on first use, so the
app imports cleanly in tests and with STORAGE_BACKEND=memory.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .settings import settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across the threadpool FastAPI runs sync routes in
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def configure_database(database_url: str | None = None) -> Engine:
    """(Re)build the engine and session factory, defaulting to DATABASE_URL."""
    global _engine, _session_factory
    url = database_url or settings.database_url
    _engine = create_engine(url, pool_pre_ping=True, connect_args=_connect_args(url))
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=True)
    return _engine


def get_engine() -> Engine:
    return _engine if _engine is not None else configure_database()


def session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        configure_database()
    return _session_factory


def create_schema(engine: Engine | None = None) -> None:
    """Create the social link, recipe and history tables if missing."""
    from . import models  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=engine or get_engine())


def get_db():
    """Request-scoped session, closed once the response is sent."""
    db = session_factory()()
    try:
        yield db
    finally:
        db.close()
