from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from kennel.config import get_settings


def engine_options(url: str) -> dict[str, Any]:
    """Dashboard counts run on worker threads, so SQLite must allow cross-thread use."""
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


settings = get_settings()
database_url = settings.sqlalchemy_database_uri()

engine = create_engine(database_url, future=True, **engine_options(database_url))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for the CRUD routers."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Factory for the data store, which opens one short-lived session per query."""
    return SessionLocal
