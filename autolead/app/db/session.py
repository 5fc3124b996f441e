"""Database handle shared by the API process and the seed script."""

from collections.abc import Generator
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from autolead.app.core.settings import get_settings


class Database:
    """Owns one engine (and its connection pool) plus the session factory bound to it."""

    def __init__(self, url: str):
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine: Engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, class_=Session)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


_default_database: Optional[Database] = None


def get_database() -> Database:
    """Return the process-wide handle for DATABASE_URL, creating it on first use."""
    global _default_database
    if _default_database is None:
        _default_database = Database(get_settings().database_url)
    return _default_database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a session from the app's database handle and ensures proper closing.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
