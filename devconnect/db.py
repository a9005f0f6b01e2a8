"""
Engine and session handling for the profile store.

``db.initialize()`` runs once at API startup. Request handlers get a session
from the ``get_db`` dependency, which commits when the handler returns and
rolls back when it raises.
"""

import time
from collections.abc import Iterator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    """Declarative base for the users and profiles tables."""


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite only enforces foreign keys on connections that ask for it."""

    @event.listens_for(engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str) -> Engine:
    """SQLite shares one connection across threads; anything else gets a sized pool."""
    settings = get_settings()
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.debug,
    )


class DatabaseManager:
    """Holds the process-wide engine and session factory."""

    def __init__(self):
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker | None = None

    def initialize(self, database_url: str | None = None) -> None:
        if self.engine is not None:
            return
        self.engine = build_engine(database_url or get_settings().database_url)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def new_session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not initialized; call db.initialize() first")
        return self.SessionLocal()

    def create_all_tables(self) -> None:
        # Importing the models registers their tables on Base.metadata
        from . import models  # noqa: F401

        if self.engine is None:
            raise RuntimeError("Database is not initialized; call db.initialize() first")
        Base.metadata.create_all(bind=self.engine)

    def health_check(self) -> dict:
        """Run ``SELECT 1``. Returns ``healthy``, ``latency_ms`` and ``error``."""
        if self.engine is None:
            return {"healthy": False, "latency_ms": 0.0, "error": "Database not initialized"}

        started = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            error = str(exc)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency_ms, "error": error}

    def reset(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.SessionLocal = None


db = DatabaseManager()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    session = db.new_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
