"""Alembic environment: migrates the database named by DATABASE_URL."""

import sys
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, pool

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from devconnect import models  # noqa: E402,F401  registers users and profiles
from devconnect.config import get_settings  # noqa: E402
from devconnect.db import Base  # noqa: E402
from devconnect.logging import configure_logging, get_logger  # noqa: E402

configure_logging()
logger = get_logger("alembic")

DATABASE_URL = get_settings().database_url


def _configure(**options) -> None:
    context.configure(target_metadata=Base.metadata, **options)


if context.is_offline_mode():
    logger.info("migrations_offline")
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()
else:
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with engine.connect() as connection:
        logger.info("migrations_online", dialect=connection.dialect.name)
        # SQLite can only change constraints by rebuilding the table
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()
