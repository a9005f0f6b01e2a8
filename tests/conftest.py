"""
Shared fixtures. Each test runs against its own in-memory SQLite database
built from the ORM models.
"""

import os

# Settings are cached on first use, so the environment must be set before
# any devconnect/backend module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-only-secret-key-0123456789abcdefghijkl")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from devconnect.db import Base, enable_sqlite_foreign_keys  # noqa: E402
from devconnect.models import Profile, User  # noqa: E402


@pytest.fixture
def test_db():
    """Yields ``(session_factory, engine)`` for a fresh database."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False), engine

    engine.dispose()


@pytest.fixture
def test_session(test_db):
    session_factory, _ = test_db
    with session_factory() as session:
        yield session


@pytest.fixture
def make_user(test_session):
    """Factory for committed users."""

    def _make(name="Test User", email="test@example.com", avatar="https://example.com/avatar.png"):
        user = User(name=name, email=email, avatar=avatar)
        test_session.add(user)
        test_session.commit()
        return user

    return _make


@pytest.fixture
def make_profile(test_session):
    """Factory for committed profiles; keyword arguments override the defaults."""

    def _make(user_id, **fields):
        values = {"status": "Developer", "skills": ["python"], "social": {}, "experience": [], "education": []}
        values.update(fields)
        profile = Profile(user_id=user_id, **values)
        test_session.add(profile)
        test_session.commit()
        return profile

    return _make


@pytest.fixture
def sample_user(make_user):
    return make_user()


@pytest.fixture
def sample_experience():
    """Experience payload as sent by clients."""
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Berlin",
        "from": "2021-03-01",
        "to": "2023-06-30",
        "current": False,
        "description": "APIs and data pipelines",
    }


@pytest.fixture
def sample_education():
    """Education payload as sent by clients."""
    return {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2015-09-01",
        "to": "2019-06-30",
    }
