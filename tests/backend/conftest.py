"""Fixtures running the FastAPI app against the per-test SQLite database."""

import pytest
from fastapi.testclient import TestClient

from backend.app.auth.dependencies import get_current_user
from backend.app.database import get_db
from backend.app.main import create_app
from backend.app.models import User

TESTER = {
    "name": "Tester",
    "email": "tester@example.com",
    "avatar": "http://example.com/avatar.png",
}


@pytest.fixture
def test_app_client(test_db):
    """Yields ``(client, session_factory)``; every request session uses the test database."""
    session_factory, _ = test_db
    app = create_app()

    def request_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = request_session
    with TestClient(app) as client:
        yield client, session_factory
    app.dependency_overrides.clear()


@pytest.fixture
def authorized_client(test_app_client):
    """
    Client whose protected routes act as the "Tester" user, no token needed.

    Yields ``(client, current_user, session_factory)``; ``current_user()``
    reloads the user row.
    """
    client, session_factory = test_app_client
    with session_factory() as session:
        user = User(**TESTER)
        session.add(user)
        session.commit()
        user_id = user.id

    def current_user() -> User:
        with session_factory() as session:
            return session.get(User, user_id)

    client.app.dependency_overrides[get_current_user] = current_user
    yield client, current_user, session_factory
