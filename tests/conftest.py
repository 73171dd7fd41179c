import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key')

from agenda.database import Base, build_engine, get_db, init_db  # noqa: E402
from agenda.main import app  # noqa: E402


@pytest.fixture
def engine():
    test_engine = build_engine('sqlite://', poolclass=StaticPool)
    init_db(test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an account through the API and return ``(token, user)``."""

    def _register(username: str, email: str | None = None, password: str = 'pw123456'):
        response = client.post(
            '/auth/register',
            json={'username': username, 'email': email or f'{username}@example.com', 'password': password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body['token'], body['user']

    return _register


@pytest.fixture
def bearer():
    def _bearer(token: str) -> dict[str, str]:
        return {'Authorization': f'Bearer {token}'}

    return _bearer
