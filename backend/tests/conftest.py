"""Shared fixtures for API tests"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from secondlife.main import app
from secondlife.models import User
from secondlife.models.base import Base
from secondlife.utils.auth import create_access_token
from secondlife.utils.database import get_db
from secondlife.utils.rate_limit import limiter


@pytest.fixture
def test_db():
    """Create a test database and route the app to it"""

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    yield TestingSessionLocal

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_db):
    """Create a test client"""
    limiter.reset()
    return TestClient(app)


@pytest.fixture
def make_user(test_db):
    """Factory storing a user and returning (id, auth headers)"""

    def _make_user(username, country=None):
        db = test_db()
        try:
            user = User(username=username, email=f"{username}@example.com", country=country)
            db.add(user)
            db.commit()
            user_id = user.id
        finally:
            db.close()

        token = create_access_token({"sub": user_id})
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make_user
