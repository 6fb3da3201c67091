import os
from datetime import datetime, timezone

# Must be set before app settings are imported
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("OPENAI_API_KEY", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.core import security
from app.db.base import Base
from app.main import app
from app.models.user import User
from app.models.user_profile import UserProfile
from app.services.refill_suggestion import get_refill_suggestion_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


class FakeClock:
    """Settable stand-in for utc_now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set_time(self, hour: int, minute: int) -> None:
        self.now = self.now.replace(hour=hour, minute=minute, second=0)


@pytest.fixture()
def session_factory():
    Base.metadata.create_all(bind=engine)
    yield TestingSessionLocal
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 0, 15, tzinfo=timezone.utc))


@pytest.fixture()
def user(db):
    u = User(email="alice@medtrack.io", hashed_password=security.get_password_hash("secret123"))
    u.profile = UserProfile(email="alice@medtrack.io")
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


@pytest.fixture()
def suggestion_service():
    """Replaced per test through app.dependency_overrides when needed."""
    return None


@pytest.fixture()
def client(session_factory, clock, suggestion_service):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_clock] = lambda: clock
    if suggestion_service is not None:
        app.dependency_overrides[get_refill_suggestion_service] = lambda: suggestion_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def token(user):
    return security.create_access_token(user.id)


@pytest.fixture()
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
