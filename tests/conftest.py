"""Shared fixtures: in-memory database, recording email transport, API client."""

from __future__ import annotations

import os

# Point the app at an in-memory database before any application import.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from alcateia_auth.db.base import Base
from alcateia_auth.db.session import get_db
from alcateia_auth.dependencies.services import get_email_service
from alcateia_auth.main import app
from alcateia_auth.models import User
from alcateia_auth.services.email_service import EmailService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingEmailService(EmailService):
    """EmailService that records templates instead of calling Resend."""

    def __init__(self, succeed: bool = True):
        super().__init__(api_key="re_test", from_email="Alcateia Hits <test@alcateiahits.org>")
        self.succeed = succeed
        self.sent = []

    def send_email(self, to, template):
        self.sent.append((to, template))
        return self.succeed


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def client(db, email_service):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    try:
        # No context manager: startup migrations are not wanted against the test DB.
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email: str = "user@example.com", **fields) -> User:
        user = User(email=email, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user
