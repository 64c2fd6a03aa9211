"""
Pytest fixtures and configuration for all tests.
"""

import os

os.environ.setdefault("FUNDRACE_DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fundrace import models  # noqa: F401  registers tables on Base.metadata
from fundrace.api.deps import get_broadcaster
from fundrace.core.database import Base, get_db
from fundrace.models import Product, Team, User, UserRole
from fundrace.realtime import LEADERBOARD_ROOM, team_room

BASE_TIME = datetime(2026, 3, 1, 12, 0, 0)


class RecordingBroadcaster:
    """Broadcaster double that keeps every event, or fails every call."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events = []

    async def broadcast(self, event, payload):
        if self.fail:
            raise RuntimeError("socket server unavailable")
        self.events.append((LEADERBOARD_ROOM, event, payload))

    async def broadcast_to_team(self, team_id, event, payload):
        if self.fail:
            raise RuntimeError("socket server unavailable")
        self.events.append((team_room(team_id), event, payload))

    def named(self, event):
        return [entry for entry in self.events if entry[1] == event]


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def failing_broadcaster():
    return RecordingBroadcaster(fail=True)


@pytest.fixture
def client(session_factory, broadcaster) -> Generator[TestClient, None, None]:
    """TestClient wired to the test database and a recording broadcaster."""
    from fundrace.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_team(db_session):
    """Create teams with predictable creation times (one minute apart)."""
    counter = {"n": 0}

    def _make(name: str, *, created_at: datetime | None = None, is_active: bool = True) -> Team:
        counter["n"] += 1
        team = Team(
            name=name,
            is_active=is_active,
            created_at=created_at or BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db_session.add(team)
        db_session.commit()
        return team

    return _make


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(team: Team | None = None, role: UserRole = UserRole.STUDENT, name: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            email=f"user{counter['n']}@example.edu",
            name=name or f"User {counter['n']}",
            role=role,
            team_id=team.team_id if team else None,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name: str = "Team Shirt", *, price: float = 20, points: int | None = 10, stock: int = 5) -> Product:
        product = Product(name=name, price=price, points=points, stock=stock)
        db_session.add(product)
        db_session.commit()
        return product

    return _make
