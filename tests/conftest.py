"""Pytest configuration and shared fixtures for HabitFlow tests.

Provides database fixtures and test data factories so repositories and
services can be exercised without touching the real app database.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habitflow.models import DailyCard, Habit, User
from habitflow.services.dates import offset_days, to_key

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in the app."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""

    existing = db_session.get(User, "tester")
    if existing:
        return existing
    u = User(username="tester", display_name="Test User")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating and persisting test habits."""

    def _create_habit(
        name: str = "Test Habit",
        category: str = "custom",
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(user_id=owner.username, name=name, category=category)
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


def make_card(day: date | str, pct: int = 100, *, user_id: str = "tester", **fields) -> DailyCard:
    """Build an unsaved card with the given completion."""

    key = day if isinstance(day, str) else to_key(day)
    return DailyCard(
        user_id=user_id,
        date=key,
        habit_checks=fields.pop("habit_checks", {}),
        sleep_hours=fields.pop("sleep_hours", 0.0),
        notes=fields.pop("notes", ""),
        completed_habits=fields.pop("completed_habits", 1 if pct else 0),
        total_habits=fields.pop("total_habits", 1),
        completion_pct=pct,
    )


@pytest.fixture
def card_factory(db_session, user):
    """Factory for persisting daily cards for the default user."""

    def _create_card(day: date | str, pct: int = 100, owner: User | None = None, **fields) -> DailyCard:
        owner = owner or user
        card = make_card(day, pct, user_id=owner.username, **fields)
        db_session.add(card)
        db_session.commit()
        db_session.refresh(card)
        return card

    return _create_card


@pytest.fixture
def run_of_days():
    """Return keys for ``count`` consecutive days ending at ``end``."""

    def _keys(end: date, count: int) -> list[str]:
        return [offset_days(end, i) for i in range(count)]

    return _keys


@pytest.fixture(autouse=True)
def _isolated_data_dir(monkeypatch, tmp_path):
    """Keep config-created directories and SQLite files inside the test's tmp dir."""

    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITFLOW_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITFLOW_USER", raising=False)
    monkeypatch.delenv("HABITFLOW_DEV_MODE", raising=False)
