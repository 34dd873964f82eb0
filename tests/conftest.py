"""Pytest configuration and shared fixtures for Wellnest tests.

This module provides database fixtures, test data factories, and a Flask
client wired to a throwaway database, so tests never touch the real app data.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
import sqlalchemy as sa
from sqlmodel import SQLModel, create_engine

from wellnest import create_app
from wellnest.infra.database import create_session_factory, init_database
from wellnest.infra.repositories import (
    SQLModelHabitStore,
    SQLModelMoodRepository,
    SQLModelReflectionRepository,
)
from wellnest.models import HabitCompletion, User
from wellnest.services import auth as auth_service

# =============================================================================
# Database Fixtures
# =============================================================================


def _temp_sqlite_engine():
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    return engine, db_path


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database with the current schema.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    engine, db_path = _temp_sqlite_engine()
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def legacy_db_engine():
    """Database whose ``habits`` table predates the icon, frequency and streak columns."""

    engine, db_path = _temp_sqlite_engine()
    with engine.begin() as connection:
        connection.execute(
            sa.text(
                """
                CREATE TABLE habits (
                    id INTEGER PRIMARY KEY,
                    user_id INTEGER NOT NULL,
                    name VARCHAR(100) NOT NULL,
                    category VARCHAR(32) NOT NULL DEFAULT 'Other',
                    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
        )
        SQLModel.metadata.create_all(
            connection, tables=[User.__table__, HabitCompletion.__table__]
        )

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory returning transactional context managers."""

    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
def legacy_session_factory(legacy_db_engine):
    return create_session_factory(legacy_db_engine)


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def habit_store(session_factory) -> SQLModelHabitStore:
    return SQLModelHabitStore(session_factory)


@pytest.fixture
def legacy_habit_store(legacy_session_factory) -> SQLModelHabitStore:
    return SQLModelHabitStore(legacy_session_factory)


@pytest.fixture
def mood_repo(session_factory) -> SQLModelMoodRepository:
    return SQLModelMoodRepository(session_factory)


@pytest.fixture
def reflection_repo(session_factory) -> SQLModelReflectionRepository:
    return SQLModelReflectionRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


def _make_user(factory, username: str) -> User:
    with factory() as session:
        row = User(username=username, password_hash="dummy-hash")
        session.add(row)
        session.commit()
        session.refresh(row)
        session.expunge(row)
        return row


@pytest.fixture
def user(session_factory) -> User:
    """Create a default user for scoping data."""

    return _make_user(session_factory, "tester")


@pytest.fixture
def other_user(session_factory) -> User:
    return _make_user(session_factory, "someone-else")


@pytest.fixture
def legacy_user(legacy_session_factory) -> User:
    return _make_user(legacy_session_factory, "tester")


@pytest.fixture
def habit_factory(habit_store, user):
    """Factory for creating habits through the store.

    Returns:
        Callable: Function that inserts a habit and returns its record
    """

    def _create_habit(name: str = "Exercise", category: str = "Health", owner: User | None = None, **extra):
        owner = owner or user
        habit_store.insert_habits([{"name": name, "category": category, "user_id": owner.id, **extra}])
        return habit_store.find_habit_by_name(name, user_id=owner.id)

    return _create_habit


@pytest.fixture
def complete_on(habit_store):
    """Record completions for a habit on the given days."""

    def _complete(habit, *days: date):
        for day in days:
            habit_store.insert_completion(habit_id=habit.id, user_id=habit.user_id, day=day)

    return _complete


# =============================================================================
# Flask application
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app built with the testing config against a temp database."""

    monkeypatch.setenv("WELLNEST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("WELLNEST_TEST_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.delenv("WELLNEST_TIMEZONE", raising=False)
    application = create_app("testing")
    yield application
    application.extensions["wellnest"].engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """The AppContext attached to the test app."""

    return app.extensions["wellnest"]


@pytest.fixture
def app_user(ctx) -> User:
    return auth_service.create_user(
        username="casey", password="correct-horse", session_factory=ctx.session_factory
    )


@pytest.fixture
def auth_client(client, app_user):
    """Test client with ``app_user`` signed in."""

    with client.session_transaction() as sess:
        sess["user_id"] = app_user.id
    return client


@pytest.fixture
def json_headers() -> dict[str, str]:
    return {"Accept": "application/json"}


@pytest.fixture
def drop_table(ctx):
    """Drop a table from the app database to simulate a broken store."""

    def _drop(name: str) -> None:
        with ctx.engine.begin() as connection:
            connection.execute(sa.text(f"DROP TABLE {name}"))

    return _drop
