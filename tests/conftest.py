"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import app.models  # noqa: F401  registers tables on SQLModel.metadata
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import app as fastapi_app
from app.models import Category, Task, TaskCategory


@pytest.fixture
def engine():
    """In-memory SQLite shared across connections, with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    """
    TestClient wired to the in-memory database.

    Not used as a context manager, so the app's startup hook (which would
    create tables in the configured database) never runs.
    """
    def _get_db():
        with Session(engine) as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_category(session):
    def _make(name="Work", color=None):
        category = Category(name=name, color=color)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category
    return _make


@pytest.fixture
def make_task(session):
    """
    Insert a task row directly, bypassing the service layer.

    Tasks get strictly increasing created_at values in insertion order unless
    one is passed explicitly.
    """
    base = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(title="Task", category_ids=(), **fields):
        counter["n"] += 1
        fields.setdefault("created_at", base + timedelta(minutes=counter["n"]))
        fields.setdefault("updated_at", fields["created_at"])
        task = Task(title=title, **fields)
        session.add(task)
        session.flush()
        for category_id in category_ids:
            session.add(TaskCategory(task_id=task.id, category_id=category_id))
        session.commit()
        session.refresh(task)
        return task
    return _make
