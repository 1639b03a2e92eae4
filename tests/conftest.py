from datetime import datetime
from pathlib import Path

import pytest

from app import create_app
from extensions import db
from models import PENDING, Task
from repository import TaskRepository


@pytest.fixture()
def app(tmp_path: Path):
    """App against a throwaway SQLite file, seeded with the standard statuses."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'tasks.db'}",
        "SEED_STATUSES": True,
        "LOG_LEVEL": "INFO",
    })
    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def repo(app):
    with app.app_context():
        yield TaskRepository(db.session)


@pytest.fixture()
def add_task(app):
    """Insert a task in its own app context and return its id."""

    def _add(title, description=None, status_name=PENDING, completed_date=None):
        with app.app_context():
            repo = TaskRepository(db.session)
            task = Task(
                title=title,
                description=description,
                created_date=datetime(2024, 1, 15, 9, 30),
                completed_date=completed_date,
                status=repo.get_status_by_name(status_name),
            )
            repo.add_task(task)
            return task.id

    return _add
