"""Data access for tasks and statuses.

``TaskRepository`` wraps one SQLAlchemy session. Every mutating call commits
straight away; there is no unit of work spanning several calls.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import joinedload
from sqlalchemy.orm.exc import StaleDataError

from models import DONE, IN_PROGRESS, PENDING, Status, Task

logger = logging.getLogger(__name__)

# Inserted by seed_statuses(); the first one is the default for new tasks
DEFAULT_STATUS_NAMES = (PENDING, IN_PROGRESS, DONE)


class TaskTrackerError(Exception):
    """Base class for errors raised by the data access layer."""


class ConcurrencyConflict(TaskTrackerError):
    """The task was changed or deleted by someone else between read and write."""

    def __init__(self, task_id):
        super().__init__(f"Task {task_id} was modified or deleted concurrently")
        self.task_id = task_id


class TaskRepository:

    def __init__(self, session):
        self.session = session

    def get_all_tasks(self):
        return (
            self.session.query(Task)
            .options(joinedload(Task.status))
            .all()
        )

    def get_task_by_id(self, task_id):
        return (
            self.session.query(Task)
            .options(joinedload(Task.status))
            .filter(Task.id == task_id)
            .first()
        )

    def add_task(self, task):
        if task.status is None:
            raise ValueError("task.status must be set before the task is added")

        self.session.add(task)
        self.session.commit()
        logger.info("Added task id=%s title=%r", task.id, task.title)

    def update_task(self, task):
        """
        Persist changes made to a loaded task.

        Raises ConcurrencyConflict when the row's version no longer matches,
        which covers both a concurrent edit and a concurrent delete. Callers
        tell the two apart with task_exists().
        """
        task_id = task.id
        try:
            self.session.add(task)
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            logger.warning("Concurrent update detected for task id=%s", task_id)
            raise ConcurrencyConflict(task_id) from exc
        logger.info("Updated task id=%s", task_id)

    def delete_task(self, task_id):
        task = self.session.get(Task, task_id)
        if task is None:
            logger.debug("Delete of missing task id=%s ignored", task_id)
            return

        self.session.delete(task)
        self.session.commit()
        logger.info("Deleted task id=%s", task_id)

    def task_exists(self, task_id):
        # Straight to the database, bypassing any instance in the identity map
        query = self.session.query(Task.id).filter(Task.id == task_id)
        return self.session.query(query.exists()).scalar()

    def get_status_by_name(self, status_name):
        return self.session.query(Status).filter_by(status_name=status_name).first()

    def get_default_status(self):
        """The status flagged as default, else the lowest-id status, else None."""
        status = self.session.query(Status).filter_by(is_default=True).first()
        if status is None:
            status = self.session.query(Status).order_by(Status.id).first()
        return status

    def set_task_status(self, task_id, status_name):
        task = self.session.get(Task, task_id)
        if task is None:
            logger.debug("Status change for missing task id=%s ignored", task_id)
            return

        status = self.get_status_by_name(status_name)
        if status is None:
            logger.warning("Unknown status %r, task id=%s left unchanged", status_name, task_id)
            return

        task.status = status
        if status_name == DONE:
            task.completed_date = datetime.now()
        elif status_name == PENDING:
            task.completed_date = None

        self.session.commit()
        logger.info("Task id=%s moved to %r", task_id, status_name)

    def clear_done_tasks(self):
        done_tasks = (
            self.session.query(Task)
            .join(Task.status)
            .filter(Status.status_name == DONE)
            .all()
        )
        for task in done_tasks:
            self.session.delete(task)
        self.session.commit()

        logger.info("Cleared %d done task(s)", len(done_tasks))
        return len(done_tasks)

    def seed_statuses(self):
        """Insert the standard statuses if the table is empty. Returns how many were added."""
        if self.session.query(Status.id).first() is not None:
            return 0

        for i, name in enumerate(DEFAULT_STATUS_NAMES):
            self.session.add(Status(status_name=name, is_default=(i == 0)))
        self.session.commit()

        logger.info("Seeded statuses: %s", ", ".join(DEFAULT_STATUS_NAMES))
        return len(DEFAULT_STATUS_NAMES)
