import logging
from datetime import datetime

from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for

from extensions import db
from models import DONE, IN_PROGRESS, PENDING, Task, validate_task
from repository import ConcurrencyConflict, TaskRepository

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)

# URL slug -> status name used by the transition routes
STATUS_SLUGS = {
    "in-progress": IN_PROGRESS,
    "pending": PENDING,
    "done": DONE,
}


def get_repository():
    """One repository per request, bound to the app-context scoped session."""
    if "task_repository" not in g:
        g.task_repository = TaskRepository(db.session)
    return g.task_repository


def _read_form():
    title = request.form.get("title", "").strip()
    description = request.form.get("description", "").strip() or None
    return title, description


@tasks_bp.route("/")
def start():
    return redirect(url_for("tasks.index"))


@tasks_bp.route("/tasks")   # List every task with its status
def index():
    tasks = get_repository().get_all_tasks()
    return render_template("index.html", tasks=tasks)


@tasks_bp.route("/tasks/new")   # Empty form for a new task
def new_task():
    return render_template("task_form.html", task=None, form={}, errors={})


@tasks_bp.route("/tasks", methods=["POST"])
def create_task():
    title, description = _read_form()
    form = {"title": title, "description": description}

    errors = validate_task(title, description)
    if errors:
        return render_template("task_form.html", task=None, form=form, errors=errors), 400

    repo = get_repository()
    task = Task(title=title, description=description, created_date=datetime.now())

    default_status = repo.get_default_status()
    if default_status is None:
        logger.error("Cannot create task %r: no default status configured", title)
        errors = {"status": "Default status not found."}
        return render_template("task_form.html", task=None, form=form, errors=errors), 400

    task.status = default_status
    repo.add_task(task)

    flash("Task added successfully!", "success")
    return redirect(url_for("tasks.index"))


@tasks_bp.route("/tasks/<int:task_id>/edit")
def edit_task(task_id):
    task = get_repository().get_task_by_id(task_id)
    if task is None:
        abort(404)

    form = {"title": task.title, "description": task.description}
    return render_template("task_form.html", task=task, form=form, errors={})


@tasks_bp.route("/tasks/<int:task_id>", methods=["POST"])
def update_task(task_id):
    # The hidden id field must agree with the URL
    if request.form.get("id", type=int) != task_id:
        abort(404)

    repo = get_repository()
    task = repo.get_task_by_id(task_id)
    if task is None:
        abort(404)

    title, description = _read_form()
    errors = validate_task(title, description)
    if errors:
        form = {"title": title, "description": description}
        return render_template("task_form.html", task=task, form=form, errors=errors), 400

    # Status and dates only change through the status routes
    task.title = title
    task.description = description

    try:
        repo.update_task(task)
    except ConcurrencyConflict:
        if not repo.task_exists(task_id):
            abort(404)
        logger.exception("Task id=%s changed while being edited", task_id)
        raise

    flash("Task updated successfully!", "success")
    return redirect(url_for("tasks.index"))


@tasks_bp.route("/tasks/<int:task_id>/delete")   # Confirmation page
def confirm_delete_task(task_id):
    task = get_repository().get_task_by_id(task_id)
    if task is None:
        abort(404)
    return render_template("delete.html", task=task)


@tasks_bp.route("/tasks/<int:task_id>/delete", methods=["POST"])
def delete_task(task_id):
    get_repository().delete_task(task_id)
    flash("Task deleted successfully!", "success")
    return redirect(url_for("tasks.index"))


@tasks_bp.route("/tasks/<int:task_id>/status/<slug>", methods=["POST"])
def set_status(task_id, slug):
    status_name = STATUS_SLUGS.get(slug)
    if status_name is None:
        abort(404)

    get_repository().set_task_status(task_id, status_name)
    return redirect(url_for("tasks.index"))


@tasks_bp.route("/tasks/clear-done", methods=["POST"])
def clear_done_tasks():
    removed = get_repository().clear_done_tasks()
    flash(f"Cleared {removed} completed task(s).", "success")
    return redirect(url_for("tasks.index"))
