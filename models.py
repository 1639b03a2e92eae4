from extensions import db
from datetime import datetime

PENDING = "Pending"
IN_PROGRESS = "In Progress"
DONE = "Done"

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 250
STATUS_NAME_MAX_LENGTH = 50


class Status(db.Model):                               # A named state a task can be in
    __tablename__ = "statuses"

    id = db.Column(db.Integer, primary_key=True)
    status_name = db.Column(db.String(STATUS_NAME_MAX_LENGTH), unique=True, nullable=False)
    is_default = db.Column(db.Boolean, nullable=False, default=False)   # status given to new tasks

    def __repr__(self):
        return f"<Status {self.status_name}>"


class Task(db.Model):                                 # Model for storing the details of a to-do item
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.String(DESCRIPTION_MAX_LENGTH), nullable=True)
    created_date = db.Column(db.DateTime, nullable=False, default=datetime.now)
    completed_date = db.Column(db.DateTime, nullable=True)   # only set while the task is Done
    status_id = db.Column(db.Integer, db.ForeignKey("statuses.id"), nullable=False)
    version = db.Column(db.Integer, nullable=False)

    status = db.relationship("Status")

    # UPDATE/DELETE match on version too, so a row changed or removed since
    # it was loaded raises StaleDataError instead of being silently overwritten
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Task {self.id} {self.title!r}>"


def validate_task(title, description):
    """Return a dict of field name -> error message; empty when the input is valid."""
    errors = {}

    if not title or not title.strip():
        errors["title"] = "Enter the task title."
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"The title must have a maximum of {TITLE_MAX_LENGTH} characters."

    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = (
            f"The description must have a maximum of {DESCRIPTION_MAX_LENGTH} characters."
        )

    return errors
