import logging

from flask import Flask

from config import Config
from extensions import db
from logging_setup import setup_logging
from repository import TaskRepository
from views import tasks_bp

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)

    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    setup_logging(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)

    with app.app_context():
        db.create_all()
        if app.config["SEED_STATUSES"]:
            TaskRepository(db.session).seed_statuses()

    app.register_blueprint(tasks_bp)

    logger.info("Task tracker ready db=%s", app.config["SQLALCHEMY_DATABASE_URI"])
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
