"""Application settings loaded from environment variables.

Every variable uses the ``TASKTRACKER_`` prefix. Anything not set falls
back to a development default, so the app starts with no environment at all.
"""

import os

ENV_PREFIX = "TASKTRACKER"


def _k(suffix):
    return f"{ENV_PREFIX}_{suffix}"


def _env(name, default=""):
    value = os.getenv(name)
    return default if value is None else value


def _env_bool(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


class Config:
    SECRET_KEY = _env(_k("SECRET_KEY"), "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = _env(_k("DATABASE_URI"), "sqlite:///tasks.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Insert Pending / In Progress / Done when the statuses table is empty
    SEED_STATUSES = _env_bool(_k("SEED_STATUSES"), True)

    LOG_LEVEL = _env(_k("LOG_LEVEL"), "INFO").upper()
