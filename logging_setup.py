import logging
import sys

# Libraries that are noisy at INFO; only shown when the app itself runs at DEBUG
_QUIET_LOGGERS = ("sqlalchemy", "werkzeug")


class _AppHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces only our own handler."""


def setup_logging(level="INFO"):
    """
    Configure the root logger with a single stderr handler.

    Safe to call more than once (the app factory runs per test): a handler
    installed by an earlier call is replaced, others are left alone.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        if isinstance(h, _AppHandler):
            root.removeHandler(h)

    handler = _AppHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    third_party_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
