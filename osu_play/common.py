"""
The common module holds the handful of things every other module needs: the version, the base
error classes, and logging setup.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import appdirs

with (Path(__file__).parent / ".version").open("r") as fp:
    VERSION = fp.read().strip()


class OsuPlayError(Exception):
    pass


class OsuPlayExpectedError(OsuPlayError):
    """These errors are printed without traceback."""

    pass


LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def log_dir() -> Path:
    """The directory of the log file: ~/Library/Logs on macOS, the XDG state directory elsewhere."""
    if appdirs.system == "darwin":
        return Path(appdirs.user_log_dir("osu-play"))
    return Path(appdirs.user_state_dir("osu-play"))


_configured_loggers: set[str | None] = set()


def initialize_logging(logger_name: str | None = None, *, output_dir: Path | None = None) -> None:
    """
    Send the logger's records to stderr in short form and to a rotated log file in full. Calling this
    again for the same logger does nothing.

    Under pytest, which captures log records itself, no handlers are attached unless LOG_TEST is set.
    """
    if logger_name in _configured_loggers:
        return
    _configured_loggers.add(logger_name)

    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    if "pytest" in sys.modules and not os.environ.get("LOG_TEST"):
        return

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console)

    directory = output_dir or log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    logfile = logging.handlers.RotatingFileHandler(
        directory / "osu-play.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    logfile.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s:%(lineno)d pid=%(process)d %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(logfile)
