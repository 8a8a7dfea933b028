"""Logging for readmegen.

Every module logs under the ``readmegen`` hierarchy. Entries written to a
:class:`readmegen.progress.ProgressLog` are mirrored to ``readmegen.progress``
so the CLI console and log file show the same messages as ``/progress``.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "readmegen"

# Sink levels have no stdlib equivalent for "success"; it is reported as INFO.
PROGRESS_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the readmegen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def progress_level(level: str) -> int:
    """Map a progress sink level name to a stdlib logging level."""
    return PROGRESS_LEVELS[level]


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send readmegen logs to stderr and, when given, to ``log_file``.

    ``verbose`` lowers the threshold to DEBUG, which adds request URLs from the
    GitHub client and per-directory walk counts from the loader.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run more than once per process (tests, service reloads).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[readmegen] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        # The file always receives the full DEBUG trace.
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["PROGRESS_LEVELS", "configure_logging", "get_logger", "progress_level"]
