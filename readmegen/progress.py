"""Progress and log sink shared by the loader and the synthesizer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import List, Tuple

from .logging import get_logger, progress_level


class LogLevel(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class LogEntry:
    """A single timestamped message recorded during a request."""

    timestamp: datetime
    level: LogLevel
    message: str

    def format(self) -> str:
        stamp = self.timestamp.isoformat().replace("+00:00", "Z")
        return f"[{stamp}] {self.level.value.upper()}: {self.message}"


class ProgressLog:
    """Holds the progress percentage and ordered log entries of one request.

    A single instance is handed to every step of a load-and-generate request.
    Only the active request writes to it; presentation layers read
    ``progress`` and ``entries``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._progress = 0
        self._entries: List[LogEntry] = []
        self._logger = logger or get_logger("progress")

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    def reset(self) -> None:
        """Start a new request: progress back to 0 and the log cleared."""
        self._progress = 0
        self._entries.clear()

    def set_progress(self, value: float) -> None:
        self._progress = int(min(100, max(0, value)))

    def log(self, message: str, level: LogLevel | str = LogLevel.INFO) -> LogEntry:
        level = LogLevel(level)
        entry = LogEntry(timestamp=datetime.now(UTC), level=level, message=message)
        self._entries.append(entry)
        self._logger.log(progress_level(level.value), message)
        return entry

    def fail(self, message: str) -> None:
        """Record a terminal failure so consumers see the request as not in progress."""
        self.log(message, LogLevel.ERROR)
        self._progress = 0


__all__ = ["LogEntry", "LogLevel", "ProgressLog"]
