"""Persistent list of recently requested repository URLs."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import List, Tuple

from ..logging import get_logger

_HISTORY_VERSION = 1


class UrlHistory:
    """Most-recent-first, de-duplicated URL list capped at ``limit`` entries."""

    def __init__(self, path: Path | None, *, limit: int = 5) -> None:
        self._path = path
        self.limit = limit
        self._urls: List[str] = []
        self.logger = get_logger("history")
        if self._path is not None:
            self._load(self._path)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._urls)

    def record(self, url: str) -> None:
        self._urls = [url, *(item for item in self._urls if item != url)][: self.limit]
        self.persist()

    def remove(self, url: str) -> None:
        if url in self._urls:
            self._urls = [item for item in self._urls if item != url]
            self.persist()

    def clear(self) -> None:
        self._urls = []
        if self._path is not None and self._path.exists():
            self._path.unlink()

    def persist(self) -> None:
        """Write the list to disk. Write failures are logged, the in-memory list is kept."""
        if self._path is None:
            return
        payload = {
            "version": _HISTORY_VERSION,
            "urls": self._urls,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            self.logger.warning("Could not save URL history to %s: %s", self._path, exc)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _HISTORY_VERSION:
            return
        urls = data.get("urls")
        if not isinstance(urls, list):
            return
        self._urls = [url for url in urls if isinstance(url, str)][: self.limit]


__all__ = ["UrlHistory"]
