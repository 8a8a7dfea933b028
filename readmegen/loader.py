"""Repository loading: metadata fetch plus a sequential walk of the contents tree."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from .errors import FetchError
from .logging import get_logger
from .models import FileKind, Repository, RepositoryFile, RepositoryMetadata
from .progress import LogLevel, ProgressLog
from .source.client import GitHubClient
from .source.schemas import (
    ENTRY_TYPE_DIR,
    ENTRY_TYPE_FILE,
    ContentEntry,
    decode_file_content,
    parse_contents_listing,
    parse_repository_metadata,
)
from .source.urls import normalize_url, resolve_identity

README_NAMES = frozenset({"readme", "readme.md"})


def find_readme(files: Iterable[RepositoryFile]) -> Optional[RepositoryFile]:
    """Return the first file named ``readme``/``readme.md`` anywhere in the flattened tree."""
    for entry in files:
        if entry.is_file and entry.name.lower() in README_NAMES:
            return entry
    return None


class RepositoryLoader:
    """Builds a :class:`Repository` from a GitHub URL.

    Every request is issued and awaited one at a time, siblings included, so
    at most one call is in flight against the rate-limited API.
    """

    def __init__(self, client: GitHubClient, sink: ProgressLog | None = None) -> None:
        self.client = client
        self.sink = sink or ProgressLog()
        self.logger = get_logger("loader")

    def load_repository(self, url: str) -> Repository:
        """Resolve, fetch and walk a repository. Failures discard all partial results."""
        self.sink.reset()
        self.sink.log(f"Starting repository fetch: {url}")
        try:
            owner, name = resolve_identity(url)
            metadata = self.fetch_metadata(owner, name)
            self.sink.set_progress(10)

            self.sink.log("Starting to fetch repository contents")
            files = self.walk(owner, name)
            self.sink.set_progress(90)
            self.sink.log("Successfully fetched all repository contents", LogLevel.SUCCESS)

            readme = find_readme(files)
            if readme is not None:
                self.sink.log(f"Found existing README file: {readme.path}")
        except Exception as exc:
            self.sink.fail(str(exc))
            raise

        repository = Repository(
            url=normalize_url(url),
            name=metadata.name,
            description=metadata.description,
            language=metadata.language,
            stars=metadata.stars,
            forks=metadata.forks,
            open_issue_count=metadata.open_issue_count,
            license=metadata.license,
            last_update=metadata.last_update,
            files=tuple(files),
            readme=readme.content if readme is not None else "",
        )
        self.sink.set_progress(100)
        self.sink.log("Repository fetch completed successfully", LogLevel.SUCCESS)
        return repository

    def fetch_metadata(self, owner: str, name: str) -> RepositoryMetadata:
        self.logger.debug("Fetching repository metadata for %s/%s", owner, name)
        payload = self.client.get_repository(owner, name)
        metadata = parse_repository_metadata(payload)
        self.sink.log("Successfully fetched repository metadata", LogLevel.SUCCESS)
        return metadata

    def walk(self, owner: str, name: str, path: str = "") -> List[RepositoryFile]:
        """Flatten the tree under ``path``: each directory precedes its descendants."""
        files: List[RepositoryFile] = []
        self._walk(owner, name, path, files, set())
        return files

    def _walk(
        self,
        owner: str,
        name: str,
        path: str,
        files: List[RepositoryFile],
        seen: Set[str],
    ) -> None:
        self.logger.debug("Listing %s/%s:%s", owner, name, path or "/")
        entries = parse_contents_listing(self.client.list_contents(owner, name, path))
        for entry in entries:
            if entry.path in seen:
                self.logger.debug("Skipping duplicate path %s", entry.path)
                continue
            if entry.type == ENTRY_TYPE_FILE:
                seen.add(entry.path)
                files.append(
                    RepositoryFile(
                        name=entry.name,
                        path=entry.path,
                        content=self._fetch_content(entry),
                        kind=FileKind.FILE,
                    )
                )
            elif entry.type == ENTRY_TYPE_DIR:
                seen.add(entry.path)
                files.append(
                    RepositoryFile(
                        name=entry.name,
                        path=entry.path,
                        content="",
                        kind=FileKind.DIRECTORY,
                    )
                )
                self._walk(owner, name, entry.path, files, seen)
            else:
                self.logger.debug("Skipping %s entry %s", entry.type, entry.path)
        self.logger.debug("Fetched %d entries so far (after %s)", len(files), path or "root")

    def _fetch_content(self, entry: ContentEntry) -> str:
        try:
            return decode_file_content(self.client.get_json(entry.url))
        except FetchError as exc:
            self.sink.log(f"Failed to fetch file content for {entry.path}: {exc}", LogLevel.WARN)
            return ""


__all__ = ["README_NAMES", "RepositoryLoader", "find_readme"]
