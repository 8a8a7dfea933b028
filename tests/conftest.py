from __future__ import annotations

import base64
import io
import json
import logging
from typing import Dict, List, Tuple
from urllib.error import HTTPError, URLError

import pytest

from readmegen.credentials import GEMINI_KEY, GITHUB_KEY, CredentialStore
from readmegen.models import FileKind, Repository, RepositoryFile
from readmegen.progress import ProgressLog

API = "https://api.github.com"


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


class FakeGitHub:
    """Routes ``urlopen`` calls to canned GitHub API payloads."""

    def __init__(self, owner: str = "acme", name: str = "widgets") -> None:
        self.owner = owner
        self.name = name
        self.routes: Dict[str, Tuple[int, object]] = {}
        self.requests: List[object] = []
        self.offline: set[str] = set()

    @property
    def repo_url(self) -> str:
        return f"{API}/repos/{self.owner}/{self.name}"

    def contents_url(self, path: str = "") -> str:
        return f"{self.repo_url}/contents/{path}"

    def metadata(self, status: int = 200, **overrides: object) -> None:
        payload: Dict[str, object] = {
            "name": self.name,
            "description": "Widgets for everyone",
            "language": "TypeScript",
            "stargazers_count": 42,
            "forks_count": 7,
            "open_issues_count": 3,
            "license": {"name": "MIT License"},
            "updated_at": "2024-05-01T12:00:00Z",
        }
        payload.update(overrides)
        self.routes[self.repo_url] = (status, payload)

    def listing(self, path: str, entries: List[dict], status: int = 200) -> None:
        self.routes[self.contents_url(path)] = (status, entries)

    def file_entry(self, path: str, content: str | None, status: int = 200) -> dict:
        url = f"{self.contents_url(path)}?ref=main"
        if content is not None:
            encoded = base64.encodebytes(content.encode("utf-8")).decode("ascii")
            self.routes[url] = (status, {"content": encoded, "encoding": "base64"})
        else:
            self.routes[url] = (status, {"message": "error"})
        return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "file", "url": url}

    def dir_entry(self, path: str) -> dict:
        return {
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "type": "dir",
            "url": f"{self.contents_url(path)}?ref=main",
        }

    def __call__(self, request, timeout=None):  # type: ignore[no-untyped-def]
        self.requests.append(request)
        url = request.full_url
        if url in self.offline:
            raise URLError("connection refused")
        if url not in self.routes:
            raise HTTPError(url, 404, "Not Found", hdrs=None, fp=io.BytesIO(b'{"message": "Not Found"}'))
        status, payload = self.routes[url]
        if status >= 400:
            raise HTTPError(url, status, "error", hdrs=None, fp=io.BytesIO(b"{}"))
        if isinstance(payload, bytes):
            return FakeResponse(payload)
        return FakeResponse(json.dumps(payload).encode("utf-8"))


@pytest.fixture
def fake_github(monkeypatch: pytest.MonkeyPatch) -> FakeGitHub:
    """Patch the source client's ``urlopen`` with an in-memory GitHub."""
    github = FakeGitHub()
    monkeypatch.setattr("readmegen.source.client.urlopen", github)
    return github


@pytest.fixture
def widgets_repo(fake_github: FakeGitHub) -> FakeGitHub:
    """``acme/widgets`` with ``src/a.ts``, ``src/b.ts`` and ``README.md``."""
    fake_github.metadata()
    fake_github.listing(
        "",
        [fake_github.dir_entry("src"), fake_github.file_entry("README.md", "# Widgets\n")],
    )
    fake_github.listing(
        "src",
        [
            fake_github.file_entry("src/a.ts", "export const a = 1;\n"),
            fake_github.file_entry("src/b.ts", "export const b = 2;\n"),
        ],
    )
    return fake_github


@pytest.fixture
def sink() -> ProgressLog:
    return ProgressLog()


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore({GITHUB_KEY: "gh-token", GEMINI_KEY: "gemini-key"})


@pytest.fixture
def repository() -> Repository:
    files = (
        RepositoryFile(name="src", path="src", content="", kind=FileKind.DIRECTORY),
        RepositoryFile(name="a.ts", path="src/a.ts", content="export const a = 1;\n", kind=FileKind.FILE),
        RepositoryFile(name="README.md", path="README.md", content="# Widgets\n", kind=FileKind.FILE),
    )
    return Repository(
        url="https://github.com/acme/widgets",
        name="widgets",
        description="Widgets for everyone",
        language="TypeScript",
        stars=42,
        forks=7,
        open_issue_count=3,
        license="MIT License",
        last_update="2024-05-01T12:00:00Z",
        files=files,
        readme="# Widgets\n",
    )


@pytest.fixture(autouse=True)
def restore_readmegen_logger():  # type: ignore[no-untyped-def]
    """Undo handlers installed by ``configure_logging`` during a test."""
    logger = logging.getLogger("readmegen")
    level, propagate, handlers = logger.level, logger.propagate, list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
    for handler in handlers:
        logger.addHandler(handler)
