"""Generate README documents for GitHub repositories with a hosted language model."""

from __future__ import annotations

from .config import ReadmeGenConfig
from .credentials import CredentialStore
from .errors import (
    FetchError,
    GenerationError,
    InvalidUrlError,
    MissingCredentialError,
    NotFoundError,
    RateLimitError,
    ReadmeGenError,
)
from .models import FileKind, GeneratedDoc, Repository, RepositoryFile
from .orchestrator import Orchestrator
from .progress import ProgressLog

__version__ = "0.1.0"


def load_repository(
    url: str,
    *,
    config: ReadmeGenConfig | None = None,
    credentials: CredentialStore | None = None,
    sink: ProgressLog | None = None,
) -> Repository:
    """Fetch metadata and the full flattened file tree for ``url``."""
    return Orchestrator(config, credentials=credentials, sink=sink).load(url)


def synthesize(
    repository: Repository,
    *,
    config: ReadmeGenConfig | None = None,
    credentials: CredentialStore | None = None,
    sink: ProgressLog | None = None,
) -> str:
    """Generate README markdown for an already loaded repository."""
    return Orchestrator(config, credentials=credentials, sink=sink).synthesize(repository)


__all__ = [
    "CredentialStore",
    "FetchError",
    "FileKind",
    "GeneratedDoc",
    "GenerationError",
    "InvalidUrlError",
    "MissingCredentialError",
    "NotFoundError",
    "Orchestrator",
    "ProgressLog",
    "RateLimitError",
    "ReadmeGenConfig",
    "ReadmeGenError",
    "Repository",
    "RepositoryFile",
    "load_repository",
    "synthesize",
    "__version__",
]
