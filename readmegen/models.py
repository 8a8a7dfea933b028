"""Core data models shared across readmegen components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class FileKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class RepositoryFile:
    """One entry of the flattened repository tree."""

    name: str
    path: str
    content: str
    kind: FileKind

    @property
    def is_file(self) -> bool:
        return self.kind is FileKind.FILE


@dataclass(frozen=True)
class RepositoryMetadata:
    """Validated subset of the source API repository payload."""

    name: str
    description: str
    language: Optional[str]
    stars: int
    forks: int
    open_issue_count: int
    license: Optional[str]
    last_update: str


@dataclass(frozen=True)
class Repository:
    """Aggregate result of one repository load."""

    url: str
    name: str
    description: str
    language: Optional[str]
    stars: int
    forks: int
    open_issue_count: int
    license: Optional[str]
    last_update: str
    files: Tuple[RepositoryFile, ...] = field(default_factory=tuple)
    readme: str = ""


@dataclass(frozen=True)
class GeneratedDoc:
    """Synthesized markdown paired with the repository it describes."""

    content: str
    repository: Repository


@dataclass(frozen=True)
class LanguageStat:
    """File count and byte totals for one language."""

    language: str
    count: int
    bytes: int
    count_share: float
    byte_share: float


@dataclass(frozen=True)
class FileSize:
    path: str
    size: int
