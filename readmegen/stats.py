"""Descriptive statistics over a loaded repository's files."""

from __future__ import annotations

from collections import defaultdict
from pathlib import PurePosixPath
from typing import Dict, List, Sequence

from .models import FileSize, LanguageStat, RepositoryFile

_LANGUAGE_BY_EXTENSION = {
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "md": "markdown",
    "markdown": "markdown",
    "py": "python",
    "rb": "ruby",
    "php": "php",
    "go": "go",
    "rs": "rust",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "c": "c",
    "cs": "csharp",
    "swift": "swift",
    "kt": "kotlin",
    "vue": "vue",
    "scss": "scss",
    "less": "less",
    "yml": "yaml",
    "yaml": "yaml",
    "xml": "xml",
    "sql": "sql",
    "sh": "shell",
    "bash": "shell",
    "ps1": "powershell",
    "pl": "perl",
    "lua": "lua",
    "r": "r",
    "dart": "dart",
    "ex": "elixir",
    "exs": "elixir",
}

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def detect_language(path: str) -> str | None:
    name = PurePosixPath(path).name
    if "." not in name:
        return None
    extension = name.rsplit(".", 1)[1].lower()
    if not extension:
        return None
    return _LANGUAGE_BY_EXTENSION.get(extension, extension)


def content_size(entry: RepositoryFile) -> int:
    return len(entry.content.encode("utf-8"))


def language_stats(files: Sequence[RepositoryFile], *, by_size: bool = False) -> List[LanguageStat]:
    """Group files by extension-derived language, ordered by count (or bytes) descending."""
    counts: Dict[str, int] = defaultdict(int)
    sizes: Dict[str, int] = defaultdict(int)
    for entry in files:
        if not entry.is_file:
            continue
        language = detect_language(entry.path)
        if language is None:
            continue
        counts[language] += 1
        sizes[language] += content_size(entry)

    total_count = sum(counts.values())
    total_bytes = sum(sizes.values())
    stats = [
        LanguageStat(
            language=language,
            count=counts[language],
            bytes=sizes[language],
            count_share=counts[language] / total_count if total_count else 0.0,
            byte_share=sizes[language] / total_bytes if total_bytes else 0.0,
        )
        for language in counts
    ]
    key = (lambda stat: stat.bytes) if by_size else (lambda stat: stat.count)
    return sorted(stats, key=key, reverse=True)


def largest_files(files: Sequence[RepositoryFile], limit: int = 5) -> List[FileSize]:
    sizes = [FileSize(path=entry.path, size=content_size(entry)) for entry in files if entry.is_file]
    return sorted(sizes, key=lambda item: item.size, reverse=True)[:limit]


def format_bytes(size: int, *, precision: int = 1) -> str:
    """Human readable size using 1024-based units (``0 B``, ``1.5 KB``)."""
    if size <= 0:
        return "0 B"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, precision)
    if value == int(value):
        value_text = str(int(value))
    else:
        value_text = f"{value:.{precision}f}".rstrip("0")
    return f"{value_text} {_SIZE_UNITS[exponent]}"


__all__ = ["content_size", "detect_language", "format_bytes", "language_stats", "largest_files"]
