"""Repository URL normalisation and owner/name extraction."""

from __future__ import annotations

import re
from typing import Tuple

from ..errors import InvalidUrlError

_IDENTITY_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")


def normalize_url(url: str) -> str:
    """Drop query string and fragment, then strip trailing slashes."""
    cleaned = url.strip()
    cleaned = cleaned.split("#", 1)[0]
    cleaned = cleaned.split("?", 1)[0]
    return cleaned.rstrip("/")


def resolve_identity(url: str) -> Tuple[str, str]:
    """Return ``(owner, name)`` for a GitHub repository URL."""
    match = _IDENTITY_PATTERN.search(normalize_url(url))
    if not match:
        raise InvalidUrlError("Invalid GitHub repository URL")
    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise InvalidUrlError("Invalid GitHub repository URL")
    return owner, name


__all__ = ["normalize_url", "resolve_identity"]
