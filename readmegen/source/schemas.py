"""Explicit shapes for the source API payloads consumed by the loader."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..errors import FetchError
from ..models import RepositoryMetadata

ENTRY_TYPE_FILE = "file"
ENTRY_TYPE_DIR = "dir"


@dataclass(frozen=True)
class ContentEntry:
    """One item of a ``/contents/{path}`` listing."""

    name: str
    path: str
    type: str
    url: str


def parse_repository_metadata(payload: Any) -> RepositoryMetadata:
    data = _require_mapping(payload, "repository metadata")
    license_data = data.get("license")
    license_name: Optional[str] = None
    if isinstance(license_data, Mapping):
        license_name = _optional_str(license_data, "name", "license")
    elif license_data is not None:
        raise FetchError("Unexpected repository metadata: 'license' must be an object")

    return RepositoryMetadata(
        name=_require_str(data, "name", "repository metadata"),
        description=_optional_str(data, "description", "repository metadata") or "",
        language=_optional_str(data, "language", "repository metadata"),
        stars=_require_int(data, "stargazers_count", "repository metadata"),
        forks=_require_int(data, "forks_count", "repository metadata"),
        open_issue_count=_require_int(data, "open_issues_count", "repository metadata"),
        license=license_name,
        last_update=_require_str(data, "updated_at", "repository metadata"),
    )


def parse_contents_listing(payload: Any) -> List[ContentEntry]:
    """Accept either a list of entries or the single object returned for a file path."""
    items = payload if isinstance(payload, list) else [payload]
    entries: List[ContentEntry] = []
    for item in items:
        data = _require_mapping(item, "contents entry")
        entries.append(
            ContentEntry(
                name=_require_str(data, "name", "contents entry"),
                path=_require_str(data, "path", "contents entry"),
                type=_require_str(data, "type", "contents entry"),
                url=_require_str(data, "url", "contents entry"),
            )
        )
    return entries


def decode_file_content(payload: Any) -> str:
    """Decode the base64 ``content`` field of a file payload to text."""
    data = _require_mapping(payload, "file content")
    encoded = _optional_str(data, "content", "file content")
    if not encoded:
        return ""
    try:
        raw = base64.b64decode(encoded)
    except (binascii.Error, ValueError) as exc:
        raise FetchError(f"Unexpected file content: invalid base64 ({exc})") from exc
    return raw.decode("utf-8", errors="replace")


def _require_mapping(payload: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise FetchError(f"Unexpected {label}: expected an object")
    return payload


def _require_str(data: Mapping[str, Any], key: str, label: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise FetchError(f"Unexpected {label}: '{key}' must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str, label: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FetchError(f"Unexpected {label}: '{key}' must be a string")
    return value


def _require_int(data: Mapping[str, Any], key: str, label: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise FetchError(f"Unexpected {label}: '{key}' must be an integer")
    return value


__all__ = [
    "ContentEntry",
    "ENTRY_TYPE_DIR",
    "ENTRY_TYPE_FILE",
    "decode_file_content",
    "parse_contents_listing",
    "parse_repository_metadata",
]
