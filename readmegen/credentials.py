"""Lookup of the two API credentials the pipeline depends on."""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Sequence

from .config import ReadmeGenConfig

GITHUB_KEY = "github_key"
GEMINI_KEY = "gemini_key"

ENV_KEYS: Dict[str, tuple[str, ...]] = {
    GITHUB_KEY: ("READMEGEN_GITHUB_TOKEN", "GITHUB_TOKEN"),
    GEMINI_KEY: ("READMEGEN_GEMINI_KEY", "GEMINI_API_KEY"),
}


class CredentialStore:
    """Opaque string credentials retrieved by fixed keys."""

    def __init__(self, values: Mapping[str, Optional[str]] | None = None) -> None:
        self._values: Dict[str, str] = {}
        for key, value in (values or {}).items():
            if value and value.strip():
                self._values[key] = value.strip()

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def has(self, key: str) -> bool:
        return key in self._values

    def missing(self, keys: Sequence[str] = (GITHUB_KEY, GEMINI_KEY)) -> list[str]:
        return [key for key in keys if key not in self._values]

    @classmethod
    def from_environment(cls, config: ReadmeGenConfig | None = None) -> "CredentialStore":
        """Resolve credentials from environment variables, then the config file."""
        fallback = {
            GITHUB_KEY: config.github.token if config else None,
            GEMINI_KEY: config.generation.api_key if config else None,
        }
        values: Dict[str, Optional[str]] = {}
        for key, env_keys in ENV_KEYS.items():
            values[key] = _first_env_value(env_keys) or fallback[key]
        return cls(values)


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


__all__ = ["CredentialStore", "ENV_KEYS", "GEMINI_KEY", "GITHUB_KEY"]
