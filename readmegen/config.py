"""Configuration loading for readmegen (.readmegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ReadmeGenError

CONFIG_FILENAME = ".readmegen.yml"


class ConfigError(ReadmeGenError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GitHubConfig:
    """Source API settings."""

    api_url: str = "https://api.github.com"
    token: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class GenerationConfig:
    """Generation API settings. The model itself is fixed by the client."""

    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class PromptConfig:
    excerpt_chars: int = 500


@dataclass
class HistoryConfig:
    """URL history persistence."""

    path: Path = field(default_factory=lambda: Path.home() / ".readmegen" / "history.json")
    limit: int = 5


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml."""

    root: Path
    github: GitHubConfig = field(default_factory=GitHubConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)


def load_config(config_path: Path | None = None) -> ReadmeGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ReadmeGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    github = GitHubConfig()
    github_data = _as_dict(data.get("github"))
    if github_data:
        github.api_url = _as_str(github_data.get("api_url")) or github.api_url
        github.token = _as_str(github_data.get("token"))
        github.request_timeout = _as_float(github_data.get("request_timeout"))

    generation = GenerationConfig()
    generation_data = _as_dict(data.get("generation"))
    if generation_data:
        generation.base_url = _as_str(generation_data.get("base_url")) or generation.base_url
        generation.api_key = _as_str(generation_data.get("api_key"))
        generation.request_timeout = _as_float(generation_data.get("request_timeout"))

    prompt = PromptConfig()
    prompt_data = _as_dict(data.get("prompt"))
    excerpt_chars = _as_int(prompt_data.get("excerpt_chars"))
    if excerpt_chars is not None:
        if excerpt_chars < 0:
            raise ConfigError("prompt.excerpt_chars must not be negative")
        prompt.excerpt_chars = excerpt_chars

    history = HistoryConfig()
    history_data = _as_dict(data.get("history"))
    history_path = _as_str(history_data.get("path"))
    if history_path:
        candidate = Path(history_path).expanduser()
        history.path = candidate if candidate.is_absolute() else root / candidate
    history_limit = _as_int(history_data.get("limit"))
    if history_limit is not None and history_limit > 0:
        history.limit = history_limit

    return ReadmeGenConfig(
        root=root,
        github=github,
        generation=generation,
        prompt=prompt,
        history=history,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GenerationConfig",
    "GitHubConfig",
    "HistoryConfig",
    "PromptConfig",
    "ReadmeGenConfig",
    "load_config",
]
