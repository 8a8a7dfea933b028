"""Builds the README generation prompt from a loaded repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import Repository, RepositoryFile
from .constants import (
    EXCERPT_CHAR_LIMIT,
    FORMAT_RULES,
    LANGUAGE_TAGS,
    PROMPT_TEMPLATE,
    README_SECTIONS,
)


@dataclass(frozen=True)
class PatternRule:
    """Maps a predicate over one tree entry to a convention label."""

    label: str
    predicate: Callable[[RepositoryFile], bool]


def _is_config(entry: RepositoryFile) -> bool:
    return "config" in entry.name or entry.name.endswith((".json", ".yaml", ".yml"))


def _is_test(entry: RepositoryFile) -> bool:
    return (
        "test" in entry.path
        or "spec" in entry.path
        or entry.name.endswith((".test.ts", ".spec.ts"))
    )


def _is_container(entry: RepositoryFile) -> bool:
    return entry.name in {"Dockerfile", "docker-compose.yml", "docker-compose.yaml"}


def _is_ci(entry: RepositoryFile) -> bool:
    path = entry.path
    return (
        path.startswith((".github/workflows/", ".circleci/"))
        or path in {".gitlab-ci.yml", ".gitlab-ci.yaml", "azure-pipelines.yml"}
    )


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule("Configuration Management", _is_config),
    PatternRule("Testing Framework", _is_test),
    PatternRule("Containerization", _is_container),
    PatternRule("Continuous Integration", _is_ci),
)


def detect_patterns(
    files: Sequence[RepositoryFile],
    rules: Sequence[PatternRule] = PATTERN_RULES,
) -> List[str]:
    """Return the label of every rule matched by at least one entry, in rule order."""
    return [rule.label for rule in rules if any(rule.predicate(entry) for entry in files)]


def render_tree(files: Sequence[RepositoryFile]) -> str:
    """Render the flattened tree as an indented outline rebuilt from path segments."""
    root: Dict[str, Dict | None] = {}
    for entry in files:
        parts = entry.path.split("/")
        current = root
        for index, part in enumerate(parts):
            if index == len(parts) - 1:
                if entry.is_file:
                    current.setdefault(part, None)
                else:
                    existing = current.get(part)
                    current[part] = existing if isinstance(existing, dict) else {}
            else:
                child = current.get(part)
                if not isinstance(child, dict):
                    child = {}
                    current[part] = child
                current = child

    lines: List[str] = []

    def emit(node: Dict[str, Dict | None], depth: int) -> None:
        prefix = "  " * depth
        for key, value in node.items():
            if value is None:
                lines.append(f"{prefix}- 📄 {key}")
            else:
                lines.append(f"{prefix}- 📁 {key}")
                emit(value, depth + 1)

    emit(root, 0)
    return "\n".join(lines)


def language_tag(path: str) -> str:
    """Return the code fence language for a path, falling back to its bare extension."""
    name = PurePosixPath(path).name
    if "." not in name:
        return ""
    extension = name.rsplit(".", 1)[1].lower()
    return LANGUAGE_TAGS.get(extension, extension)


def format_excerpts(files: Sequence[RepositoryFile], *, limit: int = EXCERPT_CHAR_LIMIT) -> str:
    """Fence the leading ``limit`` characters of every non-empty file."""
    blocks: List[str] = []
    for entry in files:
        if not entry.is_file or not entry.content:
            continue
        excerpt = entry.content[:limit]
        if len(entry.content) > limit:
            excerpt += "..."
        blocks.append(f"{entry.path}:\n```{language_tag(entry.path)}\n{excerpt}\n```")
    return "\n\n".join(blocks)


class PromptBuilder:
    """Assembles the single README prompt sent to the generation API."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        excerpt_chars: int = EXCERPT_CHAR_LIMIT,
    ) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.excerpt_chars = excerpt_chars
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def build(self, repository: Repository) -> str:
        tree_text = render_tree(repository.files)
        pattern_text = "\n".join(detect_patterns(repository.files))
        return self.build_prompt(repository, tree_text, pattern_text)

    def build_prompt(self, repository: Repository, tree_text: str, pattern_text: str) -> str:
        """Render metadata, tree, patterns, excerpts and the fixed instructions."""
        template = self._env.get_template(PROMPT_TEMPLATE)
        return template.render(
            repository=repository,
            tree_text=tree_text,
            pattern_text=pattern_text,
            excerpts=format_excerpts(repository.files, limit=self.excerpt_chars),
            sections=README_SECTIONS,
            format_rules=FORMAT_RULES,
        )


__all__ = [
    "PATTERN_RULES",
    "PatternRule",
    "PromptBuilder",
    "detect_patterns",
    "format_excerpts",
    "language_tag",
    "render_tree",
]
