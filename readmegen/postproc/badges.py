"""Badge injection for generated README text."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from ..models import Repository

SHIELDS_URL = "https://img.shields.io/badge"


@dataclass
class BadgeManager:
    """Adds a static shield line after the main title when the text has no images."""

    def apply(self, markdown: str, repository: Repository) -> str:
        if "![" in markdown:
            return markdown

        lines = markdown.splitlines(keepends=True)
        in_code = False
        for index, line in enumerate(lines):
            if line.lstrip().startswith("```"):
                in_code = not in_code
                continue
            if in_code or not line.startswith("# "):
                continue
            heading = line.rstrip("\r\n")
            line_end = line[len(heading):]
            lines[index] = f"{heading}\n\n{self.badge_line(repository)}{line_end}"
            return "".join(lines)

        # no level-one heading: nothing to anchor the badges to
        return markdown

    @staticmethod
    def badge_line(repository: Repository) -> str:
        license_name = quote(repository.license or "Unknown", safe="")
        language = quote(repository.language or "Unknown", safe="")
        badges = (
            f"![License]({SHIELDS_URL}/license-{license_name}-blue.svg)",
            f"![Language]({SHIELDS_URL}/{language}-language-blue.svg)",
            f"![Stars]({SHIELDS_URL}/Stars-{repository.stars}-yellow.svg)",
            f"![Forks]({SHIELDS_URL}/Forks-{repository.forks}-blue.svg)",
        )
        return " ".join(badges)


__all__ = ["BadgeManager"]
