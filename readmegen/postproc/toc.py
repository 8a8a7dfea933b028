"""Table-of-contents injection for generated README text."""

from __future__ import annotations

import re
from typing import List

_EXISTING_TOC = re.compile(r"^#{1,6}[ \t]+Table of Contents[ \t]*$", re.MULTILINE)
_LEVEL_TWO = re.compile(r"^## (.+)$")


class TableOfContentsBuilder:
    """Prepends a ToC of level-two headings unless one is already present."""

    TITLE = "Table of Contents"

    def build(self, markdown: str) -> str:
        if self.has_toc(markdown):
            return markdown
        headings = self.headings(markdown)
        if not headings:
            return markdown
        lines: List[str] = [f"## {self.TITLE}", ""]
        lines.extend(f"- [{title}](#{self.slugify(title)})" for title in headings)
        return "\n".join(lines) + "\n\n" + markdown

    @staticmethod
    def has_toc(markdown: str) -> bool:
        return _EXISTING_TOC.search(markdown) is not None

    @staticmethod
    def headings(markdown: str) -> List[str]:
        """Return level-two heading titles found outside fenced code blocks."""
        titles: List[str] = []
        in_code = False
        for line in markdown.splitlines():
            if line.lstrip().startswith("```"):
                in_code = not in_code
                continue
            if in_code:
                continue
            match = _LEVEL_TWO.match(line)
            if match:
                title = match.group(1).strip()
                if title:
                    titles.append(title)
        return titles

    @staticmethod
    def slugify(title: str) -> str:
        slug = title.lower()
        slug = re.sub(r"[^\w\s-]", "", slug)
        return re.sub(r"\s+", "-", slug)


__all__ = ["TableOfContentsBuilder"]
