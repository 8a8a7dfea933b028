"""Shared constants for README prompting."""

from __future__ import annotations

EXCERPT_CHAR_LIMIT = 500

PROMPT_TEMPLATE = "readme_prompt.md.j2"

LANGUAGE_TAGS: dict[str, str] = {
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "py": "python",
    "rb": "ruby",
    "java": "java",
    "php": "php",
    "go": "go",
    "rs": "rust",
    "c": "c",
    "cpp": "cpp",
    "cs": "csharp",
    "html": "html",
    "css": "css",
    "md": "markdown",
    "json": "json",
    "yml": "yaml",
    "yaml": "yaml",
}

README_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Start with an eye-catching header including",
        (
            "Project logo or banner (suggest an appropriate emoji if no logo)",
            "Project name in a large heading",
            "Concise one-line description",
            "Status badges (build, version, license)",
            "Quick links (docs, demo, etc.)",
        ),
    ),
    (
        "Project Overview",
        (
            "Detailed description of the project's purpose",
            "Key features and capabilities",
            "Screenshots or GIFs demonstrating functionality (suggest placeholders)",
            "Target audience and use cases",
        ),
    ),
    (
        "Technical Architecture",
        (
            "High-level system design",
            "Key components and their interactions",
            "Technology stack with version information",
            "System requirements",
        ),
    ),
    (
        "Getting Started",
        (
            "Prerequisites (with version numbers)",
            "Step-by-step installation instructions",
            "Configuration steps",
            "Environment setup",
        ),
    ),
    (
        "Usage Guide",
        (
            "Basic usage examples with code snippets",
            "Common use cases",
            "Configuration options",
            "API documentation (if applicable)",
            "Best practices",
        ),
    ),
    (
        "Development",
        (
            "Development setup instructions",
            "Testing procedures",
            "Code style guidelines",
            "Contribution guidelines",
            "Build and deployment procedures",
        ),
    ),
    (
        "Additional Information",
        (
            "Troubleshooting guide",
            "FAQ section",
            "Performance considerations",
            "Security notes",
            "Changelog or version history",
            "License details",
            "Credits and acknowledgments",
        ),
    ),
)

FORMAT_RULES: tuple[str, ...] = (
    "Use proper Markdown syntax",
    "Include syntax highlighting in code blocks",
    "Use tables for structured information",
    "Include emojis for better readability",
    "Add anchors for table of contents",
    "Ensure proper heading hierarchy",
    "Include inline code formatting",
    "Add badges where appropriate",
)


__all__ = [
    "EXCERPT_CHAR_LIMIT",
    "FORMAT_RULES",
    "LANGUAGE_TAGS",
    "PROMPT_TEMPLATE",
    "README_SECTIONS",
]
