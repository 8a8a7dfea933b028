"""Prompt assembly tests."""

from __future__ import annotations

from dataclasses import replace

from readmegen.models import FileKind, RepositoryFile
from readmegen.prompting import PromptBuilder
from readmegen.prompting.builder import (
    detect_patterns,
    format_excerpts,
    language_tag,
    render_tree,
)


def _file(path: str, content: str = "x") -> RepositoryFile:
    return RepositoryFile(name=path.rsplit("/", 1)[-1], path=path, content=content, kind=FileKind.FILE)


def _dir(path: str) -> RepositoryFile:
    return RepositoryFile(name=path.rsplit("/", 1)[-1], path=path, content="", kind=FileKind.DIRECTORY)


def test_render_tree_nests_entries_by_path() -> None:
    files = [_dir("src"), _file("src/a.ts"), _dir("src/lib"), _file("src/lib/b.ts"), _file("README.md")]

    assert render_tree(files) == "\n".join(
        [
            "- 📁 src",
            "  - 📄 a.ts",
            "  - 📁 lib",
            "    - 📄 b.ts",
            "- 📄 README.md",
        ]
    )


def test_render_tree_infers_missing_parent_directories() -> None:
    assert render_tree([_file("docs/guide.md")]) == "- 📁 docs\n  - 📄 guide.md"


def test_render_tree_empty_repository() -> None:
    assert render_tree([]) == ""


def test_detect_patterns_reports_labels_in_rule_order() -> None:
    files = [
        _file(".github/workflows/ci.yml"),
        _file("Dockerfile"),
        _file("tests/test_app.py"),
        _file("package.json"),
    ]

    assert detect_patterns(files) == [
        "Configuration Management",
        "Testing Framework",
        "Containerization",
        "Continuous Integration",
    ]


def test_detect_patterns_without_matches() -> None:
    assert detect_patterns([_file("main.go")]) == []


def test_language_tag_maps_known_extensions() -> None:
    assert language_tag("src/app.tsx") == "typescript"
    assert language_tag("setup.PY") == "python"
    assert language_tag("Makefile") == ""
    assert language_tag("lib/thing.zig") == "zig"


def test_format_excerpts_truncates_and_skips_empty_files() -> None:
    files = [_dir("src"), _file("src/empty.py", ""), _file("src/long.py", "a" * 12), _file("short.md", "hi")]

    text = format_excerpts(files, limit=10)

    assert text == "src/long.py:\n```python\n" + "a" * 10 + "...\n```\n\nshort.md:\n```markdown\nhi\n```"


def test_prompt_contains_metadata_tree_patterns_and_rules(repository) -> None:  # type: ignore[no-untyped-def]
    builder = PromptBuilder()

    prompt = builder.build_prompt(repository, "- 📄 README.md", "Testing Framework")

    assert "- Name: widgets" in prompt
    assert "- Primary Language: TypeScript" in prompt
    assert "- License: MIT License" in prompt
    assert "- Stars: 42" in prompt
    assert "Repository Structure:\n- 📄 README.md" in prompt
    assert "Key Features and Patterns:\nTesting Framework" in prompt
    assert "src/a.ts:\n```typescript\nexport const a = 1;\n\n```" in prompt
    assert "1. Start with an eye-catching header including:" in prompt
    assert "7. Additional Information:" in prompt
    assert "- Add badges where appropriate" in prompt


def test_prompt_marks_missing_language_and_license(repository) -> None:  # type: ignore[no-untyped-def]
    bare = replace(repository, language=None, license=None)

    prompt = PromptBuilder().build(bare)

    assert "- Primary Language: Not specified" in prompt
    assert "- License: Not specified" in prompt


def test_prompt_excerpt_limit_is_configurable(repository) -> None:  # type: ignore[no-untyped-def]
    prompt = PromptBuilder(excerpt_chars=6).build(repository)
    assert "export...\n```" in prompt
