"""Documentation synthesizer tests."""

from __future__ import annotations

from typing import List

import pytest

from readmegen.credentials import GITHUB_KEY, CredentialStore
from readmegen.errors import GenerationError, MissingCredentialError
from readmegen.llm import GenerationClient
from readmegen.progress import LogLevel, ProgressLog
from readmegen.synthesizer import MISSING_KEY_MESSAGE, DocumentationSynthesizer

RESPONSE = "# Widgets\n\n## Installation\n\nnpm install widgets\n"


class RecordingLog(ProgressLog):
    def __init__(self) -> None:
        super().__init__()
        self.history: List[int] = []

    def set_progress(self, value: float) -> None:
        super().set_progress(value)
        self.history.append(self.progress)


def _factory(text: str = RESPONSE, prompts: List[str] | None = None):  # type: ignore[no-untyped-def]
    def runner(request):  # type: ignore[no-untyped-def]
        if prompts is not None:
            prompts.append(request.prompt)
        return text

    return lambda api_key: GenerationClient(api_key, runner=runner)


def test_synthesize_adds_toc_and_badges(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    sink = ProgressLog()
    synthesizer = DocumentationSynthesizer(credentials, sink, client_factory=_factory())

    result = synthesizer.synthesize(repository)

    assert result.startswith("## Table of Contents\n\n- [Installation](#installation)\n\n# Widgets\n\n![License]")
    badge_line = result.splitlines()[6]
    assert badge_line.count("![") == 4
    assert "Stars-42-yellow" in badge_line
    assert "npm install widgets" in result
    assert sink.progress == 100
    assert sink.entries[-1].level is LogLevel.SUCCESS


def test_synthesize_reports_checkpoints_in_order(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    sink = RecordingLog()
    DocumentationSynthesizer(credentials, sink, client_factory=_factory()).synthesize(repository)
    assert sink.history == [0, 10, 20, 40, 60, 100]


def test_synthesize_sends_repository_prompt(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    prompts: List[str] = []
    DocumentationSynthesizer(
        credentials, ProgressLog(), client_factory=_factory(prompts=prompts)
    ).synthesize(repository)

    assert len(prompts) == 1
    assert "- Name: widgets" in prompts[0]
    assert "- 📁 src" in prompts[0]


def test_synthesize_requires_generation_key(repository) -> None:  # type: ignore[no-untyped-def]
    sink = ProgressLog()
    calls: List[str] = []
    synthesizer = DocumentationSynthesizer(
        CredentialStore({GITHUB_KEY: "gh"}),
        sink,
        client_factory=lambda api_key: calls.append(api_key),  # type: ignore[arg-type,return-value]
    )

    with pytest.raises(MissingCredentialError, match=MISSING_KEY_MESSAGE):
        synthesizer.synthesize(repository)

    assert calls == []
    assert sink.progress == 0
    assert sink.entries[-1].level is LogLevel.ERROR


def test_synthesize_generation_failure_resets_progress(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    sink = ProgressLog()
    synthesizer = DocumentationSynthesizer(credentials, sink, client_factory=_factory(text=""))

    with pytest.raises(GenerationError):
        synthesizer.synthesize(repository)

    assert sink.progress == 0
    assert sink.entries[-1].level is LogLevel.ERROR


def test_post_processing_failure_degrades_gracefully(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    class BrokenToc:
        def build(self, markdown: str) -> str:
            raise ValueError("toc exploded")

    sink = ProgressLog()
    synthesizer = DocumentationSynthesizer(
        credentials,
        sink,
        toc_builder=BrokenToc(),  # type: ignore[arg-type]
        client_factory=_factory(),
    )

    result = synthesizer.synthesize(repository)

    assert result.startswith("# Widgets\n\n![License]")
    assert any(
        entry.level is LogLevel.WARN and "toc exploded" in entry.message for entry in sink.entries
    )
    assert sink.progress == 100


def test_generate_wraps_text_with_repository(repository, credentials) -> None:  # type: ignore[no-untyped-def]
    doc = DocumentationSynthesizer(credentials, client_factory=_factory()).generate(repository)
    assert doc.repository is repository
    assert "## Installation" in doc.content
