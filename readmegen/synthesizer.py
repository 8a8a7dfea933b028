"""Documentation synthesis: prompt assembly, generation, and post-processing."""

from __future__ import annotations

from typing import Callable

from .credentials import GEMINI_KEY, CredentialStore
from .errors import MissingCredentialError
from .llm.client import GenerationClient
from .logging import get_logger
from .models import GeneratedDoc, Repository
from .postproc.badges import BadgeManager
from .postproc.toc import TableOfContentsBuilder
from .progress import LogLevel, ProgressLog
from .prompting.builder import PromptBuilder, detect_patterns, render_tree

MISSING_KEY_MESSAGE = "Gemini API key not found. Please add your API key first."


class DocumentationSynthesizer:
    """Turns a loaded :class:`Repository` into README markdown."""

    def __init__(
        self,
        credentials: CredentialStore,
        sink: ProgressLog | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        toc_builder: TableOfContentsBuilder | None = None,
        badge_manager: BadgeManager | None = None,
        client_factory: Callable[[str], GenerationClient] | None = None,
    ) -> None:
        self.credentials = credentials
        self.sink = sink or ProgressLog()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.toc_builder = toc_builder or TableOfContentsBuilder()
        self.badge_manager = badge_manager or BadgeManager()
        self._client_factory = client_factory or GenerationClient
        self.logger = get_logger("synthesizer")

    def generate(self, repository: Repository) -> GeneratedDoc:
        return GeneratedDoc(content=self.synthesize(repository), repository=repository)

    def synthesize(self, repository: Repository) -> str:
        """Return generated README text with a ToC and badge line ensured where possible."""
        self.sink.set_progress(0)
        self.sink.log("Starting documentation generation")
        try:
            api_key = self.credentials.get(GEMINI_KEY)
            if not api_key:
                raise MissingCredentialError(MISSING_KEY_MESSAGE)

            client = self._client_factory(api_key)
            self.sink.set_progress(10)
            self.sink.log(f"Initialized generation client ({client.MODEL})")

            self.sink.set_progress(20)
            self.sink.log("Analyzing repository components")
            tree_text = render_tree(repository.files)
            pattern_text = "\n".join(detect_patterns(repository.files))

            self.sink.set_progress(40)
            self.sink.log("Processing source files")
            prompt = self.prompt_builder.build_prompt(repository, tree_text, pattern_text)
            self.logger.debug("Prompt assembled (%d characters)", len(prompt))

            self.sink.set_progress(60)
            self.sink.log("Generating documentation with AI")
            documentation = client.run(prompt)
        except Exception as exc:
            self.sink.fail(str(exc))
            raise

        documentation = self._post_process(documentation, repository)
        self.sink.set_progress(100)
        self.sink.log("Documentation generated successfully", LogLevel.SUCCESS)
        return documentation

    def _post_process(self, documentation: str, repository: Repository) -> str:
        try:
            documentation = self.toc_builder.build(documentation)
        except Exception as exc:
            self.sink.log(f"Table of contents step skipped: {exc}", LogLevel.WARN)
        try:
            documentation = self.badge_manager.apply(documentation, repository)
        except Exception as exc:
            self.sink.log(f"Badge step skipped: {exc}", LogLevel.WARN)
        return documentation


__all__ = ["DocumentationSynthesizer", "MISSING_KEY_MESSAGE"]
