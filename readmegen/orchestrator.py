"""Pipeline orchestration: load a repository, synthesize its README, record history."""

from __future__ import annotations

from pathlib import Path

from .config import ReadmeGenConfig, load_config
from .credentials import GEMINI_KEY, GITHUB_KEY, CredentialStore
from .errors import MissingCredentialError
from .llm.client import GenerationClient
from .loader import RepositoryLoader
from .logging import get_logger
from .models import GeneratedDoc, Repository
from .progress import LogLevel, ProgressLog
from .prompting.builder import PromptBuilder
from .source.client import GitHubClient
from .stores.history import UrlHistory
from .synthesizer import MISSING_KEY_MESSAGE, DocumentationSynthesizer


class Orchestrator:
    """Coordinates one load-and-generate request per call, sharing a single sink."""

    def __init__(
        self,
        config: ReadmeGenConfig | None = None,
        *,
        credentials: CredentialStore | None = None,
        sink: ProgressLog | None = None,
        loader: RepositoryLoader | None = None,
        synthesizer: DocumentationSynthesizer | None = None,
        history: UrlHistory | None = None,
    ) -> None:
        self.config = config or load_config()
        self.credentials = credentials or CredentialStore.from_environment(self.config)
        self.sink = sink or ProgressLog()
        self.loader = loader or RepositoryLoader(self._build_source_client(), self.sink)
        self.synthesizer = synthesizer or DocumentationSynthesizer(
            self.credentials,
            self.sink,
            prompt_builder=PromptBuilder(excerpt_chars=self.config.prompt.excerpt_chars),
            client_factory=self._build_generation_client,
        )
        self.history = history or UrlHistory(self.config.history.path, limit=self.config.history.limit)
        self.logger = get_logger("orchestrator")

    def load(self, url: str) -> Repository:
        return self.loader.load_repository(url)

    def synthesize(self, repository: Repository) -> str:
        return self.synthesizer.synthesize(repository)

    def run(self, url: str, *, output: Path | None = None) -> GeneratedDoc:
        """Load ``url``, generate its README and optionally write it to ``output``."""
        self.logger.info("Starting repository analysis for %s", url)
        self._preflight()
        try:
            repository = self.load(url)
            doc = self.synthesizer.generate(repository)
            self.sink.log("Documentation process completed successfully", LogLevel.SUCCESS)
        finally:
            self.history.record(url)

        if output is not None:
            self.write(doc, output)
        return doc

    def write(self, doc: GeneratedDoc, output: Path) -> Path:
        target = output / "README.md" if output.is_dir() else output
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(doc.content, encoding="utf-8")
        self.sink.log(f"Documentation written to {target}", LogLevel.SUCCESS)
        return target

    def _preflight(self) -> None:
        if not self.credentials.has(GITHUB_KEY):
            self.logger.warning(
                "No GitHub token configured; unauthenticated requests have a stricter rate limit"
            )
        if not self.credentials.has(GEMINI_KEY):
            self.sink.reset()
            self.sink.fail(MISSING_KEY_MESSAGE)
            raise MissingCredentialError(MISSING_KEY_MESSAGE)

    def _build_source_client(self) -> GitHubClient:
        return GitHubClient(
            self.credentials.get(GITHUB_KEY),
            api_url=self.config.github.api_url,
            request_timeout=self.config.github.request_timeout,
        )

    def _build_generation_client(self, api_key: str) -> GenerationClient:
        return GenerationClient(
            api_key,
            base_url=self.config.generation.base_url,
            request_timeout=self.config.generation.request_timeout,
        )


__all__ = ["Orchestrator"]
