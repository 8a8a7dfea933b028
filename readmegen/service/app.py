"""FastAPI application entrypoint for readmegen service mode."""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ReadmeGenConfig
from ..errors import (
    FetchError,
    GenerationError,
    InvalidUrlError,
    MissingCredentialError,
    NotFoundError,
    RateLimitError,
    ReadmeGenError,
)
from ..models import GeneratedDoc, Repository
from ..orchestrator import Orchestrator
from ..stats import language_stats, largest_files


class RepositoryRequest(BaseModel):
    url: str


class LanguageShare(BaseModel):
    language: str
    count: int
    bytes: int
    count_share: float


class RepositorySummary(BaseModel):
    url: str
    name: str
    description: str
    language: Optional[str] = None
    stars: int
    forks: int
    open_issue_count: int
    license: Optional[str] = None
    last_update: str
    entry_count: int
    has_readme: bool
    languages: List[LanguageShare]
    largest_files: List[str]


class GenerateResponse(BaseModel):
    content: str
    repository: RepositorySummary


class LogEntryModel(BaseModel):
    timestamp: str
    level: str
    message: str


class ProgressResponse(BaseModel):
    progress: int
    entries: List[LogEntryModel]


class HistoryResponse(BaseModel):
    urls: List[str]


class HealthResponse(BaseModel):
    status: str


_STATUS_BY_ERROR: tuple[tuple[type[ReadmeGenError], int], ...] = (
    (InvalidUrlError, 400),
    (MissingCredentialError, 400),
    (NotFoundError, 404),
    (RateLimitError, 429),
    (FetchError, 502),
    (GenerationError, 502),
)


def _summarize(repository: Repository) -> RepositorySummary:
    return RepositorySummary(
        url=repository.url,
        name=repository.name,
        description=repository.description,
        language=repository.language,
        stars=repository.stars,
        forks=repository.forks,
        open_issue_count=repository.open_issue_count,
        license=repository.license,
        last_update=repository.last_update,
        entry_count=len(repository.files),
        has_readme=bool(repository.readme),
        languages=[
            LanguageShare(
                language=stat.language,
                count=stat.count,
                bytes=stat.bytes,
                count_share=stat.count_share,
            )
            for stat in language_stats(repository.files)
        ],
        largest_files=[item.path for item in largest_files(repository.files)],
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = Orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing readmegen operations."""
    app = FastAPI(title="readmegen", version="0.1.0")
    # /progress reads the sink of this shared orchestrator, so only one
    # load or generate call may write to it at a time.
    orchestrator = orchestrator_factory()
    pipeline_lock = threading.Lock()

    async def _in_executor(func: Callable[[], Any]) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    def _exclusive(func: Callable[[], Any]) -> Callable[[], Any]:
        def call() -> Any:
            with pipeline_lock:
                return func()

        return call

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/load", response_model=RepositorySummary)
    async def load_repository(payload: RepositoryRequest) -> RepositorySummary:
        repository: Repository = await _in_executor(
            _exclusive(lambda: orchestrator.load(payload.url))
        )
        return _summarize(repository)

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(payload: RepositoryRequest) -> GenerateResponse:
        doc: GeneratedDoc = await _in_executor(_exclusive(lambda: orchestrator.run(payload.url)))
        return GenerateResponse(content=doc.content, repository=_summarize(doc.repository))

    @app.get("/progress", response_model=ProgressResponse)
    async def progress() -> ProgressResponse:
        sink = orchestrator.sink
        return ProgressResponse(
            progress=sink.progress,
            entries=[
                LogEntryModel(
                    timestamp=entry.timestamp.isoformat().replace("+00:00", "Z"),
                    level=entry.level.value,
                    message=entry.message,
                )
                for entry in sink.entries
            ],
        )

    @app.get("/history", response_model=HistoryResponse)
    async def history() -> HistoryResponse:
        return HistoryResponse(urls=list(orchestrator.history.entries))

    @app.exception_handler(ReadmeGenError)
    async def readmegen_error_handler(_: Any, exc: ReadmeGenError) -> JSONResponse:
        status_code = 400
        for error_type, code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                status_code = code
                break
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    config: ReadmeGenConfig | None = None,
) -> None:  # pragma: no cover - integration path
    app = create_app(lambda: Orchestrator(config))
    uvicorn.run(app, host=host, port=port)
