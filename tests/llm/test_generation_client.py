"""Generation client tests."""

from __future__ import annotations

import io
import json
from urllib.error import HTTPError, URLError

import pytest

from readmegen.errors import GenerationError
from readmegen.llm import GenerationClient


class _Response:
    def __init__(self, payload: object) -> None:
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_Response":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


def test_generation_client_constructs_request() -> None:
    captured = {}

    def fake_runner(request):  # type: ignore[no-untyped-def]
        captured["prompt"] = request.prompt
        captured["model"] = request.model
        captured["api_key"] = request.api_key
        captured["base_url"] = request.base_url
        captured["request_timeout"] = request.request_timeout
        return "# Generated"

    client = GenerationClient(
        "key-123",
        base_url="https://llm.example/v1/",
        request_timeout=30.0,
        runner=fake_runner,
    )

    assert client.run("Describe the repo") == "# Generated"
    assert captured == {
        "prompt": "Describe the repo",
        "model": "gemini-2.0-flash",
        "api_key": "key-123",
        "base_url": "https://llm.example/v1",
        "request_timeout": 30.0,
    }


def test_generation_client_posts_generate_content(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    captured = {}

    def fake_urlopen(request, timeout=None):  # type: ignore[no-untyped-def]
        captured["url"] = request.full_url
        captured["headers"] = {key.lower(): value for key, value in request.header_items()}
        captured["body"] = json.loads(request.data.decode("utf-8"))
        captured["timeout"] = timeout
        return _Response(
            {"candidates": [{"content": {"parts": [{"text": "# Title\n"}, {"text": "Body"}]}}]}
        )

    monkeypatch.setattr("readmegen.llm.client.urlopen", fake_urlopen)

    text = GenerationClient("key-123").run("prompt text")

    assert text == "# Title\nBody"
    assert captured["url"] == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    )
    assert captured["headers"]["x-goog-api-key"] == "key-123"
    assert captured["body"] == {"contents": [{"role": "user", "parts": [{"text": "prompt text"}]}]}
    assert captured["timeout"] is None


def test_generation_client_rejects_empty_text() -> None:
    client = GenerationClient("key", runner=lambda request: "   ")
    with pytest.raises(GenerationError, match="empty"):
        client.run("prompt")


def test_generation_client_wraps_unexpected_runner_errors() -> None:
    def broken(request):  # type: ignore[no-untyped-def]
        raise ValueError("bad state")

    with pytest.raises(GenerationError, match="bad state"):
        GenerationClient("key", runner=broken).run("prompt")


def test_generation_client_reports_http_error_message(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    def fake_urlopen(request, timeout=None):  # type: ignore[no-untyped-def]
        body = json.dumps({"error": {"message": "API key not valid"}}).encode("utf-8")
        raise HTTPError(request.full_url, 400, "Bad Request", hdrs=None, fp=io.BytesIO(body))

    monkeypatch.setattr("readmegen.llm.client.urlopen", fake_urlopen)

    with pytest.raises(GenerationError, match="status 400: API key not valid"):
        GenerationClient("bad").run("prompt")


def test_generation_client_reports_network_failure(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    def fake_urlopen(request, timeout=None):  # type: ignore[no-untyped-def]
        raise URLError("no route to host")

    monkeypatch.setattr("readmegen.llm.client.urlopen", fake_urlopen)

    with pytest.raises(GenerationError, match="no route to host"):
        GenerationClient("key").run("prompt")


def test_generation_client_reports_blocked_prompt(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(
        "readmegen.llm.client.urlopen",
        lambda request, timeout=None: _Response({"promptFeedback": {"blockReason": "SAFETY"}}),
    )

    with pytest.raises(GenerationError, match="SAFETY"):
        GenerationClient("key").run("prompt")
