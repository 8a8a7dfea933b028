"""Adapter around the hosted generative text API (Gemini REST)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..errors import GenerationError


@dataclass
class GenerationRequest:
    """Represents one prompt submission."""

    prompt: str
    model: str
    api_key: str
    base_url: str
    request_timeout: Optional[float]


class GenerationClient:
    """Sends a single text prompt to a fixed model and returns the generated text."""

    MODEL = "gemini-2.0-flash"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        request_timeout: Optional[float] = None,
        runner: Callable[[GenerationRequest], str] | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout
        self._runner = runner or self._http_runner

    def run(self, prompt: str) -> str:
        request = GenerationRequest(
            prompt=prompt,
            model=self.MODEL,
            api_key=self.api_key,
            base_url=self.base_url,
            request_timeout=self.request_timeout,
        )
        try:
            text = self._runner(request)
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Generation API call failed: {exc}") from exc
        if not text or not text.strip():
            raise GenerationError("Generation API returned an empty response")
        return text

    @staticmethod
    def _http_runner(request: GenerationRequest) -> str:
        endpoint = f"{request.base_url}/models/{quote(request.model, safe='')}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": request.prompt}]}]}
        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": request.api_key,
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")

        try:
            with urlopen(http_request, timeout=request.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if exc.fp is not None else ""
            message = GenerationClient._error_message(detail) or exc.reason
            raise GenerationError(
                f"Generation API failed with status {exc.code}: {message}"
            ) from exc
        except URLError as exc:
            raise GenerationError(f"Generation API request failed: {exc.reason}") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GenerationError("Generation API returned invalid JSON") from exc

        return GenerationClient._extract_text(response_payload)

    @staticmethod
    def _extract_text(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = payload.get("promptFeedback")
            if isinstance(feedback, dict) and feedback.get("blockReason"):
                raise GenerationError(f"Prompt was blocked: {feedback['blockReason']}")
            return ""
        first = candidates[0]
        if not isinstance(first, dict):
            return ""
        content = first.get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
        return "".join(texts)

    @staticmethod
    def _error_message(detail: str) -> str:
        if not detail.strip():
            return ""
        try:
            body = json.loads(detail)
        except json.JSONDecodeError:
            return detail.strip()
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return error["message"]
        return detail.strip()


__all__ = ["GenerationClient", "GenerationRequest"]
