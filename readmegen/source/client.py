"""HTTP client for the GitHub REST API."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..errors import FetchError, NotFoundError, RateLimitError
from ..logging import get_logger

RATE_LIMIT_MESSAGE = "API rate limit exceeded. Please provide a GitHub token."


class SourceHTTPError(FetchError):
    """A source API call that did not complete successfully."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class GitHubClient:
    """Issues one blocking request at a time against the repository API."""

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        *,
        api_url: str | None = None,
        request_timeout: Optional[float] = None,
    ) -> None:
        self.token = token
        self.api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")
        self.request_timeout = request_timeout
        self.logger = get_logger("source")

    def repository_url(self, owner: str, name: str) -> str:
        return f"{self.api_url}/repos/{quote(owner, safe='')}/{quote(name, safe='')}"

    def contents_url(self, owner: str, name: str, path: str = "") -> str:
        return f"{self.repository_url(owner, name)}/contents/{quote(path, safe='/')}"

    def get_repository(self, owner: str, name: str) -> Any:
        """Fetch the metadata payload; 403 means quota exhaustion, anything else is not found."""
        url = self.repository_url(owner, name)
        try:
            return self.get_json(url)
        except SourceHTTPError as exc:
            if exc.status == 403:
                raise RateLimitError(RATE_LIMIT_MESSAGE) from exc
            if exc.status is not None:
                raise NotFoundError("Repository not found") from exc
            raise

    def list_contents(self, owner: str, name: str, path: str = "") -> Any:
        url = self.contents_url(owner, name, path)
        try:
            return self.get_json(url)
        except SourceHTTPError as exc:
            if exc.status == 403:
                raise RateLimitError(RATE_LIMIT_MESSAGE) from exc
            raise FetchError(
                f"Failed to fetch repository contents for '{path or '/'}': {exc}"
            ) from exc

    def get_json(self, url: str) -> Any:
        self.logger.debug("GET %s", url)
        request = Request(url, headers=self._headers(), method="GET")
        try:
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            raise SourceHTTPError(
                f"HTTP {exc.code} {exc.reason}", url=url, status=exc.code
            ) from exc
        except URLError as exc:
            raise SourceHTTPError(f"request failed: {exc.reason}", url=url) from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FetchError(f"Source API returned invalid JSON for {url}") from exc

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


__all__ = ["GitHubClient", "RATE_LIMIT_MESSAGE", "SourceHTTPError"]
