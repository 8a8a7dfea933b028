"""Error types raised by the readmegen pipeline."""

from __future__ import annotations


class ReadmeGenError(RuntimeError):
    """Base class for terminal pipeline failures."""


class InvalidUrlError(ReadmeGenError):
    """Raised when a repository URL has no owner/name pair."""


class RateLimitError(ReadmeGenError):
    """Raised when the source API reports quota exhaustion (HTTP 403)."""


class NotFoundError(ReadmeGenError):
    """Raised when repository metadata cannot be retrieved."""


class FetchError(ReadmeGenError):
    """Raised when a directory listing fails or a response has the wrong shape."""


class MissingCredentialError(ReadmeGenError):
    """Raised when a required API credential is not stored."""


class GenerationError(ReadmeGenError):
    """Raised when the generation API fails or returns no text."""


__all__ = [
    "FetchError",
    "GenerationError",
    "InvalidUrlError",
    "MissingCredentialError",
    "NotFoundError",
    "RateLimitError",
    "ReadmeGenError",
]
