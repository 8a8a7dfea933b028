"""Access to the hosted version-control API."""

from .client import GitHubClient
from .urls import normalize_url, resolve_identity

__all__ = ["GitHubClient", "normalize_url", "resolve_identity"]
