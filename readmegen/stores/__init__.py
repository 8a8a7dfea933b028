"""Local persistence helpers."""

from .history import UrlHistory

__all__ = ["UrlHistory"]
