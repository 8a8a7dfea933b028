"""Post-processing applied to generated README text."""

from .badges import BadgeManager
from .toc import TableOfContentsBuilder

__all__ = ["BadgeManager", "TableOfContentsBuilder"]
