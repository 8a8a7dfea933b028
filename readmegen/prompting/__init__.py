"""Prompt assembly for README generation."""

from .builder import PromptBuilder, detect_patterns, format_excerpts, language_tag, render_tree

__all__ = ["PromptBuilder", "detect_patterns", "format_excerpts", "language_tag", "render_tree"]
