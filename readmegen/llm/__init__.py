"""Generation API adapters."""

from .client import GenerationClient, GenerationRequest

__all__ = ["GenerationClient", "GenerationRequest"]
