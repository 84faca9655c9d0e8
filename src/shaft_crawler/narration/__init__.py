"""Narration collaborator -- Claude client, narrators and the background queue."""

from .client import NarrationClient, TokenUsage
from .enrichment import EnrichmentQueue
from .narrator import ClaudeNarrator, Narrator, portrait_prompt

__all__ = [
    "ClaudeNarrator",
    "EnrichmentQueue",
    "NarrationClient",
    "Narrator",
    "TokenUsage",
    "portrait_prompt",
]
