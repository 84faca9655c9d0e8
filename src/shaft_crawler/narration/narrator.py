"""Narrator backends and prompt builders.

A ``Narrator`` turns a situational prompt into flavor: a line of story
text, and for backends that can draw, a portrait as a data URL.  Nothing a
narrator returns ever feeds back into the simulation rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from .client import NarrationClient

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Mob


def _load_prompt() -> str:
    """Load the narrator system prompt from prompts/dungeon_master.md."""
    prompt_path = Path(__file__).parent / "prompts" / "dungeon_master.md"
    return prompt_path.read_text()


class Narrator(ABC):
    """Base class for narration backends."""

    supports_portraits: bool = False
    """Backends that implement :meth:`portrait` set this."""

    @abstractmethod
    def narrate(self, prompt: str, context: str = "") -> str:
        """Return one or two sentences of story text for *prompt*.

        Parameters
        ----------
        prompt:
            What to describe (e.g. "Describe the death of a Giant Rat.").
        context:
            Short situational context such as the room name or depth.
        """

    def portrait(self, prompt: str) -> str | None:
        """Return an image for *prompt* as a data URL, or ``None``.

        Text-only backends keep this default and leave
        ``supports_portraits`` off, so no portrait jobs are queued for them.
        """
        return None


class ClaudeNarrator(Narrator):
    """Narrator backed by the Anthropic Messages API.

    Parameters
    ----------
    model:
        Anthropic model ID.
    api_key:
        Anthropic API key (falls back to ANTHROPIC_API_KEY env var).
    client:
        Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5",
        api_key: str | None = None,
        client: NarrationClient | None = None,
    ) -> None:
        self._client = client or NarrationClient(
            model=model,
            system_prompt=_load_prompt(),
            api_key=api_key,
        )

    @property
    def client(self) -> NarrationClient:
        return self._client

    def narrate(self, prompt: str, context: str = "") -> str:
        message = f"Context: {context}\nTask: {prompt}" if context else f"Task: {prompt}"
        return self._client.complete(message).strip()


# ---------------------------------------------------------------------------
# Prompt builders
# ---------------------------------------------------------------------------

def portrait_prompt(mob: Mob, room_name: str, dead: bool) -> str:
    if dead:
        return (
            f"A defeated {mob.name} lying dead on the floor of a {room_name}. "
            "Dark, gritty fantasy art, looting aftermath, gloomy atmosphere."
        )
    return (
        f"A menacing, low-angle digital painting of a {mob.name} inside a "
        f"{room_name}. Dark fantasy RPG style, cinematic lighting, detailed."
    )
