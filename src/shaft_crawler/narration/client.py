"""Claude API client for short narration calls.

Wraps the Anthropic SDK to provide:
- Single-shot completions with a fixed system prompt
- Cumulative token usage tracking

Narration never needs tools or multi-turn history: every call is an
independent prompt about one moment of the game.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import anthropic


@dataclass
class TokenUsage:
    """Cumulative token usage across all narration calls."""

    input_tokens: int = 0
    output_tokens: int = 0
    api_calls: int = 0


class NarrationClient:
    """Thin wrapper around ``anthropic.Anthropic().messages.create``.

    Parameters
    ----------
    model:
        Anthropic model ID.
    system_prompt:
        System prompt prepended to every API call.
    max_tokens:
        Maximum tokens per response.  Narration lines are one or two
        sentences.
    temperature:
        Sampling temperature.
    api_key:
        Anthropic API key.  Falls back to ``ANTHROPIC_API_KEY`` env var.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5",
        system_prompt: str = "",
        max_tokens: int = 200,
        temperature: float = 0.8,
        api_key: str | None = None,
    ) -> None:
        resolved_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not resolved_key:
            raise ValueError(
                "No API key provided. Pass api_key= or set ANTHROPIC_API_KEY."
            )

        self._client = anthropic.Anthropic(api_key=resolved_key)
        self._model = model
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._usage = TokenUsage()

    @property
    def usage(self) -> TokenUsage:
        """Cumulative token usage across all API calls."""
        return self._usage

    def complete(self, user_message: str) -> str:
        """Send one user message and return the text of the reply."""
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": [{"role": "user", "content": user_message}],
        }
        if self._system_prompt:
            kwargs["system"] = self._system_prompt

        response = self._client.messages.create(**kwargs)

        self._usage.input_tokens += response.usage.input_tokens
        self._usage.output_tokens += response.usage.output_tokens
        self._usage.api_calls += 1

        text_parts = [
            block.text for block in response.content if block.type == "text"
        ]
        return "\n".join(text_parts)
