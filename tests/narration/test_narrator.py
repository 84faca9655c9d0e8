"""Tests for narrator backends and prompt builders."""

from __future__ import annotations

from unittest.mock import MagicMock

from shaft_crawler.narration.narrator import ClaudeNarrator, _load_prompt, portrait_prompt
from shaft_crawler.sim.core.entities import Mob, MobType


def _make_boss() -> Mob:
    return Mob(
        id="b", name="Void Eater", level=15, hp=500, max_hp=500,
        damage=30, xp_value=425, type=MobType.BOSS, is_elite=True,
    )


class TestClaudeNarrator:
    def test_sends_context_and_task(self) -> None:
        client = MagicMock()
        client.complete.return_value = "  You feel watched.  "
        narrator = ClaudeNarrator(client=client)

        text = narrator.narrate("Describe returning to Shaft 3.", "Depth: 3")

        assert text == "You feel watched."
        client.complete.assert_called_once_with(
            "Context: Depth: 3\nTask: Describe returning to Shaft 3."
        )

    def test_task_only(self) -> None:
        client = MagicMock()
        client.complete.return_value = "Darkness."
        ClaudeNarrator(client=client).narrate("Describe a brief rest.")
        client.complete.assert_called_once_with("Task: Describe a brief rest.")

    def test_text_only_backend(self) -> None:
        narrator = ClaudeNarrator(client=MagicMock())
        assert narrator.portrait("anything") is None
        assert not narrator.supports_portraits


class TestPrompts:
    def test_system_prompt_ships_with_package(self) -> None:
        assert "Dungeon Master" in _load_prompt()

    def test_alive_portrait(self) -> None:
        prompt = portrait_prompt(_make_boss(), "Guardian's Threshold", dead=False)
        assert "Void Eater" in prompt
        assert "Guardian's Threshold" in prompt
        assert "defeated" not in prompt

    def test_dead_portrait(self) -> None:
        prompt = portrait_prompt(_make_boss(), "Guardian's Threshold", dead=True)
        assert prompt.startswith("A defeated Void Eater")
