"""Effective stat calculation: base attributes plus equipment bonuses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Player


@dataclass(frozen=True)
class EffectiveStats:
    strength: int
    intelligence: int
    dexterity: int
    armor: int
    damage: int
    """Derived melee damage: ``strength // 2`` plus weapon damage bonuses."""


def effective_stats(player: Player) -> EffectiveStats:
    """Sum the player's attributes with every equipped item's bonuses."""
    strength = player.strength
    intelligence = player.intelligence
    dexterity = player.dexterity
    armor = 0
    bonus_damage = 0

    for item in player.equipment.items():
        if item.stats is None:
            continue
        strength += item.stats.strength
        intelligence += item.stats.intelligence
        dexterity += item.stats.dexterity
        armor += item.stats.armor
        bonus_damage += item.stats.damage

    return EffectiveStats(
        strength=strength,
        intelligence=intelligence,
        dexterity=dexterity,
        armor=armor,
        damage=strength // 2 + bonus_damage,
    )
