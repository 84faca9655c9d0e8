"""Game configuration and the starting loadout.

``GameConfig`` holds every tunable of a session.  The defaults reproduce
the standard 15-minute descent; tests and the batch runner override
individual fields.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from shaft_crawler.sim.core.entities import (
    ClassType,
    Equipment,
    Item,
    ItemStats,
    ItemType,
    Player,
    Rarity,
)


class GameConfig(BaseModel):
    """Tunables for a single session."""

    model_config = {"frozen": True}

    max_time: int = Field(default=900, gt=0)
    """Countdown length in ticks."""

    max_depth: int = Field(default=50, ge=1)
    """Deepest level; rooms there never open downward."""

    move_cost: int = Field(default=2, ge=0)
    """Stamina spent (and required) per move."""

    flee_min_move: int = 10
    flee_cost: int = 10
    flee_fail_cost: int = 5

    rest_time_cost: int = 10
    rest_hp: float = 5
    rest_mana: float = 5
    rest_move: float = 10

    regen_hp: float = 0.5
    regen_mana: float = 0.5
    regen_move: float = 1

    bash_cooldown: int = 5
    fireball_cooldown: int = 3
    fireball_mana_cost: int = 5

    max_log_entries: int = Field(default=50, gt=0)

    enforce_exits: bool = True
    """Reject moves through closed exits.  Surfacing from depth 0 is always
    allowed."""

    narration_model: str = "claude-haiku-4-5"


def starting_equipment() -> Equipment:
    return Equipment(
        weapon=Item(
            id="starter-weapon",
            name="Rusty Dagger",
            type=ItemType.WEAPON,
            rarity=Rarity.COMMON,
            stats=ItemStats(damage=2),
            value=5,
            description="Better than nothing.",
        ),
        armor=Item(
            id="starter-armor",
            name="Tattered Tunic",
            type=ItemType.ARMOR,
            rarity=Rarity.COMMON,
            stats=ItemStats(armor=1),
            value=5,
            description="Barely holds together.",
        ),
    )


def starting_player(name: str = "Drifter") -> Player:
    """Build a fresh level-1 character."""
    return Player(
        name=name,
        class_type=ClassType.WARRIOR,
        level=1,
        xp=0,
        xp_to_next=100,
        hp=20,
        max_hp=20,
        mana=10,
        max_mana=10,
        move=20,
        max_move=20,
        strength=5,
        intelligence=3,
        dexterity=4,
        equipment=starting_equipment(),
        gold=0,
    )
