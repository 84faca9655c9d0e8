"""Mob generation.

Difficulty roll: ``U[0,1) + depth*0.05 + 0.3 (side rooms)``.
- > 1.5: hard, level +2
- > 0.8: medium, level +1
- otherwise easy

Elites (30% in side rooms, 5% in the shaft) are always hard at level +3
with a unique name; forced bosses are level +5.  Only elites and bosses
carry loot.
"""

from __future__ import annotations

import logging
import math

from shaft_crawler.sim.content.tables import (
    BEAST_MARKERS,
    ELITE_PREFIXES,
    ELITE_TITLES,
    MOB_NAMES,
    UNDEAD_MARKERS,
)
from shaft_crawler.sim.core.entities import Item, Mob, MobType
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.dungeon.items import generate_item

logger = logging.getLogger(__name__)

ELITE_LOOT_COUNT = 2
BOSS_LOOT_COUNT = 3


def generate_mob(
    rng: GameRNG,
    depth: int,
    is_side_room: bool,
    force_boss: bool = False,
) -> Mob:
    """Generate a mob for a room at *depth*.

    Parameters
    ----------
    rng:
        Random source for every roll.
    depth:
        Room depth (``z``).  Drives level and difficulty.
    is_side_room:
        Side rooms roll harder tiers and elites more often.
    force_boss:
        Spawn a boss instead of rolling tier and elite status.
    """
    difficulty_roll = rng.random_float() + depth * 0.05 + (0.3 if is_side_room else 0)

    is_elite = False
    if not force_boss:
        threshold = 0.7 if is_side_room else 0.95
        is_elite = rng.random_float() > threshold

    level = depth + rng.random_int(0, 1)
    if force_boss:
        tier = "boss"
        level += 5
    elif is_elite:
        tier = "hard"
        level += 3
    elif difficulty_roll > 1.5:
        tier = "hard"
        level += 2
    elif difficulty_roll > 0.8:
        tier = "medium"
        level += 1
    else:
        tier = "easy"

    if is_elite:
        name = f"{rng.random_choice(ELITE_PREFIXES)} {rng.random_choice(ELITE_TITLES)}"
    else:
        name = rng.random_choice(MOB_NAMES[tier])

    mob_type = classify_mob(name, force_boss)

    elite_mult = 2.5 if is_elite else 1
    boss_mult = 4 if force_boss else 1
    max_hp = math.floor((10 + level * 8) * elite_mult * boss_mult)
    damage = math.floor(
        (2 + math.floor(level * 1.5))
        * (1.5 if is_elite else 1)
        * (1.5 if force_boss else 1)
    )
    xp_value = (10 + level * 5) * (3 if is_elite else 1) * (5 if force_boss else 1)

    loot: list[Item] = []
    if is_elite:
        loot = [generate_item(rng, level, True) for _ in range(ELITE_LOOT_COUNT)]
    elif force_boss:
        loot = [generate_item(rng, level, True) for _ in range(BOSS_LOOT_COUNT)]

    is_aggro = True if force_boss else rng.random_float() > 0.7

    mob = Mob(
        id=rng.random_id(),
        name=name,
        level=level,
        hp=max_hp,
        max_hp=max_hp,
        damage=damage,
        xp_value=xp_value,
        is_aggro=is_aggro,
        type=mob_type,
        loot=loot,
        is_elite=is_elite or force_boss,
    )
    logger.debug(
        "Generated %s mob %r (level %d, tier %s) at depth %d",
        mob_type.value, name, level, tier, depth,
    )
    return mob


def classify_mob(name: str, is_boss: bool = False) -> MobType:
    """Derive the mob type from its name."""
    if is_boss:
        return MobType.BOSS
    lower = name.lower()
    if any(marker in lower for marker in BEAST_MARKERS):
        return MobType.BEAST
    if any(marker in lower for marker in UNDEAD_MARKERS):
        return MobType.UNDEAD
    return MobType.HUMANOID
