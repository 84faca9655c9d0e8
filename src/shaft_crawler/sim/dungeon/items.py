"""Loot generation.

Rarity thresholds (roll in ``[0, 1)``):
- Elite drops: > 0.7 legendary, otherwise rare.
- Normal drops: > 0.95 legendary, > 0.85 rare, > 0.6 uncommon, else common.

Elite drops have a 50% chance to be a stat tome instead of equipment.
Normal item types split into quartiles: weapon / consumable / accessory /
armor.  Consumables are always a healing potion.
"""

from __future__ import annotations

from shaft_crawler.sim.content.tables import (
    EQUIPMENT_NOUNS,
    HEALING_POTION_AMOUNT,
    HEALING_POTION_NAME,
    LOOT_PREFIXES,
    TOMES,
)
from shaft_crawler.sim.core.entities import (
    Item,
    ItemStats,
    ItemType,
    Rarity,
    StatUpgrade,
)
from shaft_crawler.sim.core.rng import GameRNG


def generate_item(rng: GameRNG, level: int, is_elite_drop: bool = False) -> Item:
    """Generate one piece of loot scaled to *level*.

    Parameters
    ----------
    rng:
        Random source for every roll.
    level:
        Power level, usually the depth or the dropping mob's level.
    is_elite_drop:
        Elite and boss drops roll better rarities, can be tomes, and get a
        +2 bonus to power scale and name tier.

    Never fails: always returns a valid item.
    """
    rarity = _roll_rarity(rng, is_elite_drop)

    if is_elite_drop and rng.random_float() > 0.5:
        return _make_tome(rng)

    item_type = _roll_item_type(rng)
    if item_type == ItemType.CONSUMABLE:
        return make_healing_potion(rng)

    power_scale = max(1, level // 2) + (2 if is_elite_drop else 0)
    prefix_index = min(
        len(LOOT_PREFIXES) - 1, level // 3 + (2 if is_elite_drop else 0),
    )
    prefix = LOOT_PREFIXES[max(0, prefix_index)]

    damage = 0
    armor = 0
    if item_type == ItemType.WEAPON:
        damage = rng.random_int(2, 5) + power_scale * 2
    if item_type == ItemType.ARMOR:
        armor = rng.random_int(1, 3) + power_scale

    strength = intelligence = dexterity = 0
    if item_type == ItemType.ACCESSORY or rarity != Rarity.COMMON:
        if rng.random_float() > 0.5:
            strength = rng.random_int(1, power_scale)
        if rng.random_float() > 0.5:
            dexterity = rng.random_int(1, power_scale)
        if rng.random_float() > 0.5:
            intelligence = rng.random_int(1, power_scale)

    return Item(
        id=rng.random_id(),
        name=f"{prefix} {EQUIPMENT_NOUNS[item_type.value]}",
        type=item_type,
        rarity=rarity,
        stats=ItemStats(
            strength=strength,
            intelligence=intelligence,
            dexterity=dexterity,
            armor=armor,
            damage=damage,
        ),
        value=level * 10,
        description=f"A {rarity.value} item.",
    )


def make_healing_potion(rng: GameRNG) -> Item:
    return Item(
        id=rng.random_id(),
        name=HEALING_POTION_NAME,
        type=ItemType.CONSUMABLE,
        rarity=Rarity.COMMON,
        value=10,
        description=f"Restores {HEALING_POTION_AMOUNT} HP",
    )


def _roll_rarity(rng: GameRNG, is_elite_drop: bool) -> Rarity:
    roll = rng.random_float()
    if is_elite_drop:
        return Rarity.LEGENDARY if roll > 0.7 else Rarity.RARE
    if roll > 0.95:
        return Rarity.LEGENDARY
    elif roll > 0.85:
        return Rarity.RARE
    elif roll > 0.6:
        return Rarity.UNCOMMON
    return Rarity.COMMON


def _roll_item_type(rng: GameRNG) -> ItemType:
    roll = rng.random_float()
    if roll > 0.75:
        return ItemType.ARMOR
    elif roll > 0.5:
        return ItemType.ACCESSORY
    elif roll > 0.25:
        return ItemType.CONSUMABLE
    return ItemType.WEAPON


def _make_tome(rng: GameRNG) -> Item:
    """Pick a +1 permanent stat tome uniformly."""
    roll = rng.random_float()
    if roll > 0.66:
        name, attribute = TOMES[0]
    elif roll > 0.33:
        name, attribute = TOMES[1]
    else:
        name, attribute = TOMES[2]
    return Item(
        id=rng.random_id(),
        name=name,
        type=ItemType.CONSUMABLE,
        rarity=Rarity.LEGENDARY,
        stat_upgrade=StatUpgrade(**{attribute: 1}),
        value=200,
        description="Permanently increases a stat.",
    )
