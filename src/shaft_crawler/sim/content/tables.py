"""Static naming tables and fixed item templates.

Everything the generators pick names from lives here so the generation
modules only contain the rolling logic.
"""

from __future__ import annotations

ROOM_PREFIXES: list[str] = [
    "Damp", "Obsidian", "Crumbling", "Echoing", "Ancient", "Forgotten",
    "Crystal", "Burning", "Frozen", "Void", "Shadowed", "Gilded", "Bloodied",
]

ROOM_TYPES: list[str] = [
    "Shaft", "Cavern", "Outcropping", "Ledge", "Burrow", "Catacomb",
    "Chamber", "Hall", "Pit", "Sanctum", "Nest", "Vault",
]

# Mob names per difficulty tier.
MOB_NAMES: dict[str, list[str]] = {
    "easy": ["Giant Rat", "Slime", "Bat", "Kobold Runt", "Spider"],
    "medium": [
        "Goblin Sentry", "Skeleton Warrior", "Orc Grunt", "Shadow Wolf",
        "Dark Dwarf",
    ],
    "hard": [
        "Orc Berserker", "Cave Troll", "Dark Cultist", "Void Construct",
        "Basilisk",
    ],
    "boss": [
        "Shaft Guardian", "Lich Lord", "Broodmother", "Abyssal Horror",
        "The Rotting King", "Flame Warden", "Void Eater",
    ],
}

ELITE_PREFIXES: list[str] = [
    "Vorgak", "Zul", "Krag", "Xyl", "Morg", "Thal", "Grim", "Vor", "Azar",
    "Kael",
]

ELITE_TITLES: list[str] = [
    "the Sunderer", "the Cursed", "Blood-Drinker", "Soul-Eater",
    "the Eternal", "Skull-Crusher", "Shadow-Walker", "Void-Gazer",
]

# Substrings that classify a mob name.  Checked in order; no match means
# humanoid.
BEAST_MARKERS: tuple[str, ...] = ("rat", "bat", "spider", "wolf", "basilisk")
UNDEAD_MARKERS: tuple[str, ...] = ("skeleton", "lich", "ghost", "zombie")

# Indexed by power: level // 3, +2 for elite drops.
LOOT_PREFIXES: list[str] = [
    "Rusted", "Iron", "Steel", "Reinforced", "Enchanted", "Glowing",
    "Shadow", "Void", "Astral",
]

EQUIPMENT_NOUNS: dict[str, str] = {
    "weapon": "Blade",
    "armor": "Plate",
    "accessory": "Ring",
}

HEALING_POTION_NAME = "Potion of Healing"
HEALING_POTION_AMOUNT = 25

# (name, attribute) pairs for elite tome drops.
TOMES: list[tuple[str, str]] = [
    ("Tome of Strength", "strength"),
    ("Manual of Agility", "dexterity"),
    ("Codex of Intellect", "intelligence"),
]

BOSS_ROOM_NAME = "Guardian's Threshold"
BOSS_ROOM_DESCRIPTION = "Oppressive aura. A Guardian waits."
SHAFT_ROOM_DESCRIPTION = "The infinite drop. Wind howls."

ENTRANCE_ROOM_NAME = "The Surface Entrance"
ENTRANCE_ROOM_DESCRIPTION = (
    "You stand at the edge of the Infinite Shaft. The wind howls upwards. "
    "There is no turning back, only down."
)
