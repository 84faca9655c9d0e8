"""Entity models for the shaft crawler simulation.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Items are frozen: they move between the room floor, the
inventory and the equipment slots by reference and are never edited in
place.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class MobType(str, Enum):
    BEAST = "beast"
    HUMANOID = "humanoid"
    UNDEAD = "undead"
    BOSS = "boss"


class ClassType(str, Enum):
    WARRIOR = "Warrior"
    MAGE = "Mage"
    ROGUE = "Rogue"


EQUIPMENT_SLOTS: tuple[ItemType, ...] = (
    ItemType.WEAPON,
    ItemType.ARMOR,
    ItemType.ACCESSORY,
)


# ---------------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------------

class ItemStats(BaseModel):
    """Passive bonuses granted while an item is equipped."""

    model_config = {"frozen": True}

    strength: int = 0
    intelligence: int = 0
    dexterity: int = 0
    armor: int = 0
    damage: int = 0


class StatUpgrade(BaseModel):
    """Permanent bonuses granted when a consumable is used."""

    model_config = {"frozen": True}

    strength: int = 0
    intelligence: int = 0
    dexterity: int = 0
    hp: int = 0
    """Added to ``max_hp`` and the current ``hp``."""
    mana: int = 0
    """Added to ``max_mana`` and the current ``mana``."""


class Item(BaseModel):
    """A piece of loot.  Immutable once generated."""

    model_config = {"frozen": True}

    id: str
    name: str
    type: ItemType
    rarity: Rarity
    stats: ItemStats | None = None
    stat_upgrade: StatUpgrade | None = None
    value: int = 0
    description: str = ""

    @property
    def is_equipment(self) -> bool:
        return self.type in EQUIPMENT_SLOTS


# ---------------------------------------------------------------------------
# Mob
# ---------------------------------------------------------------------------

class Mob(BaseModel):
    """A hostile creature owned by exactly one room.

    Dead mobs stay in their room as corpses: ``hp`` is 0 and their loot
    has already been moved to the room floor.
    """

    id: str
    name: str
    level: int
    hp: int = Field(ge=0)
    max_hp: int = Field(gt=0)
    damage: int
    xp_value: int
    is_aggro: bool = False
    type: MobType = MobType.HUMANOID
    loot: list[Item] = Field(default_factory=list)
    is_elite: bool = False
    is_dead: bool = False

    # Visual state written back by the narration collaborator.
    image_url: str | None = None
    dead_image_url: str | None = None
    is_generating: bool = False

    @property
    def is_alive(self) -> bool:
        return not self.is_dead

    def take_damage(self, amount: int) -> int:
        """Subtract *amount* HP, floored at 0.  Returns the HP actually lost.

        Does not mark the mob dead; the caller decides what a lethal blow
        means (XP, loot transfer) and calls :meth:`kill`.
        """
        if amount < 0:
            raise ValueError(f"take_damage amount must be >= 0, got {amount}")
        hp_lost = min(self.hp, amount)
        self.hp -= hp_lost
        return hp_lost

    def kill(self) -> list[Item]:
        """Turn this mob into a corpse and hand back its loot."""
        dropped = list(self.loot)
        self.loot = []
        self.hp = 0
        self.is_dead = True
        return dropped


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

class Equipment(BaseModel):
    """The three equipment slots."""

    weapon: Item | None = None
    armor: Item | None = None
    accessory: Item | None = None

    def get(self, slot: ItemType) -> Item | None:
        return getattr(self, slot.value)

    def put(self, slot: ItemType, item: Item | None) -> Item | None:
        """Place *item* in *slot* and return whatever was there before."""
        if slot not in EQUIPMENT_SLOTS:
            raise ValueError(f"{slot!r} is not an equipment slot")
        previous = self.get(slot)
        setattr(self, slot.value, item)
        return previous

    def items(self) -> list[Item]:
        """Return every equipped item, skipping empty slots."""
        return [
            item
            for item in (self.weapon, self.armor, self.accessory)
            if item is not None
        ]


class Player(BaseModel):
    """The single player character of a session.

    ``hp`` and ``mana`` are floats because passive regeneration restores
    half a point per tick.
    """

    name: str
    class_type: ClassType = ClassType.WARRIOR
    level: int = 1
    xp: int = 0
    xp_to_next: int = 100

    hp: float
    max_hp: int
    mana: float
    max_mana: int
    move: float
    """Stamina, spent on movement and fleeing."""
    max_move: int

    strength: int
    intelligence: int
    dexterity: int

    inventory: list[Item] = Field(default_factory=list)
    equipment: Equipment = Field(default_factory=Equipment)
    gold: int = 0

    # -- queries -------------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def find_in_inventory(self, item_id: str) -> Item | None:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    # -- vitals --------------------------------------------------------------

    def take_damage(self, amount: float) -> None:
        """Lose *amount* HP, floored at 0."""
        self.hp = max(0, self.hp - amount)

    def heal(self, amount: float) -> None:
        """Heal *amount* HP, capped at ``max_hp``."""
        if amount <= 0:
            return
        self.hp = min(self.max_hp, self.hp + amount)

    def restore_mana(self, amount: float) -> None:
        if amount <= 0:
            return
        self.mana = min(self.max_mana, self.mana + amount)

    def restore_move(self, amount: float) -> None:
        if amount <= 0:
            return
        self.move = min(self.max_move, self.move + amount)

    # -- inventory -----------------------------------------------------------

    def remove_from_inventory(self, item_id: str) -> Item:
        """Remove and return the item with *item_id*."""
        for i, item in enumerate(self.inventory):
            if item.id == item_id:
                return self.inventory.pop(i)
        raise KeyError(f"Item {item_id!r} not in inventory")
