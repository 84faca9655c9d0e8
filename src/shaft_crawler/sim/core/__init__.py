"""Core simulation primitives for the shaft crawler."""

from shaft_crawler.sim.core.entities import (
    Equipment,
    Item,
    ItemStats,
    ItemType,
    Mob,
    MobType,
    Player,
    Rarity,
    StatUpgrade,
)
from shaft_crawler.sim.core.game_state import (
    Coordinates,
    Direction,
    EventType,
    Exits,
    GameEvent,
    GamePhase,
    GameState,
    LogEntry,
    LogType,
    Room,
    World,
)
from shaft_crawler.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "Item",
    "ItemStats",
    "ItemType",
    "Rarity",
    "StatUpgrade",
    "Mob",
    "MobType",
    "Equipment",
    "Player",
    # game_state
    "Coordinates",
    "Direction",
    "Exits",
    "Room",
    "World",
    "LogEntry",
    "LogType",
    "EventType",
    "GameEvent",
    "GamePhase",
    "GameState",
]
