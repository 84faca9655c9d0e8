"""Dungeon module -- item, mob and room generation plus the memoized world."""

from shaft_crawler.sim.dungeon.items import generate_item, make_healing_potion
from shaft_crawler.sim.dungeon.mobs import classify_mob, generate_mob
from shaft_crawler.sim.dungeon.rooms import build_exits, generate_room, is_boss_level
from shaft_crawler.sim.dungeon.world import get_or_generate_room

__all__ = [
    "build_exits",
    "classify_mob",
    "generate_item",
    "generate_mob",
    "generate_room",
    "get_or_generate_room",
    "is_boss_level",
    "make_healing_potion",
]
