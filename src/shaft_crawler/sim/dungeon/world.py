"""Memoized room lookup: generate a room on first visit, reuse it after."""

from __future__ import annotations

import logging

from shaft_crawler.sim.core.game_state import Coordinates, Room, World, room_id
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.dungeon.rooms import DEFAULT_MAX_DEPTH, generate_room

logger = logging.getLogger(__name__)


def get_or_generate_room(
    world: World,
    rng: GameRNG,
    coords: Coordinates,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[Room, bool]:
    """Return the room at *coords*, generating and storing it if new.

    Returns ``(room, created)``.  A stored room is returned as the same
    object every time, so mob deaths and floor changes persist.
    """
    rid = room_id(coords.x, coords.y, coords.z)
    existing = world.get(rid)
    if existing is not None:
        return existing, False

    room = generate_room(rng, coords.x, coords.y, coords.z, max_depth=max_depth)
    world.add(room)
    logger.debug("World now holds %d rooms", len(world))
    return room, True
