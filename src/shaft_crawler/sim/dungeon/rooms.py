"""Room generator for the vertical shaft.

Rooms are classified by their coordinates:
- ``(0, 0, z)``: the main shaft.  Always linked up (if ``z > 0``) and down
  (if above the depth floor); each cardinal exit open at 60%.
- ``(0, 0, z)`` with ``z > 0`` and ``z % 10 == 0``: a boss level holding a
  single forced boss.
- anything else: a side room.  Up to 4 mob slots, a 40% floor item, an
  exit guaranteed back toward the shaft on each non-zero axis, outward
  branches at 50% and hidden vertical shortcuts at 20%.

Generation is not deterministic in content: calling ``generate_room`` twice
for the same coordinates gives two different rooms.  Callers memoize by
room id (see ``shaft_crawler.sim.dungeon.world``).
"""

from __future__ import annotations

import logging

from shaft_crawler.sim.content.tables import (
    BOSS_ROOM_DESCRIPTION,
    BOSS_ROOM_NAME,
    ROOM_PREFIXES,
    ROOM_TYPES,
    SHAFT_ROOM_DESCRIPTION,
)
from shaft_crawler.sim.core.entities import Item, Mob
from shaft_crawler.sim.core.game_state import Coordinates, Exits, Room, room_id
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.dungeon.items import generate_item
from shaft_crawler.sim.dungeon.mobs import generate_mob

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50
BOSS_LEVEL_INTERVAL = 10


def is_boss_level(x: int, y: int, z: int) -> bool:
    return x == 0 and y == 0 and z > 0 and z % BOSS_LEVEL_INTERVAL == 0


def generate_room(
    rng: GameRNG,
    x: int,
    y: int,
    z: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Room:
    """Generate a fresh room at ``(x, y, z)``.

    Parameters
    ----------
    rng:
        Random source for every roll.
    x, y, z:
        Coordinates; ``z`` is depth.
    max_depth:
        Deepest level; rooms at this depth never open downward.
    """
    is_shaft = x == 0 and y == 0
    is_side_room = not is_shaft
    boss_level = is_boss_level(x, y, z)

    prefix = rng.random_choice(ROOM_PREFIXES)
    kind = rng.random_choice(ROOM_TYPES)

    mobs: list[Mob] = []
    if boss_level:
        mobs.append(generate_mob(rng, z, False, force_boss=True))
    else:
        slots = rng.random_int(1, 4 if is_side_room else 2)
        for _ in range(slots):
            if rng.random_float() > 0.3:
                mobs.append(generate_mob(rng, z, is_side_room))

    exits = build_exits(rng, x, y, z, max_depth)

    items: list[Item] = []
    if is_side_room and not boss_level and rng.random_float() > 0.6:
        items.append(generate_item(rng, z, False))

    if boss_level:
        name = BOSS_ROOM_NAME
        description = BOSS_ROOM_DESCRIPTION
    elif is_shaft:
        name = f"Shaft {z}"
        description = SHAFT_ROOM_DESCRIPTION
    else:
        name = f"{prefix} {kind}"
        description = f"{prefix} walls. Smell of rot."

    room = Room(
        id=room_id(x, y, z),
        coordinates=Coordinates(x=x, y=y, z=z),
        name=name,
        description=description,
        mobs=mobs,
        items=items,
        exits=exits,
    )
    logger.debug(
        "Generated room %s (%s): %d mobs, %d items",
        room.id, room.name, len(mobs), len(items),
    )
    return room


def build_exits(
    rng: GameRNG,
    x: int,
    y: int,
    z: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Exits:
    """Roll the six-directional exit set for a room."""
    exits = Exits()

    if x == 0 and y == 0:
        exits.up = z > 0
        exits.down = z < max_depth
        exits.north = rng.random_float() > 0.4
        exits.south = rng.random_float() > 0.4
        exits.east = rng.random_float() > 0.4
        exits.west = rng.random_float() > 0.4
        return exits

    # Path back toward the shaft on every non-zero axis.
    if y > 0:
        exits.south = True
    if y < 0:
        exits.north = True
    if x > 0:
        exits.west = True
    if x < 0:
        exits.east = True

    # Outward branches.  On a zero axis both directions lead outward.
    if y >= 0:
        exits.north = rng.random_float() > 0.5
    if y <= 0:
        exits.south = rng.random_float() > 0.5
    if x >= 0:
        exits.east = rng.random_float() > 0.5
    if x <= 0:
        exits.west = rng.random_float() > 0.5

    # Hidden vertical shortcuts.
    if rng.random_float() > 0.8 and z > 0:
        exits.up = True
    if rng.random_float() > 0.8 and z < max_depth:
        exits.down = True

    return exits
