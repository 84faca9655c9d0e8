"""World and session state for the shaft crawler simulation.

Houses the room model, the append-only room map (``World``) and the full
mutable state of one play-through (``GameState``).  ``GameState`` is the
explicit context object every action handler and the tick engine receive;
nothing in the simulation keeps session data in module globals.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

from pydantic import BaseModel, Field

from shaft_crawler.sim.core.entities import Item, Mob, Player

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class GamePhase(str, Enum):
    START = "START"
    PLAYING = "PLAYING"
    GAMEOVER = "GAMEOVER"
    VICTORY = "VICTORY"


class LogType(str, Enum):
    COMBAT = "combat"
    INFO = "info"
    LOOT = "loot"
    DANGER = "danger"
    GAIN = "gain"
    STORY = "story"


class EventType(str, Enum):
    """Things the session reports to collaborators (narration, telemetry)."""

    SESSION_STARTED = "session_started"
    ROOM_ENTERED = "room_entered"
    TARGET_ENGAGED = "target_engaged"
    MOB_KILLED = "mob_killed"
    LEVEL_UP = "level_up"
    ITEM_LOOTED = "item_looted"
    RESTED = "rested"
    CHAT = "chat"
    GAME_OVER = "game_over"
    VICTORY = "victory"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int, int]:
        """Coordinate offset ``(dx, dy, dz)``.  Going up decreases depth."""
        return _DIRECTION_DELTAS[self]


_DIRECTION_DELTAS: dict[Direction, tuple[int, int, int]] = {
    Direction.UP: (0, 0, -1),
    Direction.DOWN: (0, 0, 1),
    Direction.NORTH: (0, 1, 0),
    Direction.SOUTH: (0, -1, 0),
    Direction.EAST: (1, 0, 0),
    Direction.WEST: (-1, 0, 0),
}


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

def room_id(x: int, y: int, z: int) -> str:
    """Return the identity of the room at ``(x, y, z)``."""
    return f"room_{x}_{y}_{z}"


class Coordinates(BaseModel):
    x: int = 0
    y: int = 0
    z: int = 0
    """Depth: 0 is the surface, larger is deeper."""

    @property
    def is_shaft(self) -> bool:
        return self.x == 0 and self.y == 0

    @property
    def room_id(self) -> str:
        return room_id(self.x, self.y, self.z)

    def step(self, direction: Direction) -> Coordinates:
        dx, dy, dz = direction.delta
        return Coordinates(x=self.x + dx, y=self.y + dy, z=self.z + dz)


class Exits(BaseModel):
    up: bool = False
    down: bool = False
    north: bool = False
    south: bool = False
    east: bool = False
    west: bool = False

    def is_open(self, direction: Direction) -> bool:
        return getattr(self, direction.value)

    def open_directions(self) -> list[Direction]:
        return [d for d in Direction if self.is_open(d)]


class Room(BaseModel):
    """A single generated room.

    Identity and initial population are fixed at generation time.  Only
    mob HP / death state and the floor items change afterwards.
    """

    id: str
    coordinates: Coordinates
    name: str
    description: str
    mobs: list[Mob] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    """Items lying on the floor."""
    exits: Exits = Field(default_factory=Exits)
    visited: bool = False

    @property
    def depth(self) -> int:
        return self.coordinates.z

    @property
    def living_mobs(self) -> list[Mob]:
        return [m for m in self.mobs if m.is_alive]

    def find_mob(self, mob_id: str) -> Mob | None:
        for mob in self.mobs:
            if mob.id == mob_id:
                return mob
        return None

    def find_item(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def take_item(self, item_id: str) -> Item:
        """Remove and return the floor item with *item_id*."""
        for i, item in enumerate(self.items):
            if item.id == item_id:
                return self.items.pop(i)
        raise KeyError(f"Item {item_id!r} not in room {self.id}")


class World(BaseModel):
    """Append-only map from room id to room.

    Rooms are added on first visit and never removed or replaced.
    """

    rooms: dict[str, Room] = Field(default_factory=dict)

    def get(self, rid: str) -> Room | None:
        return self.rooms.get(rid)

    def add(self, room: Room) -> None:
        if room.id in self.rooms:
            raise ValueError(f"Room {room.id!r} already exists")
        self.rooms[room.id] = room

    def __contains__(self, rid: object) -> bool:
        return rid in self.rooms

    def __len__(self) -> int:
        return len(self.rooms)

    def all_rooms(self) -> list[Room]:
        return list(self.rooms.values())


# ---------------------------------------------------------------------------
# Log
# ---------------------------------------------------------------------------

class LogEntry(BaseModel):
    """A player-facing message produced by an action or a tick."""

    id: str
    text: str
    type: LogType = LogType.INFO
    timestamp: float = Field(default_factory=time.time)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class GameEvent(BaseModel):
    """A state change worth telling collaborators about.

    Events carry ids, never entity copies; consumers resolve them against
    the live state.
    """

    type: EventType
    room_id: str | None = None
    mob_id: str | None = None
    item_id: str | None = None
    created: bool = False
    """For ``ROOM_ENTERED``: first visit.  For ``TARGET_ENGAGED``: newly
    selected target."""
    text: str = ""


# ---------------------------------------------------------------------------
# GameState
# ---------------------------------------------------------------------------

class GameState(BaseModel):
    """Top-level mutable state for one play-through."""

    phase: GamePhase = GamePhase.START
    time_left: int
    coordinates: Coordinates = Field(default_factory=Coordinates)
    current_room_id: str = ""
    world: World = Field(default_factory=World)
    player: Player
    target_id: str | None = None
    """Id of the engaged (or inspected) mob in the current room."""

    cooldowns: dict[str, int] = Field(default_factory=dict)
    """Skill name -> remaining cooldown in ticks."""

    logs: list[LogEntry] = Field(default_factory=list)
    max_log_entries: int = 50
    log_counter: int = 0
    ticks: int = 0

    events: list[GameEvent] = Field(default_factory=list, exclude=True)
    """Pending events, drained by the session after every tick and action."""

    # -- queries -------------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self.phase == GamePhase.PLAYING

    @property
    def current_room(self) -> Room | None:
        return self.world.get(self.current_room_id)

    @property
    def target(self) -> Mob | None:
        """Resolve the target id against the current room."""
        if self.target_id is None:
            return None
        room = self.current_room
        if room is None:
            return None
        return room.find_mob(self.target_id)

    @property
    def living_target(self) -> Mob | None:
        mob = self.target
        if mob is None or mob.is_dead:
            return None
        return mob

    # -- mutation ------------------------------------------------------------

    def add_log(self, text: str, log_type: LogType = LogType.INFO) -> LogEntry:
        """Append a log entry, keeping only the newest ``max_log_entries``."""
        entry = LogEntry(id=f"log-{self.log_counter}", text=text, type=log_type)
        self.log_counter += 1
        self.logs.append(entry)
        if len(self.logs) > self.max_log_entries:
            del self.logs[: len(self.logs) - self.max_log_entries]
        return entry

    def emit(self, event_type: EventType, **fields: object) -> GameEvent:
        event = GameEvent(type=event_type, **fields)
        self.events.append(event)
        return event

    def drain_events(self) -> list[GameEvent]:
        drained = self.events
        self.events = []
        return drained

    def end(self, phase: GamePhase) -> bool:
        """Leave ``PLAYING`` for a terminal *phase*.

        Returns ``False`` (and changes nothing) if the session already
        ended, so each terminal transition happens exactly once.
        """
        if phase not in (GamePhase.GAMEOVER, GamePhase.VICTORY):
            raise ValueError(f"{phase!r} is not a terminal phase")
        if self.phase != GamePhase.PLAYING:
            return False
        logger.info("Session ended: %s at %s", phase.value, self.coordinates)
        self.phase = phase
        self.emit(
            EventType.GAME_OVER if phase == GamePhase.GAMEOVER else EventType.VICTORY,
            room_id=self.current_room_id,
        )
        return True
