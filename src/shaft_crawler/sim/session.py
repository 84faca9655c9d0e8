"""GameSession -- the surface the outside world talks to.

Owns the ``GameState`` and everything needed to advance it (RNG streams,
config, tick engine) and exposes:

- **Action intake**: ``start_game``, ``move``, ``rest``, ``attack``,
  ``flee``, ``use_skill``, ``loot``, ``equip``, ``drop``, ``use_item``,
  ``chat``, plus ``tick`` for the host's clock.
- **Render surface**: ``snapshot()`` and ``subscribe()`` listeners, which
  get a fresh snapshot after every state change.
- **Narration**: when a ``Narrator`` is attached, events are turned into
  background jobs whose results land in the log (story text) or on boss
  mobs (portraits).  Narration never affects the rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel

from shaft_crawler.config import GameConfig, starting_player
from shaft_crawler.sim import actions
from shaft_crawler.sim.core.entities import Mob, MobType, Player
from shaft_crawler.sim.core.game_state import (
    Coordinates,
    Direction,
    EventType,
    GameEvent,
    GamePhase,
    GameState,
    LogEntry,
    LogType,
    Room,
)
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.engine import TickEngine
from shaft_crawler.sim.telemetry import RunTelemetry

from shaft_crawler.narration.enrichment import EnrichmentQueue
from shaft_crawler.narration.narrator import ClaudeNarrator, Narrator, portrait_prompt

logger = logging.getLogger(__name__)

_PORTRAIT_KEY = "portrait:"
_STORY_KEY = "story:"


class SessionSnapshot(BaseModel):
    """Read-only copy of everything a renderer needs."""

    phase: GamePhase
    time_left: int
    coordinates: Coordinates
    current_room: Room | None
    player: Player
    target: Mob | None
    cooldowns: dict[str, int]
    logs: list[LogEntry]


@dataclass(frozen=True)
class PlayerAction:
    """A single command, as issued by a play agent.

    ``kind`` is one of the ``GameSession`` action names; ``arg`` is the
    direction, mob id, skill name, item id or chat message it needs.
    """

    kind: str
    arg: str | None = None


Listener = Callable[[SessionSnapshot], None]


class GameSession:
    """One play-through, from the start screen to game over or victory.

    Parameters
    ----------
    rng:
        Master RNG.  Forked into ``"world"`` and ``"combat"`` streams.
        Defaults to a fresh entropy-seeded RNG.
    config:
        Session tunables.
    narrator:
        Optional narration backend.
    enrichment:
        Queue that runs narration jobs.  Created on demand when a narrator
        is given.
    """

    def __init__(
        self,
        rng: GameRNG | None = None,
        config: GameConfig | None = None,
        narrator: Narrator | None = None,
        enrichment: EnrichmentQueue | None = None,
    ) -> None:
        self.rng = rng or GameRNG.from_entropy()
        self.config = config or GameConfig()
        self.world_rng = self.rng.fork("world")
        self.combat_rng = self.rng.fork("combat")
        self.engine = TickEngine(self.combat_rng, self.config)

        self.narrator = narrator
        if enrichment is None and narrator is not None:
            enrichment = EnrichmentQueue()
        self.enrichment = enrichment

        self.state = GameState(
            time_left=self.config.max_time,
            player=starting_player(),
            max_log_entries=self.config.max_log_entries,
        )
        self.telemetry = RunTelemetry(seed=self.rng.seed)

        self._listeners: list[Listener] = []
        self._story_counter = 0
        self._last_target_id: str | None = None

    @classmethod
    def with_claude(
        cls,
        rng: GameRNG | None = None,
        config: GameConfig | None = None,
        api_key: str | None = None,
    ) -> GameSession:
        """Build a session narrated by Claude using ``config.narration_model``."""
        config = config or GameConfig()
        narrator = ClaudeNarrator(model=config.narration_model, api_key=api_key)
        return cls(rng=rng, config=config, narrator=narrator)

    # ------------------------------------------------------------------
    # Render surface
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def snapshot(self) -> SessionSnapshot:
        """Return a deep copy of the renderable state."""
        state = self.state
        room = state.current_room
        target = state.target
        return SessionSnapshot(
            phase=state.phase,
            time_left=state.time_left,
            coordinates=state.coordinates.model_copy(),
            current_room=room.model_copy(deep=True) if room is not None else None,
            player=state.player.model_copy(deep=True),
            target=target.model_copy(deep=True) if target is not None else None,
            cooldowns=dict(state.cooldowns),
            logs=[entry.model_copy() for entry in state.logs],
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """Advance one tick.  Returns ``False`` if the session is not playing."""
        self._poll_enrichment()
        advanced = self.engine.tick(self.state)
        if advanced:
            self._after_change()
        return advanced

    # ------------------------------------------------------------------
    # Action intake
    # ------------------------------------------------------------------

    def start_game(self, player_name: str = "Drifter") -> None:
        """Reset everything and stand the player at the surface entrance."""
        if self.enrichment is not None:
            self.enrichment.discard_all()
        self.state = actions.new_game(self.world_rng, self.config, player_name)
        self.telemetry = RunTelemetry(seed=self.rng.seed)
        self._last_target_id = None
        self._after_change()

    def move(self, direction: Direction | str) -> bool:
        return self._apply(actions.move, self.state, self.world_rng, direction, self.config)

    def rest(self) -> bool:
        return self._apply(actions.rest, self.state, self.config)

    def attack(self, mob_id: str) -> bool:
        return self._apply(actions.attack, self.state, mob_id)

    def flee(self) -> bool:
        return self._apply(actions.flee, self.state, self.combat_rng, self.config)

    def use_skill(self, name: str) -> bool:
        return self._apply(actions.use_skill, self.state, name, self.config)

    def loot(self, item_id: str) -> bool:
        return self._apply(actions.loot, self.state, item_id)

    def equip(self, item_id: str) -> bool:
        return self._apply(actions.equip, self.state, item_id)

    def drop(self, item_id: str) -> bool:
        return self._apply(actions.drop, self.state, item_id)

    def use_item(self, item_id: str) -> bool:
        return self._apply(actions.use_item, self.state, item_id)

    def chat(self, message: str) -> bool:
        return self._apply(actions.chat, self.state, message)

    def perform(self, action: PlayerAction) -> bool:
        """Dispatch a ``PlayerAction`` to the matching method."""
        if action.kind == "rest":
            return self.rest()
        if action.kind == "flee":
            return self.flee()
        handler = {
            "move": self.move,
            "attack": self.attack,
            "use_skill": self.use_skill,
            "loot": self.loot,
            "equip": self.equip,
            "drop": self.drop,
            "use_item": self.use_item,
            "chat": self.chat,
        }.get(action.kind)
        if handler is None or action.arg is None:
            raise ValueError(f"Invalid action: {action!r}")
        return handler(action.arg)

    def close(self) -> None:
        """Stop background narration."""
        if self.enrichment is not None:
            self.enrichment.shutdown()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _apply(self, handler: Callable[..., bool], *args: object) -> bool:
        self._poll_enrichment()
        applied = handler(*args)
        self._after_change()
        return applied

    def _poll_enrichment(self) -> None:
        if self.enrichment is not None and self.enrichment.poll():
            self._notify()

    def _after_change(self) -> None:
        tel = self.telemetry
        tel.ticks = self.state.ticks
        tel.time_left = self.state.time_left
        tel.final_level = self.state.player.level

        for event in self.state.drain_events():
            self._record(event)
            if self.narrator is not None and self.enrichment is not None:
                self._narrate(event)

        if self.narrator is not None and self.enrichment is not None:
            self._discard_lost_target()
        self._last_target_id = self.state.target_id

        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # -- telemetry -------------------------------------------------------

    def _record(self, event: GameEvent) -> None:
        state = self.state
        tel = self.telemetry
        if event.type in (EventType.SESSION_STARTED, EventType.ROOM_ENTERED):
            if event.created:
                tel.rooms_visited += 1
            tel.max_depth = max(tel.max_depth, state.coordinates.z)
        elif event.type == EventType.MOB_KILLED:
            tel.mobs_killed += 1
            mob = self._find_mob(event.mob_id)
            if mob is not None and mob.type == MobType.BOSS:
                tel.bosses_killed += 1
            elif mob is not None and mob.is_elite:
                tel.elites_killed += 1
        elif event.type == EventType.ITEM_LOOTED:
            tel.items_looted += 1
        elif event.type == EventType.GAME_OVER:
            tel.final_result = "gameover"
        elif event.type == EventType.VICTORY:
            tel.final_result = "victory"

    # -- narration -------------------------------------------------------

    def _narrate(self, event: GameEvent) -> None:
        state = self.state
        room = state.current_room
        room_name = room.name if room is not None else "the dungeon"
        depth = state.coordinates.z

        if event.type == EventType.SESSION_STARTED:
            self._story("Describe the ominous beginning of a descent into an infinite abyss.")
        elif event.type == EventType.ROOM_ENTERED and room is not None:
            self._discard_portraits_outside(room)
            if event.created:
                self._story(
                    f"Describe entering a new room: {room.name}. "
                    f"It appears to be a {room.description}",
                    f"Depth: {depth}",
                )
            else:
                self._story(f"Describe returning to {room.name}.", f"Depth: {depth}")
            for mob in room.living_mobs:
                if mob.type == MobType.BOSS:
                    self._request_portrait(mob, room_name, dead=False)
        elif event.type == EventType.TARGET_ENGAGED:
            mob = self._find_mob(event.mob_id)
            if mob is not None:
                self._request_portrait(mob, room_name, dead=False)
                if event.created:
                    self._story(
                        f"Describe a hostile {mob.name} noticing the player "
                        "and preparing to attack.",
                        f"Room: {room_name}",
                    )
        elif event.type == EventType.MOB_KILLED:
            mob = self._find_mob(event.mob_id)
            if mob is not None:
                self._story(f"Describe the brutal death of a {mob.name}.", f"Room: {room_name}")
                self._request_portrait(mob, room_name, dead=True)
        elif event.type == EventType.RESTED:
            self._story("Describe a brief, uneasy moment of rest in the darkness.")
        elif event.type == EventType.CHAT:
            self._story(
                f'The player asks/says: "{event.text}". React to this as the Dungeon Master.',
                f"Current Room: {room_name}",
            )

    def _story(self, prompt: str, context: str = "") -> None:
        key = f"{_STORY_KEY}{self._story_counter}"
        self._story_counter += 1

        def apply(text: str) -> None:
            self.state.add_log(text.strip(), LogType.STORY)

        self.enrichment.submit(key, self.narrator.narrate, prompt, context, on_result=apply)

    def _request_portrait(self, mob: Mob, room_name: str, dead: bool) -> None:
        """Ask for a boss portrait unless one exists or is on its way."""
        if not self.narrator.supports_portraits:
            return
        if mob.type != MobType.BOSS or mob.is_generating:
            return
        if (dead and mob.dead_image_url) or (not dead and mob.image_url):
            return

        mob_id = mob.id
        key = f"{_PORTRAIT_KEY}{mob_id}"

        def apply(image: str) -> None:
            target = self._find_mob(mob_id)
            if target is None:
                return
            target.is_generating = False
            if dead:
                target.dead_image_url = image
            else:
                target.image_url = image

        def abandon() -> None:
            target = self._find_mob(mob_id)
            if target is not None:
                target.is_generating = False

        if self.enrichment.submit(
            key,
            self.narrator.portrait,
            portrait_prompt(mob, room_name, dead),
            on_result=apply,
            on_abandon=abandon,
        ):
            mob.is_generating = True

    def _discard_portraits_outside(self, room: Room) -> None:
        """Drop portrait jobs for mobs the player has walked away from."""
        here = {mob.id for mob in room.mobs}
        for key in self.enrichment.pending_keys:
            if key.startswith(_PORTRAIT_KEY) and key[len(_PORTRAIT_KEY):] not in here:
                self.enrichment.discard(key)

    def _discard_lost_target(self) -> None:
        lost = self._last_target_id
        if lost is None or lost == self.state.target_id:
            return
        self.enrichment.discard(f"{_PORTRAIT_KEY}{lost}")

    def _find_mob(self, mob_id: str | None) -> Mob | None:
        """Find a mob by id in whichever room holds it."""
        if mob_id is None:
            return None
        room = self.state.current_room
        if room is not None:
            mob = room.find_mob(mob_id)
            if mob is not None:
                return mob
        for other in self.state.world.all_rooms():
            mob = other.find_mob(mob_id)
            if mob is not None:
                return mob
        return None
