"""Heuristic-based agent that dives the shaft and climbs back out.

The ``HeuristicAgent`` is a hand-crafted policy using a priority-based
decision system, evaluated once per tick:

- **Survival**: drink a potion when low, flee a fight it cannot afford.
- **Fighting**: open with Bash, follow with Smite while mana allows, then
  let the tick engine's auto-combat do the rest.
- **Housekeeping**: read tomes, equip strict upgrades, loot the floor.
- **Navigation**: stays in the main shaft, descending until the remaining
  countdown only just covers the climb back, then heads up to win.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shaft_crawler.config import GameConfig
from shaft_crawler.sim.content.tables import HEALING_POTION_NAME
from shaft_crawler.sim.core.entities import Item, MobType
from shaft_crawler.sim.core.game_state import Direction, GamePhase
from shaft_crawler.sim.play_agents.base import PlayAgent
from shaft_crawler.sim.session import PlayerAction

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Mob, Player
    from shaft_crawler.sim.core.game_state import Room
    from shaft_crawler.sim.session import SessionSnapshot

_LOW_HP = 0.35
_ENGAGE_HP = 0.6

# Ticks budgeted per level of climb: one action, plus stamina regen slack.
_CLIMB_TICKS_PER_LEVEL = 3


def _item_score(item: Item | None) -> int:
    if item is None or item.stats is None:
        return 0
    s = item.stats
    return s.damage * 2 + s.armor * 2 + s.strength + s.dexterity + s.intelligence


class HeuristicAgent(PlayAgent):
    """Priority-driven agent for batch simulation.

    Parameters
    ----------
    config:
        Session tunables, used to judge stamina and mana costs.
    retreat_margin:
        Extra ticks kept in hand before turning back toward the surface.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        retreat_margin: int = 40,
    ) -> None:
        self._config = config or GameConfig()
        self._retreat_margin = retreat_margin

    # ------------------------------------------------------------------
    # PlayAgent interface
    # ------------------------------------------------------------------

    def choose_action(self, snapshot: SessionSnapshot) -> PlayerAction | None:
        if snapshot.phase != GamePhase.PLAYING or snapshot.current_room is None:
            return None

        player = snapshot.player
        room = snapshot.current_room
        target = snapshot.target
        fighting = target is not None and target.is_alive

        if player.hp < player.max_hp * _LOW_HP:
            potion = self._find_potion(player)
            if potion is not None:
                return PlayerAction("use_item", potion.id)
            if fighting and player.move >= self._config.flee_min_move:
                return PlayerAction("flee")

        if fighting:
            return self._fight(snapshot)

        tome = next((i for i in player.inventory if i.stat_upgrade is not None), None)
        if tome is not None:
            return PlayerAction("use_item", tome.id)

        upgrade = self._best_upgrade(player)
        if upgrade is not None:
            return PlayerAction("equip", upgrade.id)

        if room.items:
            return PlayerAction("loot", room.items[0].id)

        if self._must_climb(snapshot):
            return self._climb(snapshot)

        if player.hp >= player.max_hp * _ENGAGE_HP:
            mob = self._pick_mob(room, player)
            if mob is not None:
                return PlayerAction("attack", mob.id)

        if player.move < self._config.move_cost or player.hp < player.max_hp * _ENGAGE_HP:
            return None

        return self._descend(snapshot)

    # ------------------------------------------------------------------
    # Fighting
    # ------------------------------------------------------------------

    def _fight(self, snapshot: SessionSnapshot) -> PlayerAction | None:
        cooldowns = snapshot.cooldowns
        if cooldowns.get("bash", 0) == 0:
            return PlayerAction("use_skill", "bash")
        if (
            cooldowns.get("fireball", 0) == 0
            and snapshot.player.mana >= self._config.fireball_mana_cost
        ):
            return PlayerAction("use_skill", "fireball")
        return None

    @staticmethod
    def _pick_mob(room: Room, player: Player) -> Mob | None:
        """Weakest living mob that is not far above the player's level."""
        candidates = [
            m for m in room.living_mobs
            if m.type != MobType.BOSS or m.level <= player.level + 2
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda m: (m.hp, m.damage))

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    @staticmethod
    def _find_potion(player: Player) -> Item | None:
        for item in player.inventory:
            if item.name == HEALING_POTION_NAME:
                return item
        return None

    @staticmethod
    def _best_upgrade(player: Player) -> Item | None:
        best: Item | None = None
        best_gain = 0
        for item in player.inventory:
            if not item.is_equipment:
                continue
            gain = _item_score(item) - _item_score(player.equipment.get(item.type))
            if gain > best_gain:
                best, best_gain = item, gain
        return best

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _must_climb(self, snapshot: SessionSnapshot) -> bool:
        depth = snapshot.coordinates.z
        needed = (depth + 1) * _CLIMB_TICKS_PER_LEVEL + self._retreat_margin
        return snapshot.time_left <= needed

    def _climb(self, snapshot: SessionSnapshot) -> PlayerAction | None:
        if snapshot.player.move < self._config.move_cost:
            return None
        coords = snapshot.coordinates
        if coords.is_shaft:
            return PlayerAction("move", Direction.UP.value)
        # Side rooms always open back toward the shaft.
        if coords.y > 0:
            return PlayerAction("move", Direction.SOUTH.value)
        if coords.y < 0:
            return PlayerAction("move", Direction.NORTH.value)
        if coords.x > 0:
            return PlayerAction("move", Direction.WEST.value)
        return PlayerAction("move", Direction.EAST.value)

    def _descend(self, snapshot: SessionSnapshot) -> PlayerAction | None:
        room = snapshot.current_room
        if room is not None and room.exits.down:
            return PlayerAction("move", Direction.DOWN.value)
        return None
