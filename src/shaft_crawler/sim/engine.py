"""Tick engine -- the fixed-period heartbeat of a session.

Each tick, while the session is ``PLAYING``:

1. **Timer**: one unit comes off the countdown.  Hitting zero ends the
   session (``GAMEOVER``) and nothing else runs that tick.
2. **Cooldowns**: every active skill cooldown drops by one, floored at 0.
3. **Regen or combat**: with no living target the player regenerates;
   otherwise one combat round is fought against the target.

A combat round is the player's swing followed by the mob's.  If the
player's swing is lethal the mob is handled as dead and does not swing
back.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shaft_crawler.config import GameConfig
from shaft_crawler.sim.core.game_state import GamePhase, LogType
from shaft_crawler.sim.mechanics.combat import (
    mob_attack,
    player_hit_chance,
    roll_player_damage,
    strike_mob,
)
from shaft_crawler.sim.mechanics.stats import effective_stats

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Mob
    from shaft_crawler.sim.core.game_state import GameState, Room
    from shaft_crawler.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)


class TickEngine:
    """Advances a ``GameState`` one tick at a time.

    Parameters
    ----------
    rng:
        Combat RNG (hit and damage rolls).
    config:
        Session tunables (regen amounts).
    """

    def __init__(self, rng: GameRNG, config: GameConfig | None = None) -> None:
        self.rng = rng
        self.config = config or GameConfig()

    def tick(self, state: GameState) -> bool:
        """Run one tick.  Returns ``False`` if the session is not playing."""
        if state.phase != GamePhase.PLAYING:
            return False

        state.ticks += 1

        if self._advance_timer(state):
            return True

        self._decay_cooldowns(state)

        target = state.living_target
        room = state.current_room
        if target is None or room is None:
            self._regenerate(state)
        else:
            self.combat_round(state, room, target)
        return True

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _advance_timer(self, state: GameState) -> bool:
        """Count down.  Returns ``True`` if time ran out this tick."""
        state.time_left = max(0, state.time_left - 1)
        if state.time_left > 0:
            return False
        state.add_log("The shaft collapses around you. Time is up.", LogType.DANGER)
        state.end(GamePhase.GAMEOVER)
        return True

    def _decay_cooldowns(self, state: GameState) -> None:
        for skill, remaining in state.cooldowns.items():
            if remaining > 0:
                state.cooldowns[skill] = max(0, remaining - 1)

    def _regenerate(self, state: GameState) -> None:
        player = state.player
        player.heal(self.config.regen_hp)
        player.restore_mana(self.config.regen_mana)
        player.restore_move(self.config.regen_move)

    def combat_round(self, state: GameState, room: Room, target: Mob) -> None:
        """Exchange one round of blows between the player and *target*."""
        stats = effective_stats(state.player)

        if self.rng.random_float() < player_hit_chance(stats):
            damage = roll_player_damage(self.rng, stats)
            state.add_log(
                f"You hit {target.name} for {damage} damage!", LogType.COMBAT,
            )
            if strike_mob(state, room, target, damage):
                return
        else:
            state.add_log(f"You missed {target.name}!", LogType.INFO)

        mob_attack(state, self.rng, target, stats)
