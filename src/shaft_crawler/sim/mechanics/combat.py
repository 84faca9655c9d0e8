"""Combat resolution shared by the tick engine and player skills.

Implements the auto-attack exchange:
    player: hit chance 0.6 + dex*0.02, damage max(1, derived + rand[0,1])
    mob:    hit chance 0.5, damage max(1, mob damage - armor // 2)

Any blow that brings a mob to 0 HP goes through ``handle_mob_death``,
whether it came from an auto-attack or a skill.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from shaft_crawler.sim.core.game_state import EventType, GamePhase, LogType
from shaft_crawler.sim.mechanics.progression import award_xp

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Item, Mob
    from shaft_crawler.sim.core.game_state import GameState, Room
    from shaft_crawler.sim.core.rng import GameRNG
    from shaft_crawler.sim.mechanics.stats import EffectiveStats

logger = logging.getLogger(__name__)

BASE_HIT_CHANCE = 0.6
DEX_HIT_BONUS = 0.02
MOB_HIT_CHANCE = 0.5


def player_hit_chance(stats: EffectiveStats) -> float:
    return BASE_HIT_CHANCE + stats.dexterity * DEX_HIT_BONUS


def roll_player_damage(rng: GameRNG, stats: EffectiveStats) -> int:
    return max(1, stats.damage + rng.random_int(0, 1))


def mob_hit_damage(mob: Mob, stats: EffectiveStats) -> int:
    return max(1, mob.damage - stats.armor // 2)


def strike_mob(state: GameState, room: Room, mob: Mob, damage: int) -> bool:
    """Apply *damage* to *mob* in *room*.

    The mob is the live record inside the room, so there is nothing else
    to keep in sync.  Returns ``True`` if the blow was lethal.
    """
    mob.take_damage(max(0, damage))
    if mob.hp > 0:
        return False
    handle_mob_death(state, room, mob)
    return True


def handle_mob_death(state: GameState, room: Room, mob: Mob) -> list[Item]:
    """Award XP, drop loot to the floor and leave the corpse in the room.

    Returns the items that were dropped.
    """
    player = state.player
    state.add_log(f"You killed {mob.name}! (+{mob.xp_value} XP)", LogType.GAIN)

    if award_xp(player, mob.xp_value):
        state.add_log(f"LEVEL UP! You are now level {player.level}.", LogType.GAIN)
        state.emit(EventType.LEVEL_UP, text=str(player.level))

    dropped = mob.kill()
    if dropped:
        room.items.extend(dropped)
        names = ", ".join(item.name for item in dropped)
        state.add_log(f"{mob.name} dropped: {names}", LogType.LOOT)

    state.emit(EventType.MOB_KILLED, room_id=room.id, mob_id=mob.id)
    logger.debug("%s died in %s, dropped %d items", mob.name, room.id, len(dropped))
    return dropped


def mob_attack(
    state: GameState,
    rng: GameRNG,
    mob: Mob,
    stats: EffectiveStats,
) -> bool:
    """Let *mob* swing at the player.  Returns ``True`` on a hit.

    A lethal hit ends the session with ``GAMEOVER``.
    """
    if rng.random_float() >= MOB_HIT_CHANCE:
        state.add_log(f"{mob.name} misses you.", LogType.INFO)
        return False

    damage = mob_hit_damage(mob, stats)
    state.player.take_damage(damage)
    state.add_log(f"{mob.name} hits you for {damage} damage!", LogType.DANGER)

    if state.player.is_dead and state.phase == GamePhase.PLAYING:
        state.add_log(f"You were slain by {mob.name}!", LogType.DANGER)
        state.end(GamePhase.GAMEOVER)
    return True
