"""Player action handlers.

Every handler takes the session's ``GameState`` explicitly, validates its
preconditions, then mutates the state and writes log entries.  A handler
returns ``True`` when the action was applied and ``False`` when it was
rejected; a rejected action leaves the state untouched apart from the log
line explaining why.  No handler raises for a gameplay condition.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from shaft_crawler.config import GameConfig, starting_player
from shaft_crawler.sim.content.tables import (
    ENTRANCE_ROOM_DESCRIPTION,
    ENTRANCE_ROOM_NAME,
    HEALING_POTION_AMOUNT,
    HEALING_POTION_NAME,
)
from shaft_crawler.sim.core.entities import MobType
from shaft_crawler.sim.core.game_state import (
    Coordinates,
    Direction,
    EventType,
    GamePhase,
    GameState,
    LogType,
    World,
)
from shaft_crawler.sim.dungeon.rooms import generate_room
from shaft_crawler.sim.dungeon.world import get_or_generate_room
from shaft_crawler.sim.mechanics.combat import strike_mob
from shaft_crawler.sim.mechanics.stats import effective_stats

if TYPE_CHECKING:
    from shaft_crawler.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

SKILL_BASH = "bash"
SKILL_FIREBALL = "fireball"
SKILLS: tuple[str, ...] = (SKILL_BASH, SKILL_FIREBALL)
_SKILL_ALIASES = {"smite": SKILL_FIREBALL}


# ---------------------------------------------------------------------------
# Session start
# ---------------------------------------------------------------------------

def new_game(
    rng: GameRNG,
    config: GameConfig | None = None,
    player_name: str = "Drifter",
) -> GameState:
    """Create a ``PLAYING`` state standing in the surface entrance.

    The entrance is a shaft room at ``(0, 0, 0)`` with its mobs cleared.  It
    has no up exit, but climbing out of it still wins the run.
    """
    config = config or GameConfig()

    entrance = generate_room(rng, 0, 0, 0, max_depth=config.max_depth)
    entrance.name = ENTRANCE_ROOM_NAME
    entrance.description = ENTRANCE_ROOM_DESCRIPTION
    entrance.mobs = []
    entrance.visited = True

    world = World()
    world.add(entrance)

    state = GameState(
        phase=GamePhase.PLAYING,
        time_left=config.max_time,
        coordinates=Coordinates(x=0, y=0, z=0),
        current_room_id=entrance.id,
        world=world,
        player=starting_player(player_name),
        max_log_entries=config.max_log_entries,
    )
    state.add_log(f"The descent begins. Good luck, {player_name}.", LogType.INFO)
    state.emit(EventType.SESSION_STARTED, room_id=entrance.id, created=True)
    logger.info("New session started (seed %s)", getattr(rng, "seed", None))
    return state


# ---------------------------------------------------------------------------
# Movement and recovery
# ---------------------------------------------------------------------------

def move(
    state: GameState,
    rng: GameRNG,
    direction: Direction | str,
    config: GameConfig | None = None,
) -> bool:
    """Step one room in *direction*, generating the destination if new.

    Climbing above depth 0 leaves the shaft and wins the run.
    """
    config = config or GameConfig()
    if not state.is_playing:
        return False

    try:
        direction = Direction(direction)
    except ValueError:
        state.add_log(f"You can't go {direction!s}.", LogType.INFO)
        return False

    player = state.player
    if player.move < config.move_cost:
        state.add_log("Too exhausted to move!", LogType.INFO)
        return False

    destination = state.coordinates.step(direction)

    if destination.z < 0:
        state.add_log("You haul yourself out of the shaft into daylight!", LogType.GAIN)
        state.end(GamePhase.VICTORY)
        return True

    room = state.current_room
    if config.enforce_exits and room is not None and not room.exits.is_open(direction):
        state.add_log(f"There is no way {direction.value} from here.", LogType.INFO)
        return False
    if destination.z > config.max_depth:
        state.add_log("The shaft ends here.", LogType.INFO)
        return False

    next_room, created = get_or_generate_room(
        state.world, rng, destination, max_depth=config.max_depth,
    )
    next_room.visited = True

    state.current_room_id = next_room.id
    state.coordinates = destination
    player.move -= config.move_cost
    state.target_id = None
    state.add_log(
        f"You move {direction.value} to {destination.x},{destination.y} "
        f"(Depth {destination.z}).",
        LogType.INFO,
    )

    if any(m.type == MobType.BOSS for m in next_room.living_mobs):
        state.add_log("A presence sends shivers down your spine...", LogType.DANGER)

    state.emit(EventType.ROOM_ENTERED, room_id=next_room.id, created=created)
    return True


def rest(state: GameState, config: GameConfig | None = None) -> bool:
    """Trade countdown time for HP, mana and stamina."""
    config = config or GameConfig()
    if not state.is_playing:
        return False

    state.add_log("You rest for a moment...", LogType.INFO)
    player = state.player
    player.heal(config.rest_hp)
    player.restore_mana(config.rest_mana)
    player.restore_move(config.rest_move)
    state.time_left = max(0, state.time_left - config.rest_time_cost)
    state.emit(EventType.RESTED, room_id=state.current_room_id)

    if state.time_left == 0:
        state.add_log("The shaft collapses around you. Time is up.", LogType.DANGER)
        state.end(GamePhase.GAMEOVER)
    return True


# ---------------------------------------------------------------------------
# Combat
# ---------------------------------------------------------------------------

def attack(state: GameState, mob_id: str) -> bool:
    """Engage the mob with *mob_id*, or inspect it if it is a corpse."""
    if not state.is_playing:
        return False

    room = state.current_room
    mob = room.find_mob(mob_id) if room is not None else None
    if mob is None:
        state.add_log("There is nothing like that here.", LogType.INFO)
        return False

    if mob.is_dead:
        state.target_id = mob.id
        state.add_log(f"You inspect the corpse of {mob.name}.", LogType.INFO)
        return True

    is_new_target = state.target_id != mob.id
    state.target_id = mob.id
    state.add_log(f"You engage the {mob.name}!", LogType.COMBAT)
    state.emit(
        EventType.TARGET_ENGAGED,
        room_id=room.id,
        mob_id=mob.id,
        created=is_new_target,
    )
    return True


def flee(state: GameState, rng: GameRNG, config: GameConfig | None = None) -> bool:
    """Try to break off combat.  Costs stamina whether or not it works."""
    config = config or GameConfig()
    if not state.is_playing:
        return False

    if state.living_target is None:
        state.add_log("There is nothing to flee from.", LogType.INFO)
        return False

    player = state.player
    if player.move < config.flee_min_move:
        state.add_log("Too exhausted to flee!", LogType.DANGER)
        return False

    if rng.random_float() > 0.5:
        state.target_id = None
        player.move -= config.flee_cost
        state.add_log("You scrambled away from combat!", LogType.INFO)
    else:
        player.move -= config.flee_fail_cost
        state.add_log("Failed to escape!", LogType.DANGER)
    return True


def use_skill(state: GameState, name: str, config: GameConfig | None = None) -> bool:
    """Fire a skill at the current target.

    ``bash`` hits for ``floor(str * 1.5)``; ``fireball`` (Smite) costs mana
    and hits for ``int * 2``.  Each skill has its own cooldown.  Skills
    never provoke a counter-attack.
    """
    config = config or GameConfig()
    if not state.is_playing:
        return False

    skill = _SKILL_ALIASES.get(name.lower(), name.lower())
    if skill not in SKILLS:
        state.add_log(f"You don't know how to {name}.", LogType.INFO)
        return False

    room = state.current_room
    target = state.living_target
    if target is None or room is None:
        state.add_log("You have no target.", LogType.INFO)
        return False

    remaining = state.cooldowns.get(skill, 0)
    if remaining > 0:
        state.add_log(f"{skill.capitalize()} is not ready ({remaining}s).", LogType.INFO)
        return False

    stats = effective_stats(state.player)

    if skill == SKILL_BASH:
        damage = math.floor(stats.strength * 1.5)
        state.add_log(f"You BASH {target.name} for {damage} damage!", LogType.COMBAT)
        state.cooldowns[SKILL_BASH] = config.bash_cooldown
    else:
        if state.player.mana < config.fireball_mana_cost:
            state.add_log("Not enough mana!", LogType.INFO)
            return False
        state.player.mana -= config.fireball_mana_cost
        damage = stats.intelligence * 2
        state.add_log(f"You cast SMITE on {target.name} for {damage} damage!", LogType.COMBAT)
        state.cooldowns[SKILL_FIREBALL] = config.fireball_cooldown

    strike_mob(state, room, target, damage)
    return True


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

def loot(state: GameState, item_id: str) -> bool:
    """Pick an item up off the floor of the current room."""
    if not state.is_playing:
        return False

    room = state.current_room
    if room is None or room.find_item(item_id) is None:
        state.add_log("That item is not here.", LogType.INFO)
        return False

    item = room.take_item(item_id)
    state.player.inventory.append(item)
    state.add_log(f"You picked up: {item.name}", LogType.LOOT)
    state.emit(EventType.ITEM_LOOTED, room_id=room.id, item_id=item.id)
    return True


def equip(state: GameState, item_id: str) -> bool:
    """Move an inventory item into its slot, returning the old one to the pack."""
    if not state.is_playing:
        return False

    player = state.player
    item = player.find_in_inventory(item_id)
    if item is None:
        state.add_log("You don't have that.", LogType.INFO)
        return False
    if not item.is_equipment:
        state.add_log(f"You can't equip {item.name}.", LogType.INFO)
        return False

    player.remove_from_inventory(item_id)
    previous = player.equipment.put(item.type, item)
    if previous is not None:
        player.inventory.append(previous)
    state.add_log(f"You equipped {item.name}.", LogType.INFO)
    return True


def drop(state: GameState, item_id: str) -> bool:
    """Discard an inventory item.  Dropped items are gone for good."""
    if not state.is_playing:
        return False

    player = state.player
    if player.find_in_inventory(item_id) is None:
        state.add_log("You don't have that.", LogType.INFO)
        return False

    item = player.remove_from_inventory(item_id)
    state.add_log(f"You dropped {item.name}.", LogType.INFO)
    return True


def use_item(state: GameState, item_id: str) -> bool:
    """Consume a tome or a healing potion from the inventory."""
    if not state.is_playing:
        return False

    player = state.player
    item = player.find_in_inventory(item_id)
    if item is None:
        state.add_log("You don't have that.", LogType.INFO)
        return False

    if item.stat_upgrade is not None:
        upgrade = item.stat_upgrade
        player.strength += upgrade.strength
        player.dexterity += upgrade.dexterity
        player.intelligence += upgrade.intelligence
        player.max_hp += upgrade.hp
        player.hp += upgrade.hp
        player.max_mana += upgrade.mana
        player.mana += upgrade.mana
        player.remove_from_inventory(item_id)
        state.add_log(f"You used {item.name} and grew stronger!", LogType.GAIN)
        return True

    if item.name == HEALING_POTION_NAME:
        player.heal(HEALING_POTION_AMOUNT)
        player.remove_from_inventory(item_id)
        state.add_log("You drank the potion and feel refreshed.", LogType.GAIN)
        return True

    state.add_log(f"You can't use {item.name}.", LogType.INFO)
    return False


# ---------------------------------------------------------------------------
# Flavor
# ---------------------------------------------------------------------------

def chat(state: GameState, message: str) -> bool:
    """Say something to the dungeon master.  No gameplay effect."""
    if not state.is_playing:
        return False
    message = message.strip()
    if not message:
        return False
    state.add_log(f"You: {message}", LogType.INFO)
    state.emit(EventType.CHAT, room_id=state.current_room_id, text=message)
    return True
