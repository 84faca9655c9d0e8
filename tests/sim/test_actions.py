"""Tests for player action handlers."""

import pytest

from shaft_crawler.config import GameConfig
from shaft_crawler.sim import actions
from shaft_crawler.sim.content.tables import HEALING_POTION_NAME
from shaft_crawler.sim.core.entities import Item, ItemStats, ItemType, Rarity, StatUpgrade
from shaft_crawler.sim.core.game_state import EventType, Exits, GamePhase, LogType
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.engine import TickEngine


# ======================================================================
# Helpers
# ======================================================================


def _make_weapon(item_id: str = "w1", damage: int = 6) -> Item:
    return Item(
        id=item_id, name="Steel Blade", type=ItemType.WEAPON,
        rarity=Rarity.UNCOMMON, stats=ItemStats(damage=damage),
    )


def _make_potion(item_id: str = "p1") -> Item:
    return Item(
        id=item_id, name=HEALING_POTION_NAME, type=ItemType.CONSUMABLE,
        rarity=Rarity.COMMON,
    )


def _make_tome(item_id: str = "t1") -> Item:
    return Item(
        id=item_id, name="Tome of Strength", type=ItemType.CONSUMABLE,
        rarity=Rarity.LEGENDARY, stat_upgrade=StatUpgrade(strength=1),
    )


def _event_types(state) -> list[EventType]:
    return [e.type for e in state.drain_events()]


# ======================================================================
# new_game
# ======================================================================


class TestNewGame:
    def test_entrance(self):
        state = actions.new_game(GameRNG(1), player_name="Ayla")

        assert state.phase == GamePhase.PLAYING
        assert state.time_left == 900
        assert (state.coordinates.x, state.coordinates.y, state.coordinates.z) == (0, 0, 0)
        room = state.current_room
        assert room.id == "room_0_0_0"
        assert room.mobs == []
        assert not room.exits.up
        assert room.exits.down
        assert room.visited
        assert len(state.world) == 1
        assert state.logs[0].text == "The descent begins. Good luck, Ayla."
        assert state.player.name == "Ayla"

    def test_emits_session_started(self):
        state = actions.new_game(GameRNG(1))
        events = state.drain_events()
        assert [e.type for e in events] == [EventType.SESSION_STARTED]
        assert events[0].created

    def test_config_applied(self):
        state = actions.new_game(GameRNG(1), GameConfig(max_time=60, max_log_entries=5))
        assert state.time_left == 60
        assert state.max_log_entries == 5


# ======================================================================
# move
# ======================================================================


class TestMove:
    def test_descend_creates_room(self):
        state = actions.new_game(GameRNG(1))
        state.drain_events()

        assert actions.move(state, GameRNG(2), "down")

        assert (state.coordinates.x, state.coordinates.y, state.coordinates.z) == (0, 0, 1)
        assert state.current_room_id == "room_0_0_1"
        assert "room_0_0_1" in state.world
        assert state.current_room.visited
        assert state.player.move == 18
        assert state.logs[-1].text.startswith("You move down to 0,0 (Depth 1).")
        events = state.drain_events()
        assert [e.type for e in events] == [EventType.ROOM_ENTERED]
        assert events[0].created

    def test_revisit_reuses_room(self):
        state = actions.new_game(GameRNG(1))
        rng = GameRNG(2)
        actions.move(state, rng, "down")
        first = state.current_room
        if first.mobs:
            first.mobs[0].kill()

        actions.move(state, rng, "up")
        state.drain_events()
        actions.move(state, rng, "down")

        assert state.current_room is first
        if first.mobs:
            assert first.mobs[0].is_dead
        assert not state.drain_events()[0].created
        assert len(state.world) == 2

    def test_surfacing_wins(self):
        state = actions.new_game(GameRNG(1))
        state.drain_events()
        assert not state.current_room.exits.up

        assert actions.move(state, GameRNG(2), "up")

        assert state.phase == GamePhase.VICTORY
        assert _event_types(state) == [EventType.VICTORY]
        assert not actions.move(state, GameRNG(2), "down")

    def test_unknown_direction(self, make_state):
        state = make_state()
        assert not actions.move(state, GameRNG(0), "sideways")
        assert state.logs[-1].text == "You can't go sideways."

    def test_exhausted(self, make_state):
        state = make_state(move=1)
        assert not actions.move(state, GameRNG(0), "down")
        assert state.logs[-1].text == "Too exhausted to move!"
        assert state.coordinates.z == 1

    def test_closed_exit(self, make_state):
        state = make_state(exits=Exits(up=True))
        assert not actions.move(state, GameRNG(0), "east")
        assert state.player.move == 20
        assert len(state.world) == 1

    def test_closed_exit_allowed_when_not_enforced(self, make_state):
        state = make_state(exits=Exits(up=True))
        config = GameConfig(enforce_exits=False)
        assert actions.move(state, GameRNG(0), "east", config)
        assert state.current_room_id == "room_1_0_1"

    def test_depth_floor(self, make_state):
        state = make_state(coords=(0, 0, 3))
        assert not actions.move(state, GameRNG(0), "down", GameConfig(max_depth=3))
        assert state.logs[-1].text == "The shaft ends here."

    def test_clears_target(self, make_state, make_mob):
        mob = make_mob()
        state = make_state(mobs=[mob])
        state.target_id = mob.id
        actions.move(state, GameRNG(0), "down")
        assert state.target_id is None

    def test_boss_presence(self, make_state):
        state = make_state(coords=(0, 0, 9))
        actions.move(state, GameRNG(0), "down")
        assert state.logs[-1].text == "A presence sends shivers down your spine..."
        assert state.logs[-1].type == LogType.DANGER


# ======================================================================
# rest
# ======================================================================


class TestRest:
    def test_recovers_and_costs_time(self, make_state):
        state = make_state(hp=10, mana=2, move=4)
        assert actions.rest(state)
        assert state.player.hp == 15
        assert state.player.mana == 7
        assert state.player.move == 14
        assert state.time_left == 890
        assert _event_types(state) == [EventType.RESTED]

    def test_capped(self, make_state):
        state = make_state(hp=18)
        actions.rest(state)
        assert state.player.hp == 20

    def test_resting_out_the_clock(self, make_state):
        state = make_state(time_left=5)
        actions.rest(state)
        assert state.time_left == 0
        assert state.phase == GamePhase.GAMEOVER


# ======================================================================
# attack / flee
# ======================================================================


class TestAttack:
    def test_engage(self, make_state, make_mob):
        mob = make_mob()
        state = make_state(mobs=[mob])

        assert actions.attack(state, mob.id)

        assert state.target_id == mob.id
        assert state.logs[-1].text == "You engage the Giant Rat!"
        events = state.drain_events()
        assert events[0].type == EventType.TARGET_ENGAGED
        assert events[0].created

    def test_reengage_same_target(self, make_state, make_mob):
        mob = make_mob()
        state = make_state(mobs=[mob])
        actions.attack(state, mob.id)
        state.drain_events()
        actions.attack(state, mob.id)
        assert not state.drain_events()[0].created

    def test_inspect_corpse(self, make_state, make_mob):
        corpse = make_mob(hp=0, is_dead=True)
        state = make_state(mobs=[corpse])

        assert actions.attack(state, corpse.id)

        assert state.target_id == corpse.id
        assert state.logs[-1].text == "You inspect the corpse of Giant Rat."
        assert state.drain_events() == []

    def test_unknown_mob(self, make_state):
        state = make_state()
        assert not actions.attack(state, "ghost")
        assert state.target_id is None


class TestFlee:
    def test_success(self, make_state, make_mob, scripted_rng):
        mob = make_mob()
        state = make_state(mobs=[mob])
        state.target_id = mob.id

        assert actions.flee(state, scripted_rng(floats=[0.9]))

        assert state.target_id is None
        assert state.player.move == 10
        assert state.logs[-1].text == "You scrambled away from combat!"

    def test_failure(self, make_state, make_mob, scripted_rng):
        mob = make_mob()
        state = make_state(mobs=[mob])
        state.target_id = mob.id

        assert actions.flee(state, scripted_rng(floats=[0.5]))

        assert state.target_id == mob.id
        assert state.player.move == 15
        assert state.logs[-1].text == "Failed to escape!"

    def test_too_tired(self, make_state, make_mob):
        mob = make_mob()
        state = make_state(mobs=[mob], move=9)
        state.target_id = mob.id
        assert not actions.flee(state, GameRNG(0))
        assert state.player.move == 9

    def test_nothing_to_flee(self, make_state):
        assert not actions.flee(make_state(), GameRNG(0))


# ======================================================================
# use_skill
# ======================================================================


class TestUseSkill:
    def _engaged(self, make_state, make_mob, hp=30, **player):
        mob = make_mob(hp=hp)
        state = make_state(mobs=[mob], **player)
        state.target_id = mob.id
        return state, mob

    def test_bash(self, make_state, make_mob):
        state, mob = self._engaged(make_state, make_mob)

        assert actions.use_skill(state, "bash")

        assert mob.hp == 30 - 7
        assert state.cooldowns["bash"] == 5
        assert state.logs[-1].text == "You BASH Giant Rat for 7 damage!"

    def test_bash_on_cooldown(self, make_state, make_mob):
        state, mob = self._engaged(make_state, make_mob)
        actions.use_skill(state, "bash")

        assert not actions.use_skill(state, "bash")
        assert mob.hp == 23

    def test_fireball(self, make_state, make_mob):
        state, mob = self._engaged(make_state, make_mob)

        assert actions.use_skill(state, "fireball")

        assert mob.hp == 30 - 6
        assert state.player.mana == 5
        assert state.cooldowns["fireball"] == 3
        assert state.logs[-1].text == "You cast SMITE on Giant Rat for 6 damage!"

    def test_smite_alias(self, make_state, make_mob):
        state, _ = self._engaged(make_state, make_mob)
        assert actions.use_skill(state, "Smite")
        assert state.cooldowns["fireball"] == 3

    def test_fireball_without_mana(self, make_state, make_mob):
        state, mob = self._engaged(make_state, make_mob, mana=4)

        assert not actions.use_skill(state, "fireball")

        assert mob.hp == 30
        assert state.player.mana == 4
        assert "fireball" not in state.cooldowns
        assert state.logs[-1].text == "Not enough mana!"

    def test_no_target(self, make_state):
        state = make_state()
        assert not actions.use_skill(state, "bash")
        assert "bash" not in state.cooldowns

    def test_unknown_skill(self, make_state, make_mob):
        state, _ = self._engaged(make_state, make_mob)
        assert not actions.use_skill(state, "dance")

    def test_lethal_skill_kills_without_retaliation(self, make_state, make_mob):
        state, mob = self._engaged(make_state, make_mob, hp=5)

        actions.use_skill(state, "bash")

        assert mob.is_dead
        assert state.player.xp == 15
        assert state.player.hp == 20
        assert EventType.MOB_KILLED in _event_types(state)


# ======================================================================
# Items
# ======================================================================


class TestLoot:
    def test_pick_up(self, make_state):
        state = make_state()
        potion = _make_potion()
        state.current_room.items.append(potion)

        assert actions.loot(state, potion.id)

        assert state.current_room.items == []
        assert state.player.inventory == [potion]
        assert state.logs[-1].text == f"You picked up: {HEALING_POTION_NAME}"
        assert _event_types(state) == [EventType.ITEM_LOOTED]

    def test_missing(self, make_state):
        assert not actions.loot(make_state(), "nope")


class TestEquip:
    def test_swap_returns_old_to_inventory(self, make_state):
        state = make_state()
        blade = _make_weapon()
        state.player.inventory.append(blade)

        assert actions.equip(state, blade.id)

        assert state.player.equipment.weapon is blade
        assert [i.name for i in state.player.inventory] == ["Rusty Dagger"]

    def test_empty_slot(self, make_state):
        state = make_state()
        ring = Item(
            id="r1", name="Iron Ring", type=ItemType.ACCESSORY,
            rarity=Rarity.COMMON, stats=ItemStats(dexterity=1),
        )
        state.player.inventory.append(ring)
        actions.equip(state, ring.id)
        assert state.player.equipment.accessory is ring
        assert state.player.inventory == []

    def test_consumable_rejected(self, make_state):
        state = make_state()
        potion = _make_potion()
        state.player.inventory.append(potion)
        assert not actions.equip(state, potion.id)
        assert state.player.inventory == [potion]


class TestDrop:
    def test_drop_destroys(self, make_state):
        state = make_state()
        blade = _make_weapon()
        state.player.inventory.append(blade)

        assert actions.drop(state, blade.id)

        assert state.player.inventory == []
        assert state.current_room.items == []

    def test_missing(self, make_state):
        assert not actions.drop(make_state(), "nope")


class TestUseItem:
    def test_tome(self, make_state):
        state = make_state()
        state.player.inventory.append(_make_tome())

        assert actions.use_item(state, "t1")

        assert state.player.strength == 6
        assert state.player.inventory == []

    def test_vitality_tome_raises_current_and_max(self, make_state):
        state = make_state(hp=10, mana=4)
        state.player.inventory.append(
            _make_tome().model_copy(update={"stat_upgrade": StatUpgrade(hp=5, mana=3)}),
        )

        assert actions.use_item(state, "t1")

        assert (state.player.hp, state.player.max_hp) == (15, 25)
        assert (state.player.mana, state.player.max_mana) == (7, 13)

    def test_potion(self, make_state):
        state = make_state(hp=2)
        state.player.inventory.append(_make_potion())
        assert actions.use_item(state, "p1")
        assert state.player.hp == 20
        assert state.player.inventory == []

    def test_equipment_not_usable(self, make_state):
        state = make_state()
        state.player.inventory.append(_make_weapon())
        assert not actions.use_item(state, "w1")
        assert len(state.player.inventory) == 1


class TestChat:
    def test_chat(self, make_state):
        state = make_state()
        assert actions.chat(state, "  hello?  ")
        assert state.logs[-1].text == "You: hello?"
        events = state.drain_events()
        assert events[0].type == EventType.CHAT
        assert events[0].text == "hello?"

    def test_blank(self, make_state):
        assert not actions.chat(make_state(), "   ")


class TestNotPlaying:
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: actions.rest(s),
            lambda s: actions.attack(s, "m1"),
            lambda s: actions.use_skill(s, "bash"),
            lambda s: actions.loot(s, "x"),
            lambda s: actions.chat(s, "hi"),
            lambda s: actions.move(s, GameRNG(0), "down"),
        ],
    )
    def test_rejected_after_game_over(self, make_state, make_mob, call):
        state = make_state(mobs=[make_mob()])
        state.end(GamePhase.GAMEOVER)
        logs_before = len(state.logs)
        assert not call(state)
        assert len(state.logs) == logs_before


# ======================================================================
# End-to-end
# ======================================================================


class TestEndToEnd:
    def test_kill_awards_xp_and_drops_loot(self, make_state, make_mob, scripted_rng):
        loot = _make_weapon("drop")
        mob = make_mob(hp=10, xp_value=25, loot=[loot])
        # strength 16: 16 // 2 + Rusty Dagger 2 = 10
        state = make_state(mobs=[mob], strength=16)
        actions.attack(state, mob.id)

        TickEngine(scripted_rng(floats=[0.0], ints=[0])).tick(state)

        assert mob.is_dead
        assert mob.hp == 0
        assert state.player.xp == 25
        assert state.current_room.items == [loot]

    def test_timer_expiry_with_pending_action(self, make_state, make_mob):
        mob = make_mob()
        state = make_state(mobs=[mob], time_left=1)
        engine = TickEngine(GameRNG(0))

        engine.tick(state)
        assert not actions.attack(state, mob.id)

        assert state.phase == GamePhase.GAMEOVER
        assert _event_types(state).count(EventType.GAME_OVER) == 1
