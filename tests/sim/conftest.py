"""Shared fixtures for simulation tests."""

from __future__ import annotations

from collections import deque
from typing import Sequence, TypeVar

import pytest

from shaft_crawler.config import GameConfig, starting_player
from shaft_crawler.sim.core.entities import Mob, MobType
from shaft_crawler.sim.core.game_state import (
    Coordinates,
    Exits,
    GamePhase,
    GameState,
    Room,
    World,
)
from shaft_crawler.sim.core.rng import GameRNG

T = TypeVar("T")


class ScriptedRNG(GameRNG):
    """GameRNG that returns queued values first, then falls back to a seed.

    Lets a test pin exactly the rolls it cares about (hit, damage, flee)
    without reverse-engineering a seed.
    """

    def __init__(
        self,
        floats: Sequence[float] = (),
        ints: Sequence[int] = (),
        seed: int = 0,
    ) -> None:
        super().__init__(seed)
        self.floats = deque(floats)
        self.ints = deque(ints)

    def random_float(self) -> float:
        if self.floats:
            return self.floats.popleft()
        return super().random_float()

    def random_int(self, low: int, high: int) -> int:
        if self.ints:
            value = self.ints.popleft()
            assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
            return value
        return super().random_int(low, high)


@pytest.fixture
def scripted_rng() -> type[ScriptedRNG]:
    return ScriptedRNG


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def make_mob():
    def _make_mob(mob_id: str = "m1", hp: int = 20, **kwargs) -> Mob:
        defaults = dict(
            id=mob_id,
            name="Giant Rat",
            level=1,
            hp=hp,
            max_hp=max(hp, 1),
            damage=3,
            xp_value=15,
            type=MobType.BEAST,
        )
        defaults.update(kwargs)
        return Mob(**defaults)

    return _make_mob


@pytest.fixture
def make_state():
    """Build a PLAYING state standing in a single hand-made room."""

    def _make_state(
        mobs: list[Mob] | None = None,
        coords: tuple[int, int, int] = (0, 0, 1),
        exits: Exits | None = None,
        time_left: int = 900,
        **player_overrides,
    ) -> GameState:
        x, y, z = coords
        room = Room(
            id=f"room_{x}_{y}_{z}",
            coordinates=Coordinates(x=x, y=y, z=z),
            name=f"Shaft {z}",
            description="Test room.",
            mobs=mobs or [],
            exits=exits or Exits(up=True, down=True),
            visited=True,
        )
        world = World()
        world.add(room)
        player = starting_player()
        for key, value in player_overrides.items():
            setattr(player, key, value)
        return GameState(
            phase=GamePhase.PLAYING,
            time_left=time_left,
            coordinates=Coordinates(x=x, y=y, z=z),
            current_room_id=room.id,
            world=world,
            player=player,
        )

    return _make_state
