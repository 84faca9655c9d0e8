"""Batch simulation runner -- plays many headless sessions with an agent.

Each run builds a ``GameSession`` from its own seed, starts it, and then
alternates agent decisions with ticks until the session ends or the tick
cap is hit.  No narrator is attached, so runs are fully deterministic for
a given seed.
"""

from __future__ import annotations

import logging

from shaft_crawler.config import GameConfig
from shaft_crawler.sim.core.rng import GameRNG
from shaft_crawler.sim.play_agents.base import PlayAgent
from shaft_crawler.sim.play_agents.heuristic_agent import HeuristicAgent
from shaft_crawler.sim.session import GameSession
from shaft_crawler.sim.telemetry import RunTelemetry

logger = logging.getLogger(__name__)

_DEFAULT_MAX_TICKS = 2000


def run_single_session(
    agent: PlayAgent,
    seed: int,
    config: GameConfig | None = None,
    max_ticks: int = _DEFAULT_MAX_TICKS,
) -> RunTelemetry:
    """Play one session to the end (or *max_ticks*) and return its telemetry."""
    session = GameSession(rng=GameRNG(seed), config=config)
    session.start_game("Simulacrum")

    for _ in range(max_ticks):
        action = agent.choose_action(session.snapshot())
        if action is not None:
            session.perform(action)
        if not session.tick():
            break

    telemetry = session.telemetry
    logger.debug(
        "Seed %d: %s after %d ticks at depth %d",
        seed, telemetry.final_result, telemetry.ticks, telemetry.max_depth,
    )
    return telemetry


class BatchRunner:
    """Runs many sessions with consecutive seeds."""

    def __init__(
        self,
        agent_class: type[PlayAgent] = HeuristicAgent,
        config: GameConfig | None = None,
    ) -> None:
        self.agent_class = agent_class
        self.config = config or GameConfig()

    def run_batch(
        self,
        n_runs: int,
        base_seed: int = 42,
        max_ticks: int = _DEFAULT_MAX_TICKS,
    ) -> list[RunTelemetry]:
        """Run *n_runs* sessions seeded ``base_seed``, ``base_seed + 1``, ..."""
        results: list[RunTelemetry] = []
        for seed in (base_seed + i for i in range(n_runs)):
            agent = self._make_agent()
            results.append(
                run_single_session(agent, seed, self.config, max_ticks),
            )
        return results

    def _make_agent(self) -> PlayAgent:
        try:
            return self.agent_class(config=self.config)  # type: ignore[call-arg]
        except TypeError:
            return self.agent_class()
