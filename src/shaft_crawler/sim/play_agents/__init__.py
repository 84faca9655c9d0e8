"""Play agent implementations for headless simulation.

Re-exports the base class and the concrete agents so consumers can do::

    from shaft_crawler.sim.play_agents import PlayAgent, HeuristicAgent
"""

from .base import PlayAgent
from .heuristic_agent import HeuristicAgent

__all__ = ["HeuristicAgent", "PlayAgent"]
