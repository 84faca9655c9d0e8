"""Base class for agents that play the shaft headlessly.

All play agents subclass ``PlayAgent`` and implement ``choose_action``.
The batch runner asks for one action per tick.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shaft_crawler.sim.session import PlayerAction, SessionSnapshot


class PlayAgent(ABC):
    """Base class for AI agents that play the game."""

    @abstractmethod
    def choose_action(self, snapshot: SessionSnapshot) -> PlayerAction | None:
        """Choose what to do this tick.

        Parameters
        ----------
        snapshot:
            Copy of the session's renderable state, giving the agent the same
            view a human player has.

        Returns
        -------
        PlayerAction | None
            The action to perform, or ``None`` to let the tick pass (auto
            combat against the current target, or regeneration).
        """
