"""Experience and level-up.

A single kill grants at most one level: when the new XP total meets the
threshold the player gains a level, keeps the remainder, and is fully
restored to the raised maxima.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shaft_crawler.sim.core.entities import Player

logger = logging.getLogger(__name__)

LEVEL_UP_MAX_HP = 5
LEVEL_UP_MAX_MANA = 2
LEVEL_UP_STRENGTH = 1


def award_xp(player: Player, amount: int) -> bool:
    """Add *amount* XP and apply a level-up if the threshold is reached.

    Returns ``True`` if the player levelled up.
    """
    player.xp += amount
    if player.xp < player.xp_to_next:
        return False

    player.level += 1
    player.xp -= player.xp_to_next
    player.max_hp += LEVEL_UP_MAX_HP
    player.max_mana += LEVEL_UP_MAX_MANA
    player.strength += LEVEL_UP_STRENGTH
    player.hp = player.max_hp
    player.mana = player.max_mana
    logger.debug("Player reached level %d (xp carried: %d)", player.level, player.xp)
    return True
