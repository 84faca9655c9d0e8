"""Core combat mechanics for the shaft crawler.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from shaft_crawler.sim.mechanics import (
        effective_stats,
        award_xp,
        strike_mob, handle_mob_death, mob_attack,
    )
"""

# -- stats -------------------------------------------------------------------
from .stats import EffectiveStats, effective_stats

# -- progression -------------------------------------------------------------
from .progression import award_xp

# -- combat ------------------------------------------------------------------
from .combat import (
    handle_mob_death,
    mob_attack,
    mob_hit_damage,
    player_hit_chance,
    roll_player_damage,
    strike_mob,
)

__all__ = [
    # stats
    "EffectiveStats",
    "effective_stats",
    # progression
    "award_xp",
    # combat
    "handle_mob_death",
    "mob_attack",
    "mob_hit_damage",
    "player_hit_chance",
    "roll_player_damage",
    "strike_mob",
]
