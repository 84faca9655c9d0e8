"""Telemetry for a single play-through.

A lightweight dataclass (not a Pydantic model) so collecting it costs
next to nothing during batch runs.  The session fills it in from the
events it drains after every tick and action.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RunTelemetry:
    """Stats from one session.

    Attributes
    ----------
    seed:
        The master RNG seed used for this run.
    final_result:
        ``"victory"``, ``"gameover"``, or ``"timeout"`` when a batch run
        was cut off before the session ended.
    ticks:
        Ticks elapsed.
    time_left:
        Countdown remaining at the end.
    max_depth:
        Deepest ``z`` reached.
    rooms_visited:
        Distinct rooms entered (including the entrance).
    mobs_killed, elites_killed, bosses_killed:
        Kill counts; elites exclude bosses.
    items_looted:
        Items picked up off the floor.
    final_level:
        Player level at the end.
    """

    seed: int | None = None
    final_result: str = "timeout"
    ticks: int = 0
    time_left: int = 0
    max_depth: int = 0
    rooms_visited: int = 0
    mobs_killed: int = 0
    elites_killed: int = 0
    bosses_killed: int = 0
    items_looted: int = 0
    final_level: int = 1
