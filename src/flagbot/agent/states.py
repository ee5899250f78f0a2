"""
Agent states and the pre-dispatch guard.

The controller is a finite state machine. This module holds the pieces of
it that are plain data or pure functions, so they can be tested without a
controller:

- AgentState: the enumerated modes.
- ObstacleNavigation: the record carried while skirting an obstacle.
- check_overrides(): the global rules evaluated once per turn before the
  per-state handler runs.

Design Decisions:
    - Overrides are a guard, not part of any handler. Handlers never check
      "am I spawned?" or "is setup over?" themselves.
    - The obstacle sub-state owns its own memory (where to resume, which
      side to prefer) instead of sharing top-level fields.

Dependencies:
    - flagbot.geometry: Direction for the preferred side
    - flagbot.world: HostWorld queries used by the guard
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from flagbot.geometry import Direction
from flagbot.world import HostWorld

# =============================================================================
# AGENT STATE
# =============================================================================


class AgentState(Enum):
    """Mode of the decision controller. Exactly one is current."""

    NOT_SPAWNED = auto()
    IDLE = auto()
    CHECKING_FOR_FLAG = auto()
    SETTING_UP = auto()
    PLACING_FLAG = auto()
    LOOKING_FOR_ENEMY_FLAG = auto()
    TRAVELING_TO_ENEMY_FLAG = auto()
    BRINGING_ENEMY_FLAG_BACK = auto()
    NAVIGATING_OBSTACLE = auto()


# States only meaningful during the setup phase
SETUP_STATES = frozenset({AgentState.SETTING_UP, AgentState.PLACING_FLAG})


# =============================================================================
# OBSTACLE NAVIGATION RECORD
# =============================================================================


@dataclass
class ObstacleNavigation:
    """
    Memory of the NAVIGATING_OBSTACLE sub-state.

    Attributes:
        resume_state: State to return to once a well-aligned move is found.
        preferred_side: Lateral direction taken on the first sideways step.
            Used as the tie-breaker on later blocked turns so the agent keeps
            working around the same side of the obstacle. CENTER = unset.
    """

    resume_state: AgentState
    preferred_side: Direction = Direction.CENTER


# =============================================================================
# PRE-DISPATCH GUARD
# =============================================================================


def check_overrides(
    state: AgentState | None, world: HostWorld, setup_rounds: int
) -> AgentState | None:
    """
    Evaluate the global state overrides for this turn.

    Rules, in order:
        1. No state yet, not spawned, or location unknown → NOT_SPAWNED.
        2. Setup phase over while still setting up or placing a flag
           → LOOKING_FOR_ENEMY_FLAG.

    Args:
        state: Current controller state (None before the first turn).
        world: Host world to query.
        setup_rounds: First round after the setup phase.

    Returns:
        The state to force, or None to proceed with the current one.
    """
    if state is None or not world.is_spawned() or world.location is None:
        return AgentState.NOT_SPAWNED
    if world.round_num >= setup_rounds and state in SETUP_STATES:
        return AgentState.LOOKING_FOR_ENEMY_FLAG
    return None
