"""
Match driver for FlagBot.

Runs the agent for a whole match in the reference Arena and reports what
happened. This is what the ``flagbot play`` command calls.

Architecture Role:
    __main__.py → play_match() → Arena + FlagController → run_turns()

Usage:
    >>> from flagbot.config import FlagbotConfig
    >>> from flagbot.play import play_match
    >>> summary = play_match(FlagbotConfig(map_name="moat", setup_rounds=0, max_turns=200))
    >>> summary.captures
    1

Dependencies:
    - flagbot.arena: The host world
    - flagbot.agent: Controller and turn loop
    - flagbot.maps: Built-in map layouts
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Sequence

from flagbot.agent.controller import FlagController
from flagbot.agent.runner import run_turns
from flagbot.agent.states import AgentState
from flagbot.arena import Arena
from flagbot.config import FlagbotConfig
from flagbot.geometry import Location
from flagbot.maps import get_map

logger = logging.getLogger(__name__)


@dataclass
class MatchSummary:
    """
    Outcome of a match.

    Attributes:
        turns: Turns played.
        captures: Opponent flags brought home.
        final_state: Controller state after the last turn.
        location: Agent location after the last turn (None if not spawned).
    """

    turns: int
    captures: int
    final_state: AgentState | None
    location: Location | None


def build_match(
    config: FlagbotConfig,
    rows: Sequence[str] | None = None,
    rng: random.Random | None = None,
) -> tuple[Arena, FlagController]:
    """
    Create an arena and a controller for it.

    Args:
        config: Match configuration; selects the map unless ``rows`` is given.
        rows: Explicit map layout overriding ``config.map_name``.
        rng: Random source for the controller (default: seeded from config).
    """
    layout = list(rows) if rows is not None else get_map(config.map_name)
    arena = Arena.from_rows(layout, team=config.team_id, config=config)
    controller = FlagController(arena, config, rng=rng)
    return arena, controller


def play_match(
    config: FlagbotConfig,
    rows: Sequence[str] | None = None,
    on_turn: Callable[[Arena, FlagController], None] | None = None,
) -> MatchSummary:
    """
    Play ``config.max_turns`` turns and summarize the result.

    Args:
        config: Match configuration.
        rows: Optional explicit map layout.
        on_turn: Called after every turn (used by ``--render``).

    Returns:
        MatchSummary of the finished match.
    """
    arena, controller = build_match(config, rows)
    logger.info(
        "Playing %d turns on %s as team %s",
        config.max_turns,
        "custom map" if rows is not None else config.map_name,
        config.team,
    )

    turns = 0
    if on_turn is None:
        turns = run_turns(arena, controller, config.max_turns)
    else:
        while turns < config.max_turns:
            turns += run_turns(arena, controller, 1)
            on_turn(arena, controller)

    summary = MatchSummary(
        turns=turns,
        captures=arena.captures,
        final_state=controller.state,
        location=arena.location,
    )
    logger.info("Match over: %d turns, %d captures", summary.turns, summary.captures)
    return summary
