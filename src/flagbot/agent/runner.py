"""
Turn loop for the FlagBot agent.

The host schedules the agent once per turn. Each iteration here runs one
controller turn and then yields back to the host, no matter what happened
during the turn. Skipping the yield would let the agent overrun its turn
budget, so it sits in a ``finally`` block.

Error Policy:
    - ActionRejected: logged at WARNING, turn ends, state untouched. The
      same handler retries next turn against fresh world facts.
    - NoSpawnZonesError (and anything else): propagates and ends the loop.

Dependencies:
    - logging: Rejected-action warnings
    - flagbot.agent.controller: The controller being driven
"""

from __future__ import annotations

import logging

from flagbot.agent.controller import FlagController
from flagbot.world import ActionRejected, HostWorld

logger = logging.getLogger(__name__)


def run_turns(
    world: HostWorld,
    controller: FlagController,
    max_turns: int | None = None,
) -> int:
    """
    Drive ``controller`` for ``max_turns`` turns (forever if None).

    Args:
        world: Host world; its yield_turn() is called after every turn.
        controller: Controller to run.
        max_turns: Number of turns to play, or None to run until the host
            stops the process.

    Returns:
        Number of turns played.

    Raises:
        NoSpawnZonesError: The agent has nowhere to bring a flag back to.
    """
    turns = 0
    while max_turns is None or turns < max_turns:
        try:
            controller.take_turn()
        except ActionRejected as e:
            logger.warning(
                "Round %d: action rejected in %s (%s): %s",
                world.round_num,
                controller.state.name if controller.state else None,
                e.kind.value,
                e,
            )
        finally:
            world.yield_turn()
            turns += 1
    return turns
