"""
Decision-making core of the FlagBot agent.

Architecture:
    ┌──────────────────────────────────────────────┐
    │              TURN LOOP (runner)               │
    │  take_turn() → catch ActionRejected → yield   │
    ├──────────────────────────────────────────────┤
    │         DECISION CONTROLLER (controller)      │
    │  guard → per-state handler → one action       │
    ├───────────────────────┬──────────────────────┤
    │  STATES (states)      │  STEERING (steering) │
    │  AgentState enum,     │  sign lookup,        │
    │  obstacle record,     │  similarity ranking  │
    │  pre-dispatch guard   │                      │
    └───────────────────────┴──────────────────────┘

Modules:
    - states: AgentState, ObstacleNavigation and check_overrides()
    - steering: Direct routing candidates and similarity ranking
    - controller: FlagController state machine
    - runner: run_turns() loop with the mandatory per-turn yield

Usage:
    from flagbot.agent import FlagController, run_turns
    controller = FlagController(world, config)
    run_turns(world, controller)

Dependencies:
    - flagbot.world: HostWorld interface the controller consumes
    - flagbot.config: Match rules and agent settings
"""

from flagbot.agent.controller import FlagController
from flagbot.agent.runner import run_turns
from flagbot.agent.states import AgentState, ObstacleNavigation, check_overrides

__all__ = [
    "AgentState",
    "FlagController",
    "ObstacleNavigation",
    "check_overrides",
    "run_turns",
]
