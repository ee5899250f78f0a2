"""
Decision controller: the FlagBot per-turn state machine.

The controller decides what the agent does in a turn. Each call to
take_turn() applies the pre-dispatch guard, then runs exactly one
per-state handler. A handler reads world facts, performs at most one
world-mutating action (spawn, move, pickup, fill) and updates the state.

Architecture Role:
    run_turns() → FlagController.take_turn() → handler → HostWorld
                                              ↘ steering (direction engine)

State Flow:
    NOT_SPAWNED → CHECKING_FOR_FLAG → SETTING_UP / PLACING_FLAG
        (setup phase ends) → LOOKING_FOR_ENEMY_FLAG
        → TRAVELING_TO_ENEMY_FLAG → BRINGING_ENEMY_FLAG_BACK
        → IDLE → LOOKING_FOR_ENEMY_FLAG → ...

    TRAVELING_TO_ENEMY_FLAG and BRINGING_ENEMY_FLAG_BACK drop into
    NAVIGATING_OBSTACLE when every direct step is blocked, and resume
    once a well-aligned step opens up.

Design Decisions:
    - Handler dispatch through a dict keyed by AgentState.
    - Randomness comes from an injected random.Random so tests can pin it.
    - Blocked routing switches to NAVIGATING_OBSTACLE and runs it in the
      same turn; discovering the block never costs a turn.
    - ActionRejected is not handled here. It propagates to the turn loop,
      which ends the turn with the state unchanged.

Dependencies:
    - logging: Transition and decision traces
    - random: Exploration and spawn choice
    - flagbot.agent.states / steering: FSM data and direction engine
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from flagbot.agent.states import AgentState, ObstacleNavigation, check_overrides
from flagbot.agent.steering import (
    describe_ranking,
    dir_towards,
    direct_candidates,
    order_by_similarity,
)
from flagbot.config import FlagbotConfig
from flagbot.geometry import COMPASS, Direction, Location
from flagbot.world import FlagInfo, HostWorld, NoSpawnZonesError

logger = logging.getLogger(__name__)

# Ranked positions [0, 3) are close enough to the ideal direction to resume
# travel; [3, 5) are the lateral moves that set the preferred side.
_ALIGNED_BAND = 3
_LATERAL_BAND = 5


class FlagController:
    """
    Finite state machine driving a single capture-the-flag agent.

    Attributes:
        world: Host world the agent senses and acts through.
        config: Match rules and agent settings.
        rng: Random source for exploration and spawn choice.
        state: Current AgentState (None until the first turn).
        next_state: State entered when an IDLE countdown finishes.
        idle_turns: Remaining IDLE turns before switching to next_state.
        target: Location of interest (enemy flag, or home spawn cell).
        navigation: Obstacle sub-state record while NAVIGATING_OBSTACLE.
    """

    def __init__(
        self,
        world: HostWorld,
        config: FlagbotConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Create a controller with fresh memory.

        Args:
            world: Host world for this agent.
            config: Configuration; defaults to FlagbotConfig().
            rng: Random source; defaults to random.Random(config.seed).
        """
        self.world = world
        self.config = config or FlagbotConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        self.state: AgentState | None = None
        self.next_state: AgentState | None = None
        self.idle_turns: int = 0
        self.target: Location | None = None
        self.navigation: ObstacleNavigation | None = None

        self._handlers: dict[AgentState, Callable[[], None]] = {
            AgentState.NOT_SPAWNED: self._run_not_spawned,
            AgentState.IDLE: self._run_idle,
            AgentState.CHECKING_FOR_FLAG: self._run_checking_for_flag,
            AgentState.SETTING_UP: self._run_setting_up,
            AgentState.PLACING_FLAG: self._run_placing_flag,
            AgentState.LOOKING_FOR_ENEMY_FLAG: self._run_looking_for_enemy_flag,
            AgentState.TRAVELING_TO_ENEMY_FLAG: self._run_traveling_to_enemy_flag,
            AgentState.BRINGING_ENEMY_FLAG_BACK: self._run_bringing_enemy_flag_back,
            AgentState.NAVIGATING_OBSTACLE: self._run_navigating_obstacle,
        }

    @property
    def secondary_dir(self) -> Direction:
        """Preferred side of the active obstacle navigation (CENTER if none)."""
        if self.navigation is None:
            return Direction.CENTER
        return self.navigation.preferred_side

    # =========================================================================
    # TURN ENTRY POINT
    # =========================================================================

    def take_turn(self) -> None:
        """
        Run one turn: apply the guard, then the current state's handler.

        Raises:
            ActionRejected: A requested action was refused by the host.
            NoSpawnZonesError: The team has no spawn zone to return to.
        """
        override = check_overrides(self.state, self.world, self.config.setup_rounds)
        if override is not None:
            if override is AgentState.NOT_SPAWNED:
                self.navigation = None
            self._set_state(override)

        assert self.state is not None
        self._handlers[self.state]()

    def _set_state(self, state: AgentState) -> None:
        if state is not self.state:
            logger.debug(
                "Round %d: %s -> %s",
                self.world.round_num,
                self.state.name if self.state else None,
                state.name,
            )
        self.state = state

    # =========================================================================
    # SHARED ACTIONS
    # =========================================================================

    def move_random(self) -> None:
        """Step in a uniformly random legal direction, if there is one."""
        legal = [d for d in COMPASS if self.world.can_move(d)]
        if legal:
            self.world.move(self.rng.choice(legal))

    def move_towards(self, target: Location) -> None:
        """
        Step toward ``target`` along the direct route.

        Tries the diagonal-or-straight step, then the pure Y step, then the
        pure X step. If none is legal, enters NAVIGATING_OBSTACLE (resuming
        the current state afterwards) and runs it immediately.
        """
        loc = self._location()
        for direction in direct_candidates(loc, target):
            if self.world.can_move(direction):
                self.world.move(direction)
                return

        assert self.state is not None
        self.navigation = ObstacleNavigation(resume_state=self.state)
        self._set_state(AgentState.NAVIGATING_OBSTACLE)
        self._run_navigating_obstacle()

    def _location(self) -> Location:
        loc = self.world.location
        # The guard only dispatches handlers while the location is known
        assert loc is not None
        return loc

    def _nearest_spawn_location(self, loc: Location) -> Location:
        spawn_locs = self.world.ally_spawn_locations()
        if not spawn_locs:
            raise NoSpawnZonesError(f"Team {self.world.team.name} has no spawn zones")
        return min(spawn_locs, key=loc.distance_squared_to)

    def _sense_enemy_flags(self) -> list[FlagInfo]:
        return self.world.sense_nearby_flags(
            self.config.vision_radius_squared, self.world.team.opponent()
        )

    # =========================================================================
    # STATE HANDLERS
    # =========================================================================

    def _run_not_spawned(self) -> None:
        # Already on the map (e.g. placed by the host before the first turn)
        if self.world.is_spawned() and self.world.location is not None:
            self._set_state(AgentState.CHECKING_FOR_FLAG)
            return

        candidates = [
            loc for loc in self.world.ally_spawn_locations() if self.world.can_spawn(loc)
        ]
        if candidates:
            spawn_loc = self.rng.choice(candidates)
            self.world.spawn(spawn_loc)
            logger.info("Round %d: spawned at %s", self.world.round_num, spawn_loc)
            self._set_state(AgentState.CHECKING_FOR_FLAG)

    def _run_idle(self) -> None:
        if self.idle_turns == 0:
            assert self.next_state is not None
            self._set_state(self.next_state)
        else:
            self.idle_turns -= 1

    def _run_checking_for_flag(self) -> None:
        loc = self._location()
        if self.world.can_pickup_flag(loc):
            self.world.pickup_flag(loc)
            logger.info("Round %d: picked up own flag at %s", self.world.round_num, loc)
            self._set_state(AgentState.PLACING_FLAG)
        elif self.world.round_num < self.config.setup_rounds:
            self._set_state(AgentState.SETTING_UP)
        else:
            self._set_state(AgentState.LOOKING_FOR_ENEMY_FLAG)

    def _run_setting_up(self) -> None:
        self.move_random()

    def _run_placing_flag(self) -> None:
        # TODO: deposit the carried flag at a defensible spot instead of wandering
        self.move_random()

    def _run_looking_for_enemy_flag(self) -> None:
        loc = self._location()
        free_flags = [f for f in self._sense_enemy_flags() if not f.picked_up]

        if not free_flags:
            self.move_random()
            return

        nearest = min(free_flags, key=lambda f: f.location.distance_squared_to(loc))
        self.target = nearest.location
        logger.debug("Round %d: targeting enemy flag at %s", self.world.round_num, self.target)
        self._set_state(AgentState.TRAVELING_TO_ENEMY_FLAG)

    def _run_traveling_to_enemy_flag(self) -> None:
        loc = self._location()

        if self.world.can_pickup_flag(loc):
            self.world.pickup_flag(loc)
            logger.info("Round %d: picked up enemy flag at %s", self.world.round_num, loc)
            self._set_state(AgentState.BRINGING_ENEMY_FLAG_BACK)
            self.target = self._nearest_spawn_location(loc)
            # The pickup is this turn's action
            return

        still_there = any(
            not f.picked_up and f.location == self.target
            for f in self._sense_enemy_flags()
        )
        if not still_there:
            logger.debug("Round %d: gave up on enemy flag at %s", self.world.round_num, self.target)
            self._set_state(AgentState.LOOKING_FOR_ENEMY_FLAG)
            return

        assert self.target is not None
        self.move_towards(self.target)

    def _run_bringing_enemy_flag_back(self) -> None:
        info = self.world.sense_map_info(self._location())

        if info.spawn_zone_team == self.world.team:
            logger.info("Round %d: brought enemy flag home", self.world.round_num)
            self.next_state = AgentState.LOOKING_FOR_ENEMY_FLAG
            self.idle_turns = self.config.idle_turns_after_capture
            self._set_state(AgentState.IDLE)
            return

        assert self.target is not None
        self.move_towards(self.target)

    def _run_navigating_obstacle(self) -> None:
        """
        Pick the best locally legal move when the direct route is blocked.

        Ranks the compass by similarity to the ideal direction (ties broken
        by the preferred side), then walks the ranking:

        - ranks 0-2: move, resume the saved state, forget the preferred side
        - ranks 3-4: move and remember this side if none is set yet
        - ranks 5-7: move
        - a rank 3+ move is only taken while no fillable water has been seen
          among ranks 0-2; otherwise the best such water cell is filled.

        With no move and nothing to fill the turn is a no-op and the agent
        stays in this state.
        """
        assert self.navigation is not None and self.target is not None
        nav = self.navigation
        loc = self._location()
        ideal = dir_towards(loc, self.target)
        ranked = order_by_similarity(ideal, nav.preferred_side)

        logger.debug(
            "Ordered dirs by similarity to %s then %s: %s",
            ideal.name,
            nav.preferred_side.name,
            describe_ranking(ranked),
        )

        best_fillable: Location | None = None

        for i, direction in enumerate(ranked):
            new_loc = loc.add(direction)

            if self.world.can_move(direction):
                if i < _ALIGNED_BAND:
                    self.world.move(direction)
                    self.navigation = None
                    self._set_state(nav.resume_state)
                    return
                if best_fillable is None:
                    self.world.move(direction)
                    if i < _LATERAL_BAND and nav.preferred_side is Direction.CENTER:
                        nav.preferred_side = direction
                    return
            elif (
                i < _ALIGNED_BAND
                and best_fillable is None
                and self.world.on_the_map(new_loc)
                and self.world.sense_map_info(new_loc).is_water
                and self.world.can_fill(new_loc)
            ):
                best_fillable = new_loc

        if best_fillable is not None:
            logger.debug("Round %d: filling water at %s", self.world.round_num, best_fillable)
            self.world.fill(best_fillable)
