"""
Host world interface consumed by the FlagBot agent.

The agent never touches the simulation directly. Everything it can learn
or do in a turn goes through a HostWorld: sensing its own location and
nearby flags, checking whether an action is legal, and requesting it.
Concrete hosts are the in-memory Arena (flagbot.arena) and test doubles.

Architecture Role:
    FlagController → HostWorld ← Arena / FakeWorld

    The controller only ever calls query methods (cheap, side-effect free)
    and at most one mutator per turn. run_turns() calls yield_turn() once
    per iteration to hand control back to the host.

Error Model:
    Mutators raise ActionRejected when the host refuses an action, e.g.
    because the world changed between the legality query and the request.
    These are recoverable: the turn loop logs them and moves on.
    NoSpawnZonesError marks an unrecoverable invariant violation.

Dependencies:
    - abc: For the HostWorld abstract base class
    - flagbot.geometry: Location and Direction value types
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum

from flagbot.geometry import Direction, Location

# =============================================================================
# TEAMS
# =============================================================================


class Team(IntEnum):
    """
    Team identity. Values double as spawn-zone ownership codes.

    NEUTRAL marks cells that belong to no spawn zone.
    """

    NEUTRAL = 0
    A = 1
    B = 2

    def opponent(self) -> Team:
        """Return the opposing team (NEUTRAL has none and returns itself)."""
        if self is Team.A:
            return Team.B
        if self is Team.B:
            return Team.A
        return Team.NEUTRAL


# =============================================================================
# SENSED DATA
# =============================================================================


@dataclass(frozen=True)
class CellInfo:
    """
    Terrain and ownership of a single sensed cell.

    Attributes:
        location: The sensed cell.
        is_passable: True if a unit could stand here (ignoring occupants).
        is_wall: Permanent obstruction.
        is_water: Obstruction that a fill action turns into land.
        spawn_zone_team: Team code owning the cell's spawn zone (0 if none).
    """

    location: Location
    is_passable: bool
    is_wall: bool
    is_water: bool
    spawn_zone_team: int


@dataclass(frozen=True)
class FlagInfo:
    """
    A flag seen during sensing.

    Attributes:
        flag_id: Host-assigned identifier, stable for the whole match.
        location: Current position (the carrier's position when carried).
        team: Owning team.
        picked_up: True while some unit is carrying the flag.
    """

    flag_id: int
    location: Location
    team: Team
    picked_up: bool


# =============================================================================
# ERRORS
# =============================================================================


class FlagbotError(Exception):
    """Base class for all FlagBot errors."""


class ActionErrorKind(Enum):
    """Why the host refused an action."""

    CANT_MOVE_THERE = "cant_move_there"
    IS_NOT_READY = "is_not_ready"
    OUT_OF_RANGE = "out_of_range"
    CANT_SENSE_THAT = "cant_sense_that"
    CANT_DO_THAT = "cant_do_that"


class ActionRejected(FlagbotError):
    """
    The host refused a requested action.

    Raised by HostWorld mutators (and sense_map_info for unsensable cells).
    The turn loop catches it, logs it and ends the turn; the agent's state
    is left untouched so the same handler retries next turn.
    """

    def __init__(self, kind: ActionErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class NoSpawnZonesError(FlagbotError):
    """The team has no spawn zone at all; there is nowhere to return to."""


# =============================================================================
# HOST WORLD INTERFACE
# =============================================================================


class HostWorld(ABC):
    """
    Abstract interface to the simulation, as seen by one agent.

    Query methods must not change the world. Mutators either succeed or
    raise ActionRejected without side effects.
    """

    # -------------------------------------------------------------------------
    # Identity and time
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def team(self) -> Team:
        """The agent's own team."""

    @property
    @abstractmethod
    def round_num(self) -> int:
        """Current turn number (starts at 1)."""

    @abstractmethod
    def is_spawned(self) -> bool:
        """True if the agent is currently on the map."""

    @property
    @abstractmethod
    def location(self) -> Location | None:
        """The agent's location, or None when not spawned."""

    @abstractmethod
    def on_the_map(self, loc: Location) -> bool:
        """True if ``loc`` lies inside the map bounds."""

    # -------------------------------------------------------------------------
    # Spawning
    # -------------------------------------------------------------------------

    @abstractmethod
    def ally_spawn_locations(self) -> list[Location]:
        """Every cell of the agent's own spawn zones."""

    @abstractmethod
    def can_spawn(self, loc: Location) -> bool:
        """True if spawning at ``loc`` is legal this turn."""

    @abstractmethod
    def spawn(self, loc: Location) -> None:
        """Place the agent at ``loc``."""

    # -------------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------------

    @abstractmethod
    def can_move(self, direction: Direction) -> bool:
        """True if stepping one cell in ``direction`` is legal this turn."""

    @abstractmethod
    def move(self, direction: Direction) -> None:
        """Step one cell in ``direction``."""

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------

    @abstractmethod
    def can_pickup_flag(self, loc: Location) -> bool:
        """True if a flag at ``loc`` can be picked up this turn."""

    @abstractmethod
    def pickup_flag(self, loc: Location) -> None:
        """Pick up the flag at ``loc``."""

    @abstractmethod
    def sense_nearby_flags(self, radius_squared: int, team: Team) -> list[FlagInfo]:
        """Flags of ``team`` within ``radius_squared`` of the agent."""

    # -------------------------------------------------------------------------
    # Terrain
    # -------------------------------------------------------------------------

    @abstractmethod
    def sense_map_info(self, loc: Location) -> CellInfo:
        """Terrain and ownership of ``loc``."""

    @abstractmethod
    def can_fill(self, loc: Location) -> bool:
        """True if filling ``loc`` is legal this turn."""

    @abstractmethod
    def fill(self, loc: Location) -> None:
        """Turn the water cell at ``loc`` into land."""

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    @abstractmethod
    def yield_turn(self) -> None:
        """End the agent's turn and let the host advance the simulation."""
