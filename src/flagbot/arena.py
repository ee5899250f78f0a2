"""
In-memory reference arena implementing the HostWorld interface.

The real match engine is an external program. This module provides a small,
single-agent stand-in that follows the same rules closely enough to run the
controller end to end: from the CLI, in tests, and when tuning the
navigation heuristic by eye.

Architecture Role:
    play_match() / tests → Arena (HostWorld) ← FlagController

Rules Modelled:
    - Terrain: land, wall (never passable) and water (passable once filled).
    - Spawn zones: cells owned by a team; the agent spawns on its own.
    - Flags: picked up from a cell within the interact radius. During the
      setup phase only own-team flags can be picked up, afterwards only
      opponent flags. A carried flag moves with the agent; an opponent flag
      carried onto an own spawn cell is captured and leaves the map.
    - Budget: one move and one action (pickup or fill) per turn. Spawning
      does not use either.
    - When the setup phase ends, a carried own flag is dropped in place.
    - Pickups and fills aimed beyond the interact radius are rejected as
      OUT_OF_RANGE.

Map Layout Format:
    Rows of characters, first row is the northernmost (largest y):

        .  land          #  wall          ~  water
        a  A spawn cell  b  B spawn cell
        A  A flag on an A spawn cell
        B  B flag on a B spawn cell

Grids are numpy arrays indexed [y, x].

Dependencies:
    - numpy: Terrain and spawn-zone grids
    - flagbot.world: HostWorld interface, sensed-data types, errors
    - flagbot.config: Radii and setup-phase length
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from flagbot.config import FlagbotConfig
from flagbot.geometry import Direction, Location
from flagbot.world import (
    ActionErrorKind,
    ActionRejected,
    CellInfo,
    FlagInfo,
    HostWorld,
    Team,
)

logger = logging.getLogger(__name__)

# =============================================================================
# TERRAIN CODES
# =============================================================================

LAND = 0
WALL = 1
WATER = 2

_TERRAIN_CHARS = {".": LAND, "#": WALL, "~": WATER}
_SPAWN_CHARS = {"a": Team.A, "b": Team.B}
_FLAG_CHARS = {"A": Team.A, "B": Team.B}


# =============================================================================
# FLAG
# =============================================================================


@dataclass
class Flag:
    """
    A flag tracked by the arena.

    Attributes:
        flag_id: Stable identifier.
        team: Owning team.
        location: Resting position, or the carrier's position when carried.
        carried: True while the agent holds it.
    """

    flag_id: int
    team: Team
    location: Location
    carried: bool = False

    def info(self) -> FlagInfo:
        return FlagInfo(
            flag_id=self.flag_id,
            location=self.location,
            team=self.team,
            picked_up=self.carried,
        )


# =============================================================================
# ARENA
# =============================================================================


class Arena(HostWorld):
    """
    Single-agent capture-the-flag world on a rectangular grid.

    Attributes:
        terrain: int8 array [height, width] of LAND/WALL/WATER codes.
        spawn_zones: int8 array [height, width] of Team codes (0 = none).
        flags: All flags still in play.
        captures: Opponent flags brought home so far.
        config: Radii and setup-phase length.
    """

    def __init__(
        self,
        terrain: np.ndarray,
        spawn_zones: np.ndarray,
        flags: list[Flag],
        team: Team = Team.A,
        config: FlagbotConfig | None = None,
    ) -> None:
        if terrain.shape != spawn_zones.shape:
            raise ValueError(
                f"terrain {terrain.shape} and spawn_zones {spawn_zones.shape} differ in shape"
            )
        self.terrain = terrain
        self.spawn_zones = spawn_zones
        self.flags = flags
        self.config = config or FlagbotConfig()
        self.captures = 0

        self._team = team
        self._round = 1
        self._location: Location | None = None
        self._moved = False
        self._acted = False

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        team: Team = Team.A,
        config: FlagbotConfig | None = None,
    ) -> Arena:
        """
        Build an arena from an ASCII layout (see module docstring).

        Raises:
            ValueError: On an empty layout, ragged rows or unknown characters.
        """
        if not rows:
            raise ValueError("Map layout has no rows")
        width = len(rows[0])
        if width == 0 or any(len(row) != width for row in rows):
            raise ValueError("Map layout rows must be non-empty and equally long")

        height = len(rows)
        terrain = np.full((height, width), LAND, dtype=np.int8)
        spawn_zones = np.zeros((height, width), dtype=np.int8)
        flags: list[Flag] = []

        for row_index, row in enumerate(rows):
            y = height - 1 - row_index
            for x, ch in enumerate(row):
                if ch in _TERRAIN_CHARS:
                    terrain[y, x] = _TERRAIN_CHARS[ch]
                elif ch in _SPAWN_CHARS:
                    spawn_zones[y, x] = _SPAWN_CHARS[ch]
                elif ch in _FLAG_CHARS:
                    owner = _FLAG_CHARS[ch]
                    spawn_zones[y, x] = owner
                    flags.append(Flag(len(flags), owner, Location(x, y)))
                else:
                    raise ValueError(f"Unknown map character {ch!r} at row {row_index}")

        return cls(terrain, spawn_zones, flags, team=team, config=config)

    # =========================================================================
    # GEOMETRY HELPERS
    # =========================================================================

    @property
    def width(self) -> int:
        return int(self.terrain.shape[1])

    @property
    def height(self) -> int:
        return int(self.terrain.shape[0])

    def on_the_map(self, loc: Location) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.y < self.height

    def _within_interact(self, loc: Location) -> bool:
        return (
            self._location is not None
            and self._location.distance_squared_to(loc) <= self.config.interact_radius_squared
        )

    def _flag_at(self, loc: Location) -> Flag | None:
        for flag in self.flags:
            if not flag.carried and flag.location == loc:
                return flag
        return None

    def _carried_flag(self) -> Flag | None:
        for flag in self.flags:
            if flag.carried:
                return flag
        return None

    def _in_setup(self) -> bool:
        return self._round < self.config.setup_rounds

    # =========================================================================
    # IDENTITY AND TIME
    # =========================================================================

    @property
    def team(self) -> Team:
        return self._team

    @property
    def round_num(self) -> int:
        return self._round

    def is_spawned(self) -> bool:
        return self._location is not None

    @property
    def location(self) -> Location | None:
        return self._location

    # =========================================================================
    # SPAWNING
    # =========================================================================

    def ally_spawn_locations(self) -> list[Location]:
        ys, xs = np.nonzero(self.spawn_zones == int(self._team))
        return [Location(int(x), int(y)) for y, x in zip(ys, xs)]

    def can_spawn(self, loc: Location) -> bool:
        return (
            self._location is None
            and self.on_the_map(loc)
            and int(self.spawn_zones[loc.y, loc.x]) == self._team
        )

    def spawn(self, loc: Location) -> None:
        if not self.can_spawn(loc):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"Cannot spawn at {loc}")
        self._location = loc

    # =========================================================================
    # MOVEMENT
    # =========================================================================

    def can_move(self, direction: Direction) -> bool:
        if self._location is None or self._moved or direction is Direction.CENTER:
            return False
        dest = self._location.add(direction)
        return self.on_the_map(dest) and int(self.terrain[dest.y, dest.x]) == LAND

    def move(self, direction: Direction) -> None:
        if self._moved:
            raise ActionRejected(ActionErrorKind.IS_NOT_READY, "Already moved this turn")
        if not self.can_move(direction):
            raise ActionRejected(
                ActionErrorKind.CANT_MOVE_THERE, f"Cannot move {direction.name} from {self._location}"
            )
        assert self._location is not None
        self._location = self._location.add(direction)
        self._moved = True

        carried = self._carried_flag()
        if carried is None:
            return
        carried.location = self._location
        if carried.team != self._team and self._on_own_spawn(self._location):
            self.flags.remove(carried)
            self.captures += 1
            logger.info("Round %d: captured flag %d", self._round, carried.flag_id)

    def _on_own_spawn(self, loc: Location) -> bool:
        return int(self.spawn_zones[loc.y, loc.x]) == self._team

    # =========================================================================
    # FLAGS
    # =========================================================================

    def can_pickup_flag(self, loc: Location) -> bool:
        if self._acted or not self._within_interact(loc) or self._carried_flag() is not None:
            return False
        flag = self._flag_at(loc)
        if flag is None:
            return False
        if self._in_setup():
            return flag.team == self._team
        return flag.team != self._team

    def pickup_flag(self, loc: Location) -> None:
        if self._acted:
            raise ActionRejected(ActionErrorKind.IS_NOT_READY, "Already acted this turn")
        if not self._within_interact(loc):
            raise ActionRejected(ActionErrorKind.OUT_OF_RANGE, f"{loc} is out of reach")
        if not self.can_pickup_flag(loc):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"No pickable flag at {loc}")
        flag = self._flag_at(loc)
        assert flag is not None and self._location is not None
        flag.carried = True
        flag.location = self._location
        self._acted = True

    def sense_nearby_flags(self, radius_squared: int, team: Team) -> list[FlagInfo]:
        if self._location is None:
            return []
        here = self._location
        return [
            flag.info()
            for flag in self.flags
            if flag.team == team and flag.location.distance_squared_to(here) <= radius_squared
        ]

    # =========================================================================
    # TERRAIN
    # =========================================================================

    def sense_map_info(self, loc: Location) -> CellInfo:
        if not self.on_the_map(loc):
            raise ActionRejected(ActionErrorKind.CANT_SENSE_THAT, f"{loc} is off the map")
        code = int(self.terrain[loc.y, loc.x])
        return CellInfo(
            location=loc,
            is_passable=code == LAND,
            is_wall=code == WALL,
            is_water=code == WATER,
            spawn_zone_team=int(self.spawn_zones[loc.y, loc.x]),
        )

    def can_fill(self, loc: Location) -> bool:
        return (
            not self._acted
            and self.on_the_map(loc)
            and self._within_interact(loc)
            and int(self.terrain[loc.y, loc.x]) == WATER
        )

    def fill(self, loc: Location) -> None:
        if self._acted:
            raise ActionRejected(ActionErrorKind.IS_NOT_READY, "Already acted this turn")
        if not self._within_interact(loc):
            raise ActionRejected(ActionErrorKind.OUT_OF_RANGE, f"{loc} is out of reach")
        if not self.can_fill(loc):
            raise ActionRejected(ActionErrorKind.CANT_DO_THAT, f"Cannot fill {loc}")
        self.terrain[loc.y, loc.x] = LAND
        self._acted = True

    # =========================================================================
    # SCHEDULING
    # =========================================================================

    def yield_turn(self) -> None:
        self._round += 1
        self._moved = False
        self._acted = False

        if self._round == self.config.setup_rounds:
            carried = self._carried_flag()
            if carried is not None and carried.team == self._team:
                carried.carried = False
                logger.debug("Round %d: setup over, dropped own flag at %s", self._round, carried.location)

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self) -> str:
        """ASCII view of the arena, agent drawn as ``@``."""
        terrain_chars = {code: ch for ch, code in _TERRAIN_CHARS.items()}
        spawn_chars = {int(team): ch for ch, team in _SPAWN_CHARS.items()}
        flag_chars = {team: ch for ch, team in _FLAG_CHARS.items()}

        grid = []
        for y in range(self.height - 1, -1, -1):
            row = []
            for x in range(self.width):
                zone = int(self.spawn_zones[y, x])
                ch = spawn_chars[zone] if zone else terrain_chars[int(self.terrain[y, x])]
                row.append(ch)
            grid.append(row)

        for flag in self.flags:
            if not flag.carried:
                grid[self.height - 1 - flag.location.y][flag.location.x] = flag_chars[flag.team]
        if self._location is not None:
            grid[self.height - 1 - self._location.y][self._location.x] = "@"

        return "\n".join("".join(row) for row in grid)
