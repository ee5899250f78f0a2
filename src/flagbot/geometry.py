"""
Grid geometry primitives for FlagBot.

This module defines the two value types every other module speaks in:
integer grid locations and the nine symbolic directions (eight compass
directions plus "no movement"). It also fixes the two direction orderings
the agent relies on.

Coordinate System:
    - X increases eastward, Y increases northward
    - NORTH is (0, +1), SOUTH is (0, -1)
    - Distances are squared Euclidean (integers, no floating point)

Direction Orderings:
    COMPASS: The 8 moving directions clockwise from NORTH. Used as the
        iteration order for random exploration and as the stable base
        order when ranking directions by similarity.

    ZIGZAG: A 9-entry lookup table laid out as a 3x3 block read row by
        row, north row first and east column first:

            NE  N  NW
            E   .  W
            SE  S  SW

        With sx = sign(dx) and sy = sign(dy) toward a target, the entry
        at index ``4 - sx - 3 * sy`` is the direction pointing at it.
        ``4 - 3 * sy`` and ``4 - sx`` give the pure-axis components.

Dependencies:
    - dataclasses: For the frozen Location value type
    - enum: For the Direction enumeration
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# DIRECTION
# =============================================================================


class Direction(Enum):
    """
    One of the eight compass directions, or CENTER for "no movement".

    Each member's value is its (dx, dy) offset.
    """

    NORTH = (0, 1)
    NORTHEAST = (1, 1)
    EAST = (1, 0)
    SOUTHEAST = (1, -1)
    SOUTH = (0, -1)
    SOUTHWEST = (-1, -1)
    WEST = (-1, 0)
    NORTHWEST = (-1, 1)
    CENTER = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def opposite(self) -> Direction:
        """Return the direction pointing the other way (CENTER stays CENTER)."""
        return _BY_OFFSET[(-self.dx, -self.dy)]

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """
        Look up a direction by name or common abbreviation.

        Accepts full names in any case ("north", "NorthEast") and compass
        abbreviations ("N", "ne", "c").

        Raises:
            ValueError: If the name matches no direction.
        """
        key = name.strip().upper()
        if key in _ABBREVIATIONS:
            return _ABBREVIATIONS[key]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}") from None


_BY_OFFSET: dict[tuple[int, int], Direction] = {d.value: d for d in Direction}

_ABBREVIATIONS: dict[str, Direction] = {
    "N": Direction.NORTH,
    "NE": Direction.NORTHEAST,
    "E": Direction.EAST,
    "SE": Direction.SOUTHEAST,
    "S": Direction.SOUTH,
    "SW": Direction.SOUTHWEST,
    "W": Direction.WEST,
    "NW": Direction.NORTHWEST,
    "C": Direction.CENTER,
}


# =============================================================================
# DIRECTION TABLES
# =============================================================================

# Clockwise from NORTH. Never mutated; ranking works on copies.
COMPASS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.NORTHEAST,
    Direction.EAST,
    Direction.SOUTHEAST,
    Direction.SOUTH,
    Direction.SOUTHWEST,
    Direction.WEST,
    Direction.NORTHWEST,
)

# Indexed by 4 - sign(dx) - 3 * sign(dy); see module docstring.
ZIGZAG: tuple[Direction, ...] = (
    Direction.NORTHEAST,
    Direction.NORTH,
    Direction.NORTHWEST,
    Direction.EAST,
    Direction.CENTER,
    Direction.WEST,
    Direction.SOUTHEAST,
    Direction.SOUTH,
    Direction.SOUTHWEST,
)


def sign(value: int) -> int:
    """Return -1, 0 or 1 according to the sign of ``value``."""
    return (value > 0) - (value < 0)


# =============================================================================
# LOCATION
# =============================================================================


@dataclass(frozen=True)
class Location:
    """
    An integer grid coordinate.

    Locations are immutable and compare by value, so they can be used as
    dictionary keys and compared with ``==`` against sensed flag positions.

    Attributes:
        x: Column, increasing eastward.
        y: Row, increasing northward.
    """

    x: int
    y: int

    def add(self, direction: Direction) -> Location:
        """Return the adjacent location one step in ``direction``."""
        return Location(self.x + direction.dx, self.y + direction.dy)

    def distance_squared_to(self, other: Location) -> int:
        """Squared Euclidean distance to ``other``."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
