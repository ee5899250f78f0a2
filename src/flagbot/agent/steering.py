"""
Direction engine: stateless steering helpers for the FlagBot controller.

Two jobs live here:

1. Direct routing. Given where the agent is and where it wants to go,
   pick the diagonal toward the target plus the two pure-axis fallbacks,
   using sign lookups into the ZIGZAG table.

2. Similarity ranking. When direct routing is blocked, order all eight
   compass directions from "most aligned with where we want to go" to
   "most opposed", breaking ties by alignment with a remembered preferred
   side. The obstacle-navigation handler walks this list.

Similarity Score:
    For two moving directions a and b with dot product d:

        similarity(a, b) = sign(d) * 4 * d² / (|a|² * |b|²)

    This is 4 * cos²(angle) carrying the sign of cos, computed in exact
    integers. Over the compass it only takes the values:

         4  same direction
         2  45° apart
         0  90° apart, or either direction is CENTER
        -2  135° apart
        -4  opposite

    Only the induced ordering matters to callers.

Dependencies:
    - functools: For cmp_to_key
    - flagbot.geometry: Direction tables and Location
"""

from __future__ import annotations

from functools import cmp_to_key

from flagbot.geometry import COMPASS, ZIGZAG, Direction, Location, sign

# =============================================================================
# DIRECT ROUTING
# =============================================================================


def dir_towards(current: Location, target: Location) -> Direction:
    """
    Direction of the straight (possibly diagonal) step toward ``target``.

    Returns CENTER when already standing on the target.
    """
    sx = sign(target.x - current.x)
    sy = sign(target.y - current.y)
    return ZIGZAG[4 - sx - 3 * sy]


def direct_candidates(
    current: Location, target: Location
) -> tuple[Direction, Direction, Direction]:
    """
    The three direct-routing options toward ``target``, in priority order.

    Returns:
        (toward, vertical, horizontal): the diagonal-or-straight step toward
        the target, then its pure Y component, then its pure X component.
        Components that are zero come back as CENTER.
    """
    sx = sign(target.x - current.x)
    sy = sign(target.y - current.y)
    return (
        ZIGZAG[4 - sx - 3 * sy],
        ZIGZAG[4 - 3 * sy],
        ZIGZAG[4 - sx],
    )


# =============================================================================
# SIMILARITY RANKING
# =============================================================================


def dot(a: Direction, b: Direction) -> int:
    return a.dx * b.dx + a.dy * b.dy


def similarity(a: Direction, b: Direction) -> int:
    """
    Signed, squared-cosine alignment of two directions, scaled by 4.

    Symmetric in its arguments. CENTER is neutral (0) against everything.
    """
    if a is Direction.CENTER or b is Direction.CENTER:
        return 0
    d = dot(a, b)
    # Exact: the denominator is 1, 2 or 4 and always divides 4 * d * d
    return sign(d) * (4 * d * d) // (dot(a, a) * dot(b, b))


def compare_alignment(
    d1: Direction, d2: Direction, ideal: Direction, secondary: Direction
) -> int:
    """
    Three-way comparison of d1 and d2 for the ranked order.

    Returns a negative number if d1 should come first (better aligned with
    ``ideal``, or equally aligned and better aligned with ``secondary``),
    positive if d2 should, and 0 on a full tie.
    """
    key1 = (similarity(d1, ideal), similarity(d1, secondary))
    key2 = (similarity(d2, ideal), similarity(d2, secondary))
    return (key2 > key1) - (key2 < key1)


def order_by_similarity(
    ideal: Direction, secondary: Direction = Direction.CENTER
) -> list[Direction]:
    """
    Rank the eight compass directions from most to least aligned.

    Primary key is similarity to ``ideal``; ties fall back to similarity to
    ``secondary``. Full ties keep COMPASS order (the sort is stable), so the
    result is deterministic for a given pair of inputs.

    Args:
        ideal: Where the agent wants to go.
        secondary: Remembered preferred side; CENTER means no preference.

    Returns:
        A new list of the 8 moving directions.

    Example:
        >>> order_by_similarity(Direction.EAST)[:3]
        [<Direction.EAST: (1, 0)>, <Direction.NORTHEAST: (1, 1)>, <Direction.SOUTHEAST: (1, -1)>]
    """
    return sorted(
        COMPASS,
        key=cmp_to_key(lambda d1, d2: compare_alignment(d1, d2, ideal, secondary)),
    )


def describe_ranking(ranked: list[Direction]) -> str:
    """Render a ranked list as ``EAST<NORTHEAST<...`` for log lines."""
    return "<".join(d.name for d in ranked)
