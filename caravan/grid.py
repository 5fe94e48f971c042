"""Grid coordinate helpers: footprints and straight-segment paths."""
from __future__ import annotations

Coord = tuple[int, int]


def expand_footprint(origin: Coord, width: int, height: int) -> list[Coord]:
    """Expand a rectangular footprint from *origin*.

    Returns all cells in ``[origin, origin + (width, height))``, column-major.

    >>> expand_footprint((5, 3), 2, 2)
    [(5, 3), (5, 4), (6, 3), (6, 4)]
    """
    if width < 1 or height < 1:
        raise ValueError(f"footprint must be at least 1x1, got {width}x{height}")
    x0, y0 = origin
    return [(x0 + dx, y0 + dy) for dx in range(width) for dy in range(height)]


def straight_path(start: Coord, end: Coord) -> list[Coord]:
    """Unit-step path from *start* to *end*, walking x first and then y."""
    x, y = start
    path = [(x, y)]
    while x != end[0]:
        x += 1 if x < end[0] else -1
        path.append((x, y))
    while y != end[1]:
        y += 1 if y < end[1] else -1
        path.append((x, y))
    return path
