"""Line of sight over the tile grid."""

from typing import List, Tuple

from gardenmystery.state.world import World

Pos = Tuple[int, int]


def line_points(x0: int, y0: int, x1: int, y1: int) -> List[Pos]:
    points = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        # strict comparisons on both axes
        if e2 > dy:
            err += dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return points


def has_line_of_sight(world: World, a: Pos, b: Pos) -> bool:
    """Walk the Bresenham line from *a* to *b*.

    Every cell before *b* (the start included) must be open; *b* itself
    may be anything.
    """
    for (x, y) in line_points(a[0], a[1], b[0], b[1]):
        if (x, y) == b:
            return True
        if world.is_solid((x, y)):
            return False
    return True
