from dataclasses import dataclass
from typing import Iterable, Tuple

Pos = Tuple[int, int]

# Terrain symbols
WALL = "#"
PATH = "."
GRASS = ","  # hides the player from cats
WATER = "~"
EXIT = "E"

TERRAIN = frozenset({WALL, PATH, GRASS, WATER, EXIT})
SOLID = frozenset({WALL, WATER})


class LevelError(ValueError):
    """Raised when level content cannot form a valid map."""


@dataclass(frozen=True)
class World:
    """Immutable rectangular tile grid.

    Anything outside the grid reads as WALL: unknown space is impassable
    and blocks sight.
    """

    rows: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise LevelError("map has no tiles")
        width = len(self.rows[0])
        for y, row in enumerate(self.rows):
            if len(row) != width:
                raise LevelError(f"map row {y} has length {len(row)}, expected {width}")
            bad = set(row) - TERRAIN
            if bad:
                raise LevelError(f"map row {y} has unknown terrain {sorted(bad)}")

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "World":
        return cls(tuple(rows))

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def in_bounds(self, pos: Pos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, pos: Pos) -> str:
        if not self.in_bounds(pos):
            return WALL
        x, y = pos
        return self.rows[y][x]

    def is_solid(self, pos: Pos) -> bool:
        return self.tile_at(pos) in SOLID

    def clamp(self, pos: Pos) -> Pos:
        x, y = pos
        return (max(0, min(self.width - 1, x)), max(0, min(self.height - 1, y)))
