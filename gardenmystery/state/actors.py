from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

Pos = Tuple[int, int]

CatState = Literal["patrol", "alert", "chase", "sleep"]
PATROL: CatState = "patrol"
ALERT: CatState = "alert"
CHASE: CatState = "chase"
SLEEP: CatState = "sleep"


@dataclass(frozen=True)
class Player:
    """The pug: position, facing and item charges."""
    pos: Pos
    facing: Pos = (1, 0)
    yarn: int = 1
    toys: int = 1


@dataclass(frozen=True)
class Cat:
    """A patrolling cat.

    Cats are rebuilt every turn rather than mutated; the turn engine swaps
    the whole tuple of cats at once.
    """
    id: str
    pos: Pos
    route: Tuple[Pos, ...]
    route_index: int = 0
    state: CatState = PATROL
    last_known: Optional[Pos] = None
    timer: int = 0
    facing: Pos = field(default=(1, 0))

    @property
    def waypoint(self) -> Pos:
        return self.route[self.route_index]

    @property
    def next_route_index(self) -> int:
        return (self.route_index + 1) % len(self.route)
