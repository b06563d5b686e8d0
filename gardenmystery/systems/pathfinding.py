"""Breadth-first single-step pathfinding on the tile grid.

Only the *length* of the chosen route is guaranteed.  When several shortest
routes exist the direction order at every node is shuffled with the
pathfinder's RNG, so cats wander a little instead of always hugging the
same wall.  Pass a seeded RNG (or ``deterministic=True``) to make the
choice reproducible.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from gardenmystery.rng import RNG, new_rng
from gardenmystery.state.world import World

Pos = Tuple[int, int]

DIRECTIONS: Tuple[Pos, ...] = (
    (0, -1),  # up
    (0, 1),   # down
    (-1, 0),  # left
    (1, 0),   # right
)


class Pathfinder:
    def __init__(self, rng: Optional[RNG] = None, deterministic: bool = False) -> None:
        self.rng = rng if rng is not None else new_rng()
        self.deterministic = deterministic

    def _directions(self) -> List[Pos]:
        if self.deterministic:
            return list(DIRECTIONS)
        return self.rng.shuffled(DIRECTIONS)

    def next_step(self, world: World, start: Pos, target: Pos) -> Pos:
        """Return the first cell of a shortest 4-connected route to *target*.

        Returns *start* when already there or when no route exists.
        """
        if start == target:
            return start

        # each entry: (cell, first step taken from start to reach it)
        queue: Deque[Tuple[Pos, Optional[Pos]]] = deque([(start, None)])
        visited = {start}

        while queue:
            pos, first = queue.popleft()
            if pos == target:
                return first or start
            for dx, dy in self._directions():
                nxt = (pos[0] + dx, pos[1] + dy)
                if nxt in visited or world.is_solid(nxt):
                    continue
                visited.add(nxt)
                queue.append((nxt, first or nxt))

        return start


def next_step_toward(world: World, start: Pos, target: Pos, rng: Optional[RNG] = None) -> Pos:
    """Convenience wrapper around a throwaway :class:`Pathfinder`."""
    return Pathfinder(rng).next_step(world, start, target)


def distance_map(world: World, origin: Pos) -> Dict[Pos, int]:
    """Shortest 4-connected step counts from *origin* to every reachable open cell."""
    dist = {origin: 0}
    queue: Deque[Pos] = deque([origin])
    while queue:
        pos = queue.popleft()
        for dx, dy in DIRECTIONS:
            nxt = (pos[0] + dx, pos[1] + dy)
            if nxt in dist or world.is_solid(nxt):
                continue
            dist[nxt] = dist[pos] + 1
            queue.append(nxt)
    return dist
