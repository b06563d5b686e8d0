from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from gardenmystery.config import GameConfig
from gardenmystery.content.levels import LevelConfig
from gardenmystery.state.actors import Cat, Player
from gardenmystery.state.entities import TOY, TREAT, YARN, Entity
from gardenmystery.state.world import PATH, World
from gardenmystery.systems.pathfinding import distance_map

log = logging.getLogger(__name__)

Pos = Tuple[int, int]

Outcome = Literal["ongoing", "won", "lost"]
ONGOING: Outcome = "ongoing"
WON: Outcome = "won"
LOST: Outcome = "lost"

PLAYER_MARK = "P"
ITEM_MARKS = {"T": TREAT, "Y": YARN, "S": TOY}


@dataclass(frozen=True)
class LevelState:
    """Everything one round needs, as an immutable snapshot.

    The turn engine never edits a LevelState; it returns a new one.
    """
    world: World
    player: Player
    cats: Tuple[Cat, ...]
    items: Tuple[Entity, ...]
    moves: int = 0
    outcome: Outcome = ONGOING

    @property
    def over(self) -> bool:
        return self.outcome != ONGOING

    @property
    def treats_left(self) -> int:
        return sum(1 for e in self.items if e.is_treat and not e.collected)

    def uncollected_at(self, pos: Pos, treat: bool) -> Optional[int]:
        """Index of the first uncollected treat (or pickup) at *pos*."""
        for i, ent in enumerate(self.items):
            if ent.pos == pos and not ent.collected and ent.is_treat == treat:
                return i
        return None


def parse_level(
    level: LevelConfig,
    cfg: GameConfig,
    yarn: Optional[int] = None,
    toys: Optional[int] = None,
) -> LevelState:
    """Turn level content into the opening LevelState.

    Entity markers become plain path tiles.  The first ``P`` sets the
    player start; without one the configured fallback start is used.
    Charges default to the configured starting inventory.
    """
    start: Optional[Pos] = None
    items: List[Entity] = []
    counts = {TREAT: 0, YARN: 0, TOY: 0}
    rows = []
    for y, line in enumerate(level.map):
        row = []
        for x, ch in enumerate(line):
            if ch == PLAYER_MARK:
                if start is None:
                    start = (x, y)
                row.append(PATH)
            elif ch in ITEM_MARKS:
                kind = ITEM_MARKS[ch]
                items.append(Entity(id=f"{kind}-{counts[kind]}", kind=kind, pos=(x, y)))
                counts[kind] += 1
                row.append(PATH)
            else:
                row.append(ch)
        rows.append("".join(row))

    world = World.from_rows(rows)
    if start is None:
        start = cfg.fallback_start
        log.warning("level %r has no player start, using %s", level.name, start)

    cats = tuple(
        Cat(id=f"cat-{i}", pos=route[0], route=tuple(route))
        for i, route in enumerate(level.cat_patrols)
    )
    player = Player(
        pos=start,
        yarn=cfg.start_yarn if yarn is None else yarn,
        toys=cfg.start_toys if toys is None else toys,
    )
    _warn_unreachable(level, world, start, items, cats)
    return LevelState(world=world, player=player, cats=cats, items=tuple(items))


def _warn_unreachable(
    level: LevelConfig, world: World, start: Pos, items: List[Entity], cats: Tuple[Cat, ...]
) -> None:
    reachable = distance_map(world, start)
    for ent in items:
        if ent.pos not in reachable:
            log.warning("level %r: %s at %s cannot be reached", level.name, ent.name, ent.pos)
    for cat in cats:
        for waypoint in cat.route:
            if world.is_solid(waypoint):
                log.warning("level %r: %s waypoint %s is not walkable", level.name, cat.id, waypoint)
