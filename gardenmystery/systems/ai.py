"""Cat behaviour: detection and the per-turn state machine.

States
------
patrol  walk the patrol route; a cat standing on its waypoint spends the
        turn picking the next one.
chase   step toward the player every turn while it can see them.
alert   investigate ``last_known``; the timer runs down while the cat
        stands on that cell (or every turn when there is nothing to
        investigate, or no route to it), then it returns to patrol.
sleep   stunned by a squeaky toy; the timer runs down without moving.
        The turn the timer is found at zero the cat wakes and acts as a
        patrolling cat.

Spotting the player from any state switches to chase.
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Tuple

from gardenmystery.config import GameConfig
from gardenmystery.state.actors import ALERT, CHASE, PATROL, SLEEP, Cat
from gardenmystery.state.world import GRASS, World
from gardenmystery.systems.pathfinding import Pathfinder
from gardenmystery.systems.visibility import has_line_of_sight

Pos = Tuple[int, int]

_CALM = (PATROL, SLEEP)
_ROUSED = (ALERT, CHASE)


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def can_detect(world: World, cat_pos: Pos, player_pos: Pos, sight_range: int) -> bool:
    """Distance, concealment and line of sight, cheapest test first."""
    if manhattan(cat_pos, player_pos) > sight_range:
        return False
    if world.tile_at(player_pos) == GRASS:
        return False
    return has_line_of_sight(world, cat_pos, player_pos)


@dataclass(frozen=True)
class CatContext:
    """Read-only view of the turn shared by every cat."""
    world: World
    player_pos: Pos
    occupied: FrozenSet[Tuple[str, Pos]]  # (cat id, pre-turn position)
    cfg: GameConfig
    pathfinder: Pathfinder

    def blocked(self, cat: Cat, pos: Pos) -> bool:
        return any(cid != cat.id and cpos == pos for cid, cpos in self.occupied)


def advance_cat(cat: Cat, ctx: CatContext) -> Tuple[Cat, bool]:
    """Run one turn of *cat* against the pre-turn snapshot *ctx*.

    Returns the updated cat and whether it was roused (patrol/sleep ->
    alert/chase) this turn.
    """
    before = cat.state
    if cat.state == SLEEP:
        if cat.timer > 0:
            return replace(cat, timer=cat.timer - 1), False
        cat = replace(cat, state=PATROL)

    state = cat.state
    timer = cat.timer
    last_known = cat.last_known

    if can_detect(ctx.world, cat.pos, ctx.player_pos, ctx.cfg.sight_range):
        state = CHASE
        last_known = ctx.player_pos
    elif state == CHASE:
        # lost sight; last_known still holds the last sighting
        state = ALERT
        timer = ctx.cfg.alert_ticks

    roused = state in _ROUSED and before in _CALM
    step = cat.pos

    if state == CHASE:
        step = ctx.pathfinder.next_step(ctx.world, cat.pos, ctx.player_pos)
    elif state == ALERT:
        if last_known is not None:
            step = ctx.pathfinder.next_step(ctx.world, cat.pos, last_known)
            # arrived, or no route: either way the search runs down
            if step == last_known or step == cat.pos:
                timer -= 1
        else:
            timer -= 1
        if timer <= 0:
            state = PATROL
            timer = 0
    else:
        if cat.pos == cat.waypoint:
            return replace(cat, state=state, route_index=cat.next_route_index), roused
        step = ctx.pathfinder.next_step(ctx.world, cat.pos, cat.waypoint)

    facing = cat.facing
    if step != cat.pos:
        facing = (step[0] - cat.pos[0], step[1] - cat.pos[1])
    if ctx.blocked(cat, step):
        step = cat.pos

    return (
        replace(cat, pos=step, state=state, timer=timer, last_known=last_known, facing=facing),
        roused,
    )
