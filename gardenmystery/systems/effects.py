"""Item-use effects.

Each effect consumes one charge of its item and rewrites every cat at
once, regardless of distance, sight or current state.  Effects never move
anyone, never advance the move counter and never trigger a capture.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple

from gardenmystery.config import GameConfig
from gardenmystery.state.actors import ALERT, PATROL, SLEEP
from gardenmystery.state.level import LevelState

Pos = Tuple[int, int]


@dataclass(frozen=True)
class EffectOutcome:
    state: LevelState
    message: str
    disturbance: bool = False
    sparkle: Optional[Pos] = None


@dataclass
class Effect:
    name: str
    charge: str  # Player attribute holding this item's charges
    apply: Callable[[GameConfig, LevelState], EffectOutcome]


effects: Dict[str, Effect] = {}


def register_effect(effect: Effect) -> None:
    effects[effect.name] = effect


def get_effect(name: str) -> Effect:
    return effects[name]


def yarn_target(cfg: GameConfig, state: LevelState) -> Pos:
    """Cell a thrown yarn ball lands on.

    The ball flies ``distraction_range`` tiles along the player's facing,
    clamped to the map.  A ball that would land in a hedge or pond drops
    back along the throw onto the nearest open tile (at worst the player's
    own).
    """
    world = state.world
    player = state.player
    fx, fy = player.facing
    reach = cfg.distraction_range
    x, y = world.clamp((player.pos[0] + fx * reach, player.pos[1] + fy * reach))
    while (x, y) != player.pos and world.is_solid((x, y)):
        x, y = x - fx, y - fy
    return (x, y)


def _throw_yarn(cfg: GameConfig, state: LevelState) -> EffectOutcome:
    target = yarn_target(cfg, state)
    roused = any(c.state in (PATROL, SLEEP) for c in state.cats)
    cats = tuple(
        replace(c, state=ALERT, last_known=target, timer=cfg.alert_ticks) for c in state.cats
    )
    return EffectOutcome(
        state=replace(state, cats=cats),
        message="Threw a yarn ball!",
        disturbance=roused,
        sparkle=target,
    )


def _squeak_toy(cfg: GameConfig, state: LevelState) -> EffectOutcome:
    cats = tuple(replace(c, state=SLEEP, timer=cfg.sleep_ticks) for c in state.cats)
    return EffectOutcome(
        state=replace(state, cats=cats),
        message="SQUEAK! The cats are confused.",
        disturbance=True,
    )


register_effect(Effect("yarn", "yarn", _throw_yarn))
register_effect(Effect("toy", "toys", _squeak_toy))
