"""One discrete turn of the garden.

A turn is either a player move or an item use.  The engine reads the
incoming :class:`LevelState` as a frozen snapshot, works out every cat's
move against it, and hands back a brand-new state; it keeps nothing
between calls apart from its config and pathfinder.

Rejected input (walking into a hedge, an empty item pouch, anything after
the round is over) comes back with ``accepted=False`` and the very same
state object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from gardenmystery.config import GameConfig
from gardenmystery.state.actors import Cat
from gardenmystery.state.level import LOST, WON, LevelState
from gardenmystery.systems.ai import CatContext, advance_cat
from gardenmystery.systems.effects import get_effect
from gardenmystery.systems.pathfinding import DIRECTIONS, Pathfinder

log = logging.getLogger(__name__)

Pos = Tuple[int, int]
Effect = Tuple[str, Pos]  # ("dust" | "sparkle", cell) for the renderer


@dataclass(frozen=True)
class TurnResult:
    state: LevelState
    accepted: bool = True
    disturbance: bool = False  # a cat was roused this turn (screen shake)
    messages: Tuple[str, ...] = ()
    effects: Tuple[Effect, ...] = field(default=())


class TurnEngine:
    def __init__(self, cfg: GameConfig, pathfinder: Optional[Pathfinder] = None) -> None:
        self.cfg = cfg
        self.pathfinder = pathfinder or Pathfinder(deterministic=cfg.deterministic_paths)

    # --- player move ---

    def move(self, state: LevelState, delta: Pos) -> TurnResult:
        if state.over or delta not in DIRECTIONS:
            return TurnResult(state, accepted=False)

        before = state.player
        dest = (before.pos[0] + delta[0], before.pos[1] + delta[1])
        if state.world.is_solid(dest):
            return TurnResult(state, accepted=False)

        player = replace(before, pos=dest, facing=delta)
        items = list(state.items)
        messages: List[str] = []
        effects: List[Effect] = [("dust", before.pos)]

        idx = state.uncollected_at(dest, treat=True)
        if idx is not None:
            items[idx] = items[idx].collect()
            effects.append(("sparkle", dest))
            if not any(e.is_treat and not e.collected for e in items):
                log.info("all treats collected after %d moves", state.moves)
                won = replace(state, player=player, items=tuple(items), outcome=WON)
                return TurnResult(
                    won,
                    messages=("Level Complete! Delicious victory!",),
                    effects=tuple(effects),
                )
            messages.append("Yum, a treat!")

        idx = state.uncollected_at(dest, treat=False)
        if idx is not None:
            pickup = items[idx]
            items[idx] = pickup.collect()
            charge = get_effect(pickup.kind).charge
            player = replace(player, **{charge: getattr(player, charge) + 1})
            effects.append(("sparkle", dest))
            messages.append(f"Found a {pickup.name}!")

        moves = state.moves + 1
        cats = state.cats
        disturbance = False
        if moves >= self.cfg.grace_moves:
            cats, disturbance = self._advance_cats(state, dest)

        outcome = state.outcome
        if self._caught(state.cats, cats, before.pos, dest):
            outcome = LOST
            messages.append("Caught by the Grumpy Cat! Oh no!")
            log.info("player caught at %s on move %d", dest, moves)

        log.debug("move %d: player %s -> %s, cats %s", moves, before.pos, dest,
                  [(c.id, c.pos, c.state) for c in cats])
        new_state = replace(
            state, player=player, cats=cats, items=tuple(items), moves=moves, outcome=outcome
        )
        return TurnResult(
            new_state,
            disturbance=disturbance,
            messages=tuple(messages),
            effects=tuple(effects),
        )

    def _advance_cats(self, state: LevelState, player_pos: Pos) -> Tuple[Tuple[Cat, ...], bool]:
        ctx = CatContext(
            world=state.world,
            player_pos=player_pos,
            occupied=frozenset((c.id, c.pos) for c in state.cats),
            cfg=self.cfg,
            pathfinder=self.pathfinder,
        )
        results = [advance_cat(cat, ctx) for cat in state.cats]
        return tuple(cat for cat, _ in results), any(roused for _, roused in results)

    @staticmethod
    def _caught(before: Tuple[Cat, ...], after: Tuple[Cat, ...], old: Pos, new: Pos) -> bool:
        for prev, cat in zip(before, after):
            if cat.pos == new:
                return True
            # swapped cells: nobody shared a tile, but they passed through each other
            if prev.pos == new and cat.pos == old:
                return True
        return False

    # --- item use ---

    def use_item(self, state: LevelState, item: str) -> TurnResult:
        """Apply the yarn or toy effect.  Unknown item names raise KeyError."""
        effect = get_effect(item)
        charges = getattr(state.player, effect.charge)
        if state.over or charges <= 0:
            return TurnResult(state, accepted=False)

        player = replace(state.player, **{effect.charge: charges - 1})
        outcome = effect.apply(self.cfg, replace(state, player=player))
        log.debug("used %s, %d left", item, charges - 1)
        effects: Tuple[Effect, ...] = ()
        if outcome.sparkle is not None:
            effects = (("sparkle", outcome.sparkle),)
        return TurnResult(
            outcome.state,
            disturbance=outcome.disturbance,
            messages=(outcome.message,),
            effects=effects,
        )
