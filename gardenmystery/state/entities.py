# gardenmystery/state/entities.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

Pos = Tuple[int, int]

TREAT = "treat"
YARN = "yarn"
TOY = "toy"

ITEM_NAMES = {
    TREAT: "Treat",
    YARN: "Yarn Ball",
    TOY: "Squeaky Toy",
}


@dataclass(frozen=True)
class Entity:
    """A collectible lying on a map tile.

    Treats must all be gathered to win; yarn balls and squeaky toys refill
    the matching item charge. Once collected an entity is inert.
    """
    id: str
    kind: str
    pos: Pos
    collected: bool = False

    @property
    def name(self) -> str:
        return ITEM_NAMES.get(self.kind, self.kind)

    @property
    def is_treat(self) -> bool:
        return self.kind == TREAT

    def collect(self) -> "Entity":
        return replace(self, collected=True)
