from dataclasses import dataclass
import logging
from collections import deque
from typing import List, Optional, Sequence, Tuple

from gardenmystery import config
from gardenmystery.content.levels import LEVELS, LevelConfig
from gardenmystery.rng import RNG, new_rng
from gardenmystery.state.level import LevelState, parse_level, WON, LOST
from gardenmystery.systems.pathfinding import Pathfinder
from gardenmystery.systems.turns import TurnEngine, TurnResult

log = logging.getLogger(__name__)

Move = Tuple[int, int]


@dataclass
class MessageLog:
    capacity: int = 200
    messages: deque | None = None

    def __post_init__(self) -> None:
        if self.messages is None:
            self.messages = deque(maxlen=self.capacity)

    def add(self, text: str) -> None:
        self.messages.append(text)

    def clear(self) -> None:
        self.messages.clear()

    def tail(self, n: int) -> List[str]:
        if n <= 0:
            return []
        return list(self.messages)[-n:]


class Game:
    """A play session: the current garden, the message log and progression.

    The rules live in :class:`TurnEngine`; Game only keeps the latest
    LevelState and feeds it back into the engine one action at a time.
    """

    def __init__(
        self,
        cfg: config.GameConfig,
        levels: Optional[Sequence[LevelConfig]] = None,
        rng: Optional[RNG] = None,
    ) -> None:
        self.cfg = cfg
        self.rng = rng if rng is not None else new_rng(cfg.seed)
        self.engine = TurnEngine(cfg, Pathfinder(self.rng, deterministic=cfg.deterministic_paths))
        self.levels: List[LevelConfig] = list(LEVELS if levels is None else levels)
        self.log = MessageLog(cfg.log_capacity)
        self.level_index = 0
        self.state: Optional[LevelState] = None
        self.sniffing = False
        # last turn's presentation hints
        self.last_result: Optional[TurnResult] = None
        self.log.add("Welcome to the garden!")

    # --- level flow ---

    @property
    def level(self) -> LevelConfig:
        return self.levels[self.level_index]

    def start_level(self, index: int, keep_items: bool = False) -> LevelState:
        if not 0 <= index < len(self.levels):
            raise IndexError(f"no level {index} (have {len(self.levels)})")
        yarn = toys = None
        if keep_items and self.state is not None:
            yarn, toys = self.state.player.yarn, self.state.player.toys
        self.level_index = index
        self.state = parse_level(self.level, self.cfg, yarn=yarn, toys=toys)
        self.sniffing = False
        self.last_result = None
        self.log.clear()
        self.log.add("Avoid the cat! Collect all treats!")
        log.info("starting level %d: %s", self.level.id, self.level.name)
        return self.state

    def restart(self) -> LevelState:
        return self.start_level(self.level_index, keep_items=True)

    @property
    def has_next_level(self) -> bool:
        return self.level_index + 1 < len(self.levels)

    def next_level(self) -> bool:
        if not self.has_next_level:
            return False
        self.start_level(self.level_index + 1, keep_items=True)
        return True

    # --- player actions ---

    def move(self, delta: Move) -> bool:
        if self.state is None or self.sniffing:
            return False
        return self._apply(self.engine.move(self.state, delta))

    def use_item(self, item: str) -> bool:
        if self.state is None:
            return False
        return self._apply(self.engine.use_item(self.state, item))

    def _apply(self, result: TurnResult) -> bool:
        if not result.accepted:
            return False
        self.state = result.state
        self.last_result = result
        for msg in result.messages:
            self.log.add(msg)
        if result.state.over:
            log.info("level %d finished: %s after %d moves",
                     self.level.id, result.state.outcome, result.state.moves)
        return True

    def set_sniffing(self, active: bool) -> None:
        self.sniffing = bool(active) and self.state is not None and not self.state.over

    def scent_trail(self) -> List[Tuple[int, int]]:
        """Uncollected treat positions, only while sniffing."""
        if not self.sniffing or self.state is None:
            return []
        return [e.pos for e in self.state.items if e.is_treat and not e.collected]

    # --- HUD helpers ---

    @property
    def won(self) -> bool:
        return self.state is not None and self.state.outcome == WON

    @property
    def lost(self) -> bool:
        return self.state is not None and self.state.outcome == LOST

    @property
    def moves_until_active(self) -> int:
        moves = self.state.moves if self.state is not None else 0
        return max(0, self.cfg.grace_moves - moves)
