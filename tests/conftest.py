# tests/conftest.py
from __future__ import annotations
import os
import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Ensure repo root is importable (so `import gardenmystery...` works without installing)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless pygame for the front-end smoke tests
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from gardenmystery.config import GameConfig  # noqa: E402
from gardenmystery.content.levels import LevelConfig  # noqa: E402
from gardenmystery.state.level import parse_level  # noqa: E402
from gardenmystery.systems.pathfinding import Pathfinder  # noqa: E402
from gardenmystery.systems.turns import TurnEngine  # noqa: E402


@pytest.fixture
def cfg() -> GameConfig:
    return GameConfig(seed=7, deterministic_paths=True)


@pytest.fixture
def engine(cfg: GameConfig) -> TurnEngine:
    return TurnEngine(cfg, Pathfinder(deterministic=True))


@pytest.fixture
def build(cfg: GameConfig):
    """Build a LevelState from map rows; ``moves`` skips the grace period."""

    def _build(rows, patrols=(), moves=0, cats=None, **player):
        level = LevelConfig(
            id=1,
            name="test",
            map=tuple(rows),
            cat_patrols=tuple(tuple(p) for p in patrols),
        )
        state = parse_level(level, cfg)
        if cats is not None:
            state = replace(state, cats=tuple(cats))
        if player:
            state = replace(state, player=replace(state.player, **player))
        return replace(state, moves=moves)

    return _build
