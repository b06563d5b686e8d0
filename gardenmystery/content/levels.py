from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import yaml

from gardenmystery.state.world import LevelError

Pos = Tuple[int, int]


@dataclass(frozen=True)
class LevelConfig:
    id: int
    name: str
    map: Tuple[str, ...]
    cat_patrols: Tuple[Tuple[Pos, ...], ...]
    description: str = ""
    par_time: int = 0  # seconds; shown to the player, not used by the rules


def _waypoint(raw: Any, where: str) -> Pos:
    if isinstance(raw, dict):
        raw = (raw.get("x"), raw.get("y"))
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise LevelError(f"{where}: waypoint {raw!r} is not an [x, y] pair")
    try:
        return (int(raw[0]), int(raw[1]))
    except (TypeError, ValueError) as e:
        raise LevelError(f"{where}: waypoint {raw!r} is not an [x, y] pair") from e


def level_from_dict(spec: dict, index: int = 0) -> LevelConfig:
    name = str(spec.get("name", f"Level {index + 1}"))
    rows = tuple(str(r) for r in spec.get("map") or [])
    if not rows:
        raise LevelError(f"{name}: map is empty")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise LevelError(f"{name}: map row {y} has length {len(row)}, expected {width}")

    patrols = []
    for i, route in enumerate(spec.get("cat_patrols") or []):
        if not route:
            raise LevelError(f"{name}: patrol {i} has no waypoints")
        patrols.append(tuple(_waypoint(p, f"{name} patrol {i}") for p in route))

    return LevelConfig(
        id=int(spec.get("id", index + 1)),
        name=name,
        map=rows,
        cat_patrols=tuple(patrols),
        description=str(spec.get("description", "")),
        par_time=int(spec.get("par_time", 0)),
    )


def default_levels_path() -> pathlib.Path:
    return pathlib.Path(__file__).resolve().parent / "levels.yaml"


def load_levels(path: Optional[pathlib.Path] = None) -> List[LevelConfig]:
    """Load a YAML list of levels; a missing file yields no levels."""
    path = path or default_levels_path()
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise LevelError(f"{path}: expected a list of levels")
    return [level_from_dict(spec, i) for i, spec in enumerate(data)]


LEVELS: List[LevelConfig] = load_levels()
