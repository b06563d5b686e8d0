from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class GameConfig:
    view_width: int = 960
    view_height: int = 720
    tile_size: int = 40
    # None -> fresh tie-breaks every run
    seed: Optional[int] = None
    # fixed up/down/left/right exploration order in the pathfinder
    deterministic_paths: bool = False
    move_delay_ms: int = 50  # debounce between accepted moves (front end only)
    # cat behaviour
    grace_moves: int = 5       # cats stay put until this many moves were made
    sight_range: int = 5       # Manhattan tiles
    alert_ticks: int = 5
    sleep_ticks: int = 8
    # items
    distraction_range: int = 3  # tiles a yarn ball travels along facing
    start_yarn: int = 1
    start_toys: int = 1
    # level parsing
    fallback_start: Tuple[int, int] = (1, 1)
    log_capacity: int = 200
