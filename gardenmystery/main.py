import argparse
import logging
from typing import List, Optional

from gardenmystery import config
from gardenmystery.engine import Engine
from gardenmystery.logging_setup import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pugly's Garden Mystery")
    parser.add_argument("--level", type=int, default=1, help="garden to start in (1-based)")
    parser.add_argument("--seed", type=int, default=None, help="fix cat path tie-breaks")
    parser.add_argument("--debug", action="store_true", help="log every turn")
    parser.add_argument("--log-file", action="store_true", help="also write logs/ to disk")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> config.GameConfig:
    # no --seed means fresh tie-breaks every run
    return config.GameConfig(seed=args.seed)


def main() -> None:
    args = parse_args()
    configure_logging(logging.DEBUG if args.debug else logging.INFO, log_to_file=args.log_file)
    engine = Engine(build_config(args))
    engine.game.start_level(max(0, args.level - 1))
    engine.run()


if __name__ == "__main__":
    main()
