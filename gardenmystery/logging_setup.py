# gardenmystery/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime


def configure_logging(level: int = logging.INFO, *, log_to_file: bool = False) -> None:
    """
    Configure root logging with a readable format and optional file sink.
    """
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt)

    if log_to_file:
        os.makedirs("logs", exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        fh = logging.FileHandler(f"logs/gardenmystery-{ts}.log", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(fmt, datefmt))
        logging.getLogger().addHandler(fh)
