# verbosity.py
"""
Logging setup shared by the CLI and library modules.

Verbosity levels:
  0: warnings and errors only
  1: info
  2: debug (includes rdflib / urllib3 chatter)
"""
from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}


class StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


def setup_logging(verbosity: int = 0) -> None:
    level = _LEVELS[max(0, min(verbosity, 2))]

    root = logging.getLogger("ontoespanso")
    root.setLevel(level)
    if not any(isinstance(h, StderrHandler) for h in root.handlers):
        handler = StderrHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    for noisy in ("rdflib", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if verbosity >= 2 else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
