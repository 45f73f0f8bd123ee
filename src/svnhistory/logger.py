"""Logging setup with Rich console output.

Usage::

    from svnhistory.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("running svn log")
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

_ROOT = "svnhistory"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``svnhistory`` hierarchy.

    Handlers are attached once, on the package root, by :func:`setup_logging`.
    Library users who never call it get standard ``logging`` behaviour.
    """
    if name != _ROOT and not name.startswith(f"{_ROOT}."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger. Call once from the CLI entry point.

    *level* is used as given; env and config overrides are resolved by the caller.
    """
    root = logging.getLogger(_ROOT)
    root.setLevel(level.upper())
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    # keep propagation on so pytest's caplog sees records
    root.propagate = True
    return root
