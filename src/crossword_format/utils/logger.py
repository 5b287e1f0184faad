"""Logging utilities for crossword parsing."""

import logging
from typing import Optional


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure root logging with the package formatter.

    Parsing is quiet by default; the CLI raises the level with ``--verbose``
    or the ``log_level`` config key.
    """
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger under ``crossword_format``."""
    return logging.getLogger(name or "crossword_format")
