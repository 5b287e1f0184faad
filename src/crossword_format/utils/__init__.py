"""Shared helpers for crossword-format."""

from .logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
