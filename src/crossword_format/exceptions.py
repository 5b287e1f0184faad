"""Exception hierarchy for the outer layers of crossword-format.

Parsing itself never raises for malformed puzzles; problems are returned as
diagnostics on the :class:`~crossword_format.models.ParseResult`.
"""


class CrosswordFormatError(Exception):
    """Base exception for operational failures."""


class ConfigError(CrosswordFormatError):
    """Raised when a run configuration cannot be loaded."""
