"""Parsing and validation of the crossword text format."""

from .pipeline import parse, run_pipeline, ParseState, PIPELINE
from .models import (
    Answer,
    AnswerPart,
    Clue,
    CluePair,
    ClueRef,
    Dimensions,
    Direction,
    Header,
    IdRef,
    ParseError,
    ParseResult,
    Stage,
)
from .grammar import FORMAT_SPEC, FormatSpec, PERMITTED_KEYS, SEPARATORS, PLACEHOLDER
from .report import format_report, limit_errors
from .exceptions import CrosswordFormatError, ConfigError

__version__ = "0.1.0"
__all__ = [
    # Main entry point
    "parse",
    "run_pipeline",
    "ParseState",
    "PIPELINE",
    # Models
    "Answer",
    "AnswerPart",
    "Clue",
    "CluePair",
    "ClueRef",
    "Dimensions",
    "Direction",
    "Header",
    "IdRef",
    "ParseError",
    "ParseResult",
    "Stage",
    # Format description
    "FORMAT_SPEC",
    "FormatSpec",
    "PERMITTED_KEYS",
    "SEPARATORS",
    "PLACEHOLDER",
    # Reporting
    "format_report",
    "limit_errors",
    # Exceptions
    "CrosswordFormatError",
    "ConfigError",
    # Version
    "__version__",
]
