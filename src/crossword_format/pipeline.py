"""
Crossword parsing pipeline.

Stages run in a fixed order; each returns its own errors and the driver stops
at the first stage that reports any:

1. scan the header (keys, and raw across/down lines)
2. parse the clue lines
3. parse the grid size
4. resolve belongs-to/owns relationships between clues
5. segment answers and reconcile lengths of linked clues
6. check clues fit inside the grid
7. check clue ids are contiguous
"""

from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, Field

from .answers import reconcile_lengths, segment_answers
from .grid import validate_bounds, validate_contiguity
from .models import ParseError, ParseResult, Stage
from .parsing import parse_clue_lines, parse_size
from .relationships import resolve_relationships
from .scanning import scan_header
from .utils import get_logger

logger = get_logger(__name__)


class ParseState(BaseModel):
    """Input text plus the result being built."""
    text: str
    result: ParseResult = Field(default_factory=ParseResult)


def _scan(state: ParseState) -> List[ParseError]:
    header, errors = scan_header(state.text)
    state.result.header = header
    return errors


def _parse_clues(state: ParseState) -> List[ParseError]:
    header = state.result.header
    clues, largest_clue_id, errors = parse_clue_lines(header.across, header.down)
    state.result.clues = clues
    state.result.largest_clue_id = largest_clue_id
    return errors


def _parse_size(state: ParseState) -> List[ParseError]:
    dimensions, errors = parse_size(state.result.header.size)
    state.result.dimensions = dimensions
    return errors


def _resolve(state: ParseState) -> List[ParseError]:
    return resolve_relationships(state.result.clues)


def _segment(state: ParseState) -> List[ParseError]:
    errors = segment_answers(state.result.clues, state.result.dimensions)
    if errors:
        return errors
    return reconcile_lengths(state.result.clues)


def _check_bounds(state: ParseState) -> List[ParseError]:
    return validate_bounds(state.result.clues, state.result.dimensions)


def _check_contiguity(state: ParseState) -> List[ParseError]:
    return validate_contiguity(state.result.clues)


Step = Callable[[ParseState], List[ParseError]]

PIPELINE: Tuple[Tuple[Stage, Step], ...] = (
    (Stage.SCANNED, _scan),
    (Stage.CLUES_PARSED, _parse_clues),
    (Stage.SIZE_PARSED, _parse_size),
    (Stage.RELATIONSHIPS_RESOLVED, _resolve),
    (Stage.ANSWERS_SEGMENTED, _segment),
    (Stage.BOUNDS_CHECKED, _check_bounds),
    (Stage.CONTIGUITY_CHECKED, _check_contiguity),
)


def run_pipeline(state: ParseState) -> ParseResult:
    """Advance through the stages, stopping at the first one with errors."""
    result = state.result
    for stage, step in PIPELINE:
        errors = step(state)
        if errors:
            result.diagnostics.extend(errors)
            logger.info(
                "parse stopped before %s with %d error(s)", stage.value, len(errors)
            )
            return result
        result.stage = stage
        logger.debug("reached %s", stage.value)

    result.stage = Stage.DONE
    logger.info(
        "parsed %d clue id(s) on a %dx%d grid",
        len(result.clues),
        result.dimensions.across,
        result.dimensions.down,
    )
    return result


def parse(text: Optional[str] = "") -> ParseResult:
    """
    Parse and validate crossword text.

    Never raises for malformed input. Returns a ParseResult with:
    - errors: ordered error messages (empty when valid)
    - is_valid: True if every stage passed
    - header, dimensions, clues, largest_clue_id: filled in as far as
      parsing got
    """
    if not text:
        logger.info("no text to parse")
        return ParseResult(diagnostics=[ParseError(
            code="NO_TEXT",
            message="No text specified",
            stage=Stage.EMPTY,
        )])

    return run_pipeline(ParseState(text=text))
