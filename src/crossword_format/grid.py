"""Grid bounds and clue id contiguity checks."""

from typing import Dict, List

from .models import Clue, CluePair, Dimensions, Direction, ParseError, Stage, iter_clues


def _axis_error(clue: Clue, message: str) -> ParseError:
    return ParseError(
        code="OUTSIDE_GRID",
        message=f"clue {clue.ref}: {message}",
        stage=Stage.BOUNDS_CHECKED,
        clue=clue.ref,
    )


def check_clue_bounds(clue: Clue, dimensions: Dimensions) -> List[ParseError]:
    """
    Check one clue against the grid, reporting at most one problem per axis.

    Coordinates are 1-based. On the clue's own axis the last cell,
    ``start + length - 1``, must also fit.
    """
    errors: List[ParseError] = []
    length = clue.answer.length if clue.answer else 0

    for axis, start in ((Direction.ACROSS, clue.x), (Direction.DOWN, clue.y)):
        size = dimensions.along(axis)
        name = "x" if axis == Direction.ACROSS else "y"
        label = "width" if axis == Direction.ACROSS else "height"

        if start < 1 or start > size:
            errors.append(_axis_error(
                clue, f"start {name}={start} is outside the grid {label} of {size}"
            ))
        elif axis == clue.direction and start + length - 1 > size:
            errors.append(_axis_error(
                clue,
                f"answer of length {length} ends at {name}={start + length - 1}, "
                f"outside the grid {label} of {size}",
            ))

    return errors


def validate_bounds(clues: Dict[str, CluePair], dimensions: Dimensions) -> List[ParseError]:
    """Check every clue's start and extent against the grid."""
    errors: List[ParseError] = []
    for clue in iter_clues(clues):
        errors.extend(check_clue_bounds(clue, dimensions))
    return errors


def validate_contiguity(clues: Dict[str, CluePair]) -> List[ParseError]:
    """
    Check that ids run 1..N without gaps and that an id used both across and
    down starts at the same cell in both.
    """
    errors: List[ParseError] = []
    ids = sorted(int(clue_id) for clue_id in clues)

    if ids and ids[0] < 1:
        errors.append(ParseError(
            code="INVALID_CLUE_ID",
            message=f"clue id {ids[0]} is not allowed: clue ids start at 1",
            stage=Stage.CONTIGUITY_CHECKED,
        ))

    present = set(ids)
    for expected in range(1, (ids[-1] if ids else 0) + 1):
        if expected not in present:
            errors.append(ParseError(
                code="MISSING_CLUE",
                message=f"missing clue {expected}: clue ids must run from 1 to {ids[-1]} without gaps",
                stage=Stage.CONTIGUITY_CHECKED,
            ))

    for clue_id in ids:
        pair = clues[str(clue_id)]
        if pair.across is None or pair.down is None:
            continue
        if (pair.across.x, pair.across.y) != (pair.down.x, pair.down.y):
            errors.append(ParseError(
                code="COORDS_MISMATCH",
                message=(
                    f"clue {clue_id} has different coords for across and down variants: "
                    f"({pair.across.x},{pair.across.y}) and ({pair.down.x},{pair.down.y})"
                ),
                stage=Stage.CONTIGUITY_CHECKED,
                clue=pair.across.ref,
            ))

    return errors
