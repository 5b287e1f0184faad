"""Clue line and size parsing."""

from typing import Dict, List, Optional, Tuple

from .grammar import SIZE_RE, GrammarError, read_clue_line
from .models import Clue, CluePair, Dimensions, Direction, ParseError, Stage


def parse_clue_lines(
    across_lines: List[str],
    down_lines: List[str],
) -> Tuple[Dict[str, CluePair], str, List[ParseError]]:
    """
    Parse the raw across and down bullet lines into clues grouped by id.

    Only the line grammar, duplicates and id order are checked here; links
    between clues and answers are left for later stages.

    Returns a tuple of (clues, largest clue id, errors). The largest id is
    ``"0"`` when there are no clues.
    """
    errors: List[ParseError] = []
    clues: Dict[int, CluePair] = {}

    for direction, lines in ((Direction.ACROSS, across_lines), (Direction.DOWN, down_lines)):
        previous_id: Optional[int] = None
        for c, line in enumerate(lines):
            try:
                parsed = read_clue_line(line)
            except GrammarError as e:
                errors.append(ParseError(
                    code="INVALID_CLUE",
                    message=(
                        f"could not parse {direction.value} clue[{c}]: expected {e.expected} "
                        f"at column {e.column}, in line='{line}'"
                    ),
                    stage=Stage.CLUES_PARSED,
                    column=e.column,
                ))
                continue

            clue_id = parsed.ids[0].id
            pair = clues.setdefault(clue_id, CluePair())
            if pair.get(direction) is not None:
                errors.append(ParseError(
                    code="DUPLICATE_CLUE",
                    message=f"duplicate {direction.value} for clue[{c}], id {clue_id}, in line='{line}'",
                    stage=Stage.CLUES_PARSED,
                ))
                continue

            if previous_id is not None and clue_id < previous_id:
                errors.append(ParseError(
                    code="OUT_OF_ORDER",
                    message=(
                        f"{direction.value} clue[{c}] with id {clue_id} is out of order "
                        f"(follows id {previous_id}), in line='{line}'"
                    ),
                    stage=Stage.CLUES_PARSED,
                ))
            previous_id = clue_id

            pair.set(Clue(
                id=clue_id,
                direction=direction,
                x=parsed.x,
                y=parsed.y,
                ids=parsed.ids,
                ids_text=parsed.ids_text,
                body=parsed.body,
                answer_text=parsed.answer_text,
                line=line,
                position=c,
            ))

    ordered = {str(clue_id): clues[clue_id] for clue_id in sorted(clues)}
    largest_clue_id = str(max(clues)) if clues else "0"
    return ordered, largest_clue_id, errors


def parse_size(size_text: str) -> Tuple[Optional[Dimensions], List[ParseError]]:
    """Parse ``WIDTHxHEIGHT`` into grid dimensions."""
    match = SIZE_RE.match(size_text.strip())
    if not match or int(match.group("across")) < 1 or int(match.group("down")) < 1:
        return None, [ParseError(
            code="INVALID_SIZE",
            message=f"could not parse size='{size_text}', expected WIDTHxHEIGHT with positive integers",
            stage=Stage.SIZE_PARSED,
        )]
    return Dimensions(across=int(match.group("across")), down=int(match.group("down"))), []
