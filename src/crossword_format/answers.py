"""
Answer segmentation and length reconciliation.

An answer such as ``(5-4,3)`` is split into parts. When a clue owns others,
the parts at the tail of its answer are handed to the owned clues, last owned
clue first, and the owner keeps what is left.
"""

from typing import Dict, List, Optional

from .grammar import PLACEHOLDER, GrammarError, read_answer
from .models import (
    Answer,
    AnswerPart,
    Clue,
    CluePair,
    Dimensions,
    ParseError,
    Stage,
    find_clue,
    iter_clues,
)


def _error(code: str, message: str, clue: Clue) -> ParseError:
    return ParseError(
        code=code,
        message=message,
        stage=Stage.ANSWERS_SEGMENTED,
        clue=clue.ref,
    )


def segment_answer(answer_text: str, max_length: Optional[int] = None) -> Answer:
    """
    Split raw answer text into parts.

    Numeric parts longer than ``max_length`` are rejected before their
    placeholder text is built.

    Raises GrammarError if a token is neither letters nor a positive length.
    """
    parts: List[AnswerPart] = []
    for separator, token, column in read_answer(answer_text):
        if token.isdigit():
            length = int(token)
            if length == 0:
                raise GrammarError("a length of at least 1", column, answer_text)
            if max_length is not None and length > max_length:
                raise GrammarError(f"a length of at most {max_length}", column, answer_text)
            text = PLACEHOLDER * length
        else:
            length = len(token)
            text = token
        parts.append(AnswerPart(source=token, text=text, length=length, separator=separator))

    return Answer(parts=parts, length=sum(p.length for p in parts))


def segment_answers(
    clues: Dict[str, CluePair],
    dimensions: Optional[Dimensions] = None,
) -> List[ParseError]:
    """Attach an :class:`Answer` to every clue."""
    errors: List[ParseError] = []
    max_length = max(dimensions.across, dimensions.down) if dimensions else None

    for clue in iter_clues(clues):
        try:
            clue.answer = segment_answer(clue.answer_text, max_length)
        except GrammarError as e:
            errors.append(_error(
                "INVALID_ANSWER",
                f"failed to parse answer '({clue.answer_text})' for clue {clue.ref}: "
                f"expected {e.expected} at column {e.column}",
                clue,
            ))
            continue

        if clue.belongs_to is not None and len(clue.answer.parts) > 1:
            errors.append(_error(
                "MULTI_PART_BELONGS_TO",
                f"belongs-to with multi-part answer not allowed: clue {clue.ref} "
                f"belongs to {clue.belongs_to} but has answer '({clue.answer_text})'",
                clue,
            ))

    return errors


def reconcile_owner(owner: Clue, clues: Dict[str, CluePair]) -> List[ParseError]:
    """Hand the tail parts of an owner's answer to the clues it owns."""
    parts = owner.answer.parts
    remaining = len(parts)

    for ref in reversed(owner.owns):
        owned = find_clue(clues, ref.id, ref.direction)
        needed = owned.answer.length

        start = remaining
        covered = 0
        while covered < needed and start > 0:
            start -= 1
            covered += parts[start].length

        if covered != needed:
            return [_error(
                "CANNOT_ENCOMPASS",
                f"clue {owner.ref} with answer '({owner.answer_text})' cannot encompass the "
                f"answer of owned clue {ref} (length {needed})",
                owner,
            )]

        for part in parts[start:remaining]:
            part.assigned_to = ref
        remaining = start

    if remaining == 0:
        return [_error(
            "NO_REMAINING_PARTS",
            f"clue {owner.ref} has no answer parts left for itself once its owned clues "
            f"are satisfied",
            owner,
        )]

    own_length = sum(p.length for p in parts[:remaining])
    if own_length == 0:
        return [_error(
            "NO_REMAINING_LENGTH",
            f"clue {owner.ref} has zero answer length left for itself once its owned clues "
            f"are satisfied",
            owner,
        )]

    owner.answer.length_owned = owner.answer.length
    owner.answer.length = own_length
    return []


def reconcile_lengths(clues: Dict[str, CluePair]) -> List[ParseError]:
    """Reconcile every clue that owns others; each owner fails independently."""
    errors: List[ParseError] = []
    for clue in iter_clues(clues):
        if clue.owns:
            errors.extend(reconcile_owner(clue, clues))
    return errors
