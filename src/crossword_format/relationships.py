"""
Clue relationship resolution.

A clue whose text reads "See 1 Across" belongs to 1 across; 1 across owns it
by listing its id after its own (``1,2 down``). Both ends must agree.
"""

from typing import Dict, List, Optional, Set

from .grammar import read_see_reference
from .models import (
    Clue,
    CluePair,
    ClueRef,
    Direction,
    ParseError,
    Stage,
    find_clue,
    iter_clues,
)


def _error(code: str, message: str, clue: Clue) -> ParseError:
    return ParseError(
        code=code,
        message=message,
        stage=Stage.RELATIONSHIPS_RESOLVED,
        clue=clue.ref,
    )


def resolve_belongs_to(clues: Dict[str, CluePair]) -> List[ParseError]:
    """Set ``belongs_to`` on every clue whose text starts with a See reference."""
    errors: List[ParseError] = []

    for clue in iter_clues(clues):
        reference = read_see_reference(clue.body)
        if reference is None:
            continue
        target_id, target_direction = reference
        target = ClueRef(id=str(target_id), direction=target_direction)

        if len(clue.ids) > 1:
            errors.append(_error(
                "COMPOUND_BELONGS_TO",
                f"clue {clue.ref} has a compound id list '{clue.ids_text}' "
                f"and cannot also belong to {target}",
                clue,
            ))
            continue

        if find_clue(clues, target.id, target.direction) is None:
            errors.append(_error(
                "UNKNOWN_REFERENCE",
                f"clue {clue.ref} belongs to {target}, which does not exist",
                clue,
            ))
            continue

        clue.belongs_to = target

    return errors


def _owned_clue(
    clues: Dict[str, CluePair],
    owner: Clue,
    owned_id: int,
    direction: Optional[Direction],
    errors: List[ParseError],
) -> Optional[Clue]:
    pair = clues.get(str(owned_id))
    if direction is not None:
        owned = pair.get(direction) if pair else None
        if owned is None:
            errors.append(_error(
                "UNKNOWN_OWNED",
                f"clue {owner.ref} owns {owned_id} {direction.value}, which does not exist",
                owner,
            ))
        return owned

    variants = pair.variants() if pair else []
    if not variants:
        errors.append(_error(
            "UNKNOWN_OWNED",
            f"clue {owner.ref} owns clue {owned_id}, which does not exist",
            owner,
        ))
        return None
    if len(variants) > 1:
        errors.append(_error(
            "AMBIGUOUS_DIRECTION",
            f"ambiguous direction for clue {owned_id} owned by {owner.ref}: it exists "
            f"both across and down, so the id list must say which",
            owner,
        ))
        return None
    return variants[0]


def resolve_owns(clues: Dict[str, CluePair]) -> List[ParseError]:
    """
    Resolve each id after the first in a clue's id list into ``owns``.

    Runs after :func:`resolve_belongs_to`: an owned clue must already point
    back at its owner.
    """
    errors: List[ParseError] = []

    for owner in iter_clues(clues):
        for id_ref in owner.ids[1:]:
            owned = _owned_clue(clues, owner, id_ref.id, id_ref.direction, errors)
            if owned is None:
                continue

            if owned.belongs_to is None:
                errors.append(_error(
                    "MISSING_BELONGS_TO",
                    f"clue {owned.ref} is owned by {owner.ref} but does not belong to it "
                    f"(its text should start 'See {owner.ref}')",
                    owned,
                ))
            elif owned.belongs_to != owner.ref:
                errors.append(_error(
                    "MISMATCHED_BELONGS_TO",
                    f"clue {owned.ref} is owned by {owner.ref} but belongs to {owned.belongs_to}",
                    owned,
                ))
            else:
                owner.owns.append(owned.ref)

    return errors


def _claims(owner: Clue, clue: Clue) -> bool:
    return any(r.id == clue.id for r in owner.ids[1:])


def check_back_references(clues: Dict[str, CluePair], skip: Set[str]) -> List[ParseError]:
    """
    Every belongs-to must be matched by the target's owns list.

    ``skip`` holds refs already named by an earlier error. A clue is skipped
    when its own ref is in it, or when its owner's ref is and the owner lists
    the clue's id.
    """
    errors: List[ParseError] = []

    for clue in iter_clues(clues):
        if clue.belongs_to is None or str(clue.ref) in skip:
            continue
        owner = find_clue(clues, clue.belongs_to.id, clue.belongs_to.direction)
        if owner is None or (str(owner.ref) in skip and _claims(owner, clue)):
            continue
        if clue.ref not in owner.owns:
            errors.append(_error(
                "UNCLAIMED_BELONGS_TO",
                f"clue {clue.ref} belongs to {owner.ref}, but {owner.ref} does not "
                f"list it in its ids '{owner.ids_text}'",
                clue,
            ))

    return errors


def resolve_relationships(clues: Dict[str, CluePair]) -> List[ParseError]:
    """Resolve belongs-to and owns links in both directions."""
    errors = resolve_belongs_to(clues)
    errors.extend(resolve_owns(clues))
    reported = {str(e.clue) for e in errors if e.clue is not None}
    errors.extend(check_back_references(clues, skip=reported))
    return errors
