"""Human-readable summaries of parse results."""

from typing import List

from .models import Direction, ParseResult, iter_clues


def limit_errors(errors: List[str], max_errors: int = 10) -> List[str]:
    """
    Limit the errors shown to an author.

    Keeps the first ``max_errors - 1`` errors and replaces the rest with a
    single summary line.

    Args:
        errors: Error messages in the order they were found
        max_errors: Maximum number of lines to return (at least 1)

    Returns:
        The errors, limited to max_errors lines
    """
    max_errors = max(max_errors, 1)
    if len(errors) <= max_errors:
        return list(errors)

    kept = errors[:max_errors - 1]
    num_hidden = len(errors) - len(kept)
    kept.append(f"... and {num_hidden} more error{'s' if num_hidden > 1 else ''}. Fix the above first.")
    return kept


def format_report(result: ParseResult, max_errors: int = 10) -> str:
    """Render a short text report for a parse result."""
    if result.is_valid:
        clues = list(iter_clues(result.clues))
        across = sum(1 for c in clues if c.direction == Direction.ACROSS)
        down = len(clues) - across
        name = result.header.name or "(untitled)"
        return (
            f"valid: {name}, {result.dimensions.across}x{result.dimensions.down}, "
            f"{across} across, {down} down, largest clue id {result.largest_clue_id}"
        )

    lines = [f"invalid: {len(result.errors)} error{'s' if len(result.errors) != 1 else ''}"]
    lines.extend(f"  - {e}" for e in limit_errors(result.errors, max_errors))
    return "\n".join(lines)
