"""Shared builders for crossword test texts."""

import logging
from typing import Dict, Iterable

import pytest


HEADER: Dict[str, str] = {
    "version": "standard v1",
    "name": "Crossword 1",
    "author": "Test Setter",
    "editor": "Test Editor",
    "copyright": "2026, Test Publisher",
    "publisher": "Test Publisher",
    "pubdate": "2026/10/19",
    "size": "15x15",
}


def build_text(
    across: Iterable[str] = (),
    down: Iterable[str] = (),
    omit: Iterable[str] = (),
    extra_lines: Iterable[str] = (),
    **fields: str,
) -> str:
    """
    Build a crossword text with a valid header.

    Clue lines are given without their leading "- ". Header values can be
    overridden by keyword, and keys left out with ``omit``.
    """
    omit = set(omit)
    values = dict(HEADER, **fields)
    lines = [f"{key}: {value}" for key, value in values.items() if key not in omit]
    for key, clues in (("across", across), ("down", down)):
        if key in omit:
            continue
        lines.append(f"{key}:")
        lines.extend(f"- {clue}" for clue in clues)
    lines.extend(extra_lines)
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
