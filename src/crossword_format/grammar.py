"""
Grammar for the crossword text format.

Header lines are matched with small named-group patterns. Clue lines, id lists
and answers are read by a hand-written recursive-descent reader so that a
failure reports the column and what was expected there.

    - (1,1) 1,2 down,3 down. Tries during proper practice session (5-4,3)
      ^^^^^ ^^^^^^^^^^^^^^^  ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^ ^^^^^^^
      x,y   id list          body                                  answer
"""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .models import Direction, IdRef


# Header keys mapped to their kind
PERMITTED_KEYS: Dict[str, str] = {
    "version": "string",
    "name": "string",
    "author": "string",
    "editor": "string",
    "copyright": "string",
    "publisher": "string",
    "pubdate": "string",
    "size": "string",
    "across": "list",
    "down": "list",
}

# Answer separators mapped to their meaning
SEPARATORS: Dict[str, str] = {
    ",": "word break",
    "|": "contiguous",
    "-": "hyphenated",
}

PLACEHOLDER = "*"

# Longest digit run accepted for any id, coordinate, size or length
MAX_DIGITS = 9

HEADER_LINE_RE = re.compile(r"^(?P<key>[a-z]+):(?P<value>.*)$")
LIST_ITEM_RE = re.compile(r"^(?P<item>- .+)$")
COMMENT_RE = re.compile(r"^\s*#")
SIZE_RE = re.compile(
    rf"^(?P<across>\d{{1,{MAX_DIGITS}}})x(?P<down>\d{{1,{MAX_DIGITS}}})$"
)
SEE_RE = re.compile(
    rf"^see\s+(?P<id>\d{{1,{MAX_DIGITS}}})\s+(?P<direction>across|down)\b", re.IGNORECASE
)


class GrammarError(ValueError):
    """Raised by the reader when text does not match the grammar."""

    def __init__(self, expected: str, column: int, text: str) -> None:
        self.expected = expected
        self.column = column
        self.text = text
        super().__init__(f"expected {expected} at column {column}")


class ClueLine(NamedTuple):
    """Named fields of one successfully read clue line."""
    x: int
    y: int
    ids: List[IdRef]
    ids_text: str
    body: str
    answer_text: str


class _Reader:
    """Cursor over a single line of text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, expected: str) -> GrammarError:
        return GrammarError(expected, self.pos, self.text)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip_ws(self, required: bool = False) -> None:
        start = self.pos
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1
        if required and self.pos == start:
            raise self.fail("whitespace")

    def literal(self, char: str) -> None:
        if self.peek() != char:
            raise self.fail(f"'{char}'")
        self.pos += 1

    def _run(self, accept) -> str:
        start = self.pos
        while not self.at_end() and accept(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def digits(self) -> str:
        start = self.pos
        digits = self._run(_is_digit)
        if len(digits) > MAX_DIGITS:
            self.pos = start
            raise self.fail(f"a number of at most {MAX_DIGITS} digits")
        return digits

    def integer(self) -> int:
        digits = self.digits()
        if not digits:
            raise self.fail("a number")
        return int(digits)

    def letters(self) -> str:
        return self._run(_is_letter)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _read_coordinates(reader: _Reader) -> Tuple[int, int]:
    reader.literal("(")
    reader.skip_ws()
    x = reader.integer()
    reader.skip_ws()
    reader.literal(",")
    reader.skip_ws()
    y = reader.integer()
    reader.skip_ws()
    reader.literal(")")
    return x, y


def _read_id_list(reader: _Reader) -> List[IdRef]:
    ids = [IdRef(id=reader.integer())]
    while reader.peek() == ",":
        reader.pos += 1
        reader.skip_ws()
        ref = IdRef(id=reader.integer())
        mark = reader.pos
        reader.skip_ws()
        word = reader.letters()
        if word.lower() in (d.value for d in Direction):
            ref.direction = Direction.parse(word)
        else:
            reader.pos = mark
        ids.append(ref)
    return ids


def _read_body_and_answer(reader: _Reader) -> Tuple[str, str]:
    start = reader.pos
    rest = reader.text[start:].rstrip()
    if not rest.endswith(")"):
        reader.pos = start + len(rest)
        raise reader.fail("')' closing the answer")
    opening = rest.rfind("(")
    if opening < 0:
        reader.pos = start + len(rest)
        raise reader.fail("'(' opening the answer")
    body = rest[:opening].strip()
    if not body:
        raise reader.fail("clue text before the answer")
    answer_text = rest[opening + 1:-1]
    if not answer_text.strip():
        reader.pos = start + opening + 1
        raise reader.fail("an answer inside the parentheses")
    reader.pos = start + len(rest)
    return body, answer_text


def read_clue_line(text: str) -> ClueLine:
    """Read ``- (X,Y) IDLIST. BODY (ANSWER)`` into named fields."""
    reader = _Reader(text)
    reader.literal("-")
    reader.skip_ws(required=True)
    x, y = _read_coordinates(reader)
    reader.skip_ws(required=True)

    ids_start = reader.pos
    ids = _read_id_list(reader)
    ids_text = text[ids_start:reader.pos]
    reader.literal(".")
    reader.skip_ws(required=True)

    body, answer_text = _read_body_and_answer(reader)
    return ClueLine(x, y, ids, ids_text, body, answer_text)


def read_answer(text: str) -> List[Tuple[Optional[str], str, int]]:
    """
    Read an answer specification into ``(separator, token, column)`` triples.

    The first triple has no separator. Tokens are letter runs or decimal
    lengths; whitespace around separators is ignored. ``column`` is where the
    token starts in ``text``.
    """
    reader = _Reader(text)
    tokens: List[Tuple[Optional[str], str, int]] = []
    separator: Optional[str] = None
    reader.skip_ws()
    while True:
        column = reader.pos
        if _is_letter(reader.peek()):
            token = reader.letters()
        elif _is_digit(reader.peek()):
            token = reader.digits()
        else:
            raise reader.fail("letters or a length")
        tokens.append((separator, token, column))

        reader.skip_ws()
        if reader.at_end():
            return tokens
        separator = reader.peek()
        if separator not in SEPARATORS:
            raise reader.fail("one of " + " ".join(f"'{s}'" for s in SEPARATORS))
        reader.pos += 1
        reader.skip_ws()


def read_see_reference(body: str) -> Optional[Tuple[int, Direction]]:
    """Return the clue named by a leading ``See 3 Down``, if any."""
    match = SEE_RE.match(body)
    if not match:
        return None
    return int(match.group("id")), Direction.parse(match.group("direction"))


# =============================================================================
# Published description of the format
# =============================================================================


class KeySpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: str


class SeparatorSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    char: str
    meaning: str


class PatternSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str
    description: str
    example: str


class FormatSpec(BaseModel):
    """Read-only description of the crossword text format."""
    model_config = ConfigDict(frozen=True)

    keys: Tuple[KeySpec, ...]
    separators: Tuple[SeparatorSpec, ...]
    directions: Tuple[str, ...]
    placeholder: str
    patterns: Tuple[PatternSpec, ...]

    def key(self, name: str) -> Optional[KeySpec]:
        return next((k for k in self.keys if k.name == name), None)


FORMAT_SPEC = FormatSpec(
    keys=tuple(KeySpec(name=k, kind=v) for k, v in PERMITTED_KEYS.items()),
    separators=tuple(SeparatorSpec(char=c, meaning=m) for c, m in SEPARATORS.items()),
    directions=tuple(d.value for d in Direction),
    placeholder=PLACEHOLDER,
    patterns=(
        PatternSpec(
            name="header_line",
            pattern=HEADER_LINE_RE.pattern,
            description="key: value, or a list key with nothing after the colon",
            example="name: Crossword 15,657",
        ),
        PatternSpec(
            name="list_item",
            pattern=LIST_ITEM_RE.pattern,
            description="bullet line inside an across or down list",
            example="- (1,1) 1. Tries during proper practice session (9)",
        ),
        PatternSpec(
            name="clue_line",
            pattern="- (X,Y) IDLIST. BODY (ANSWER)",
            description="start coordinates, id list, clue text and answer",
            example="- (1,1) 1,2 down. Pitch (5,4)",
        ),
        PatternSpec(
            name="id_list",
            pattern="ID(,ID[ across|down])*",
            description="canonical id followed by the ids of linked clues",
            example="1,2 down,3 down",
        ),
        PatternSpec(
            name="answer",
            pattern="TOKEN(SEP TOKEN)*",
            description="letter runs or lengths joined by , (word break), | (contiguous) or - (hyphen)",
            example="5-4,3",
        ),
        PatternSpec(
            name="size",
            pattern=SIZE_RE.pattern,
            description="grid width and height",
            example="15x15",
        ),
        PatternSpec(
            name="belongs_to",
            pattern=SEE_RE.pattern,
            description="clue text marking a clue as part of another clue's answer",
            example="See 1 Across",
        ),
    ),
)
