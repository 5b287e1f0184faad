"""Data models for crossword parsing and validation."""

from enum import Enum
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field, computed_field


class Direction(str, Enum):
    """Axis along which an answer is written."""

    ACROSS = "across"
    DOWN = "down"

    @classmethod
    def parse(cls, text: str) -> "Direction":
        return cls(text.strip().lower())


class Stage(str, Enum):
    """Pipeline states, in the order they are reached."""

    EMPTY = "empty"
    SCANNED = "scanned"
    CLUES_PARSED = "clues_parsed"
    SIZE_PARSED = "size_parsed"
    RELATIONSHIPS_RESOLVED = "relationships_resolved"
    ANSWERS_SEGMENTED = "answers_segmented"
    BOUNDS_CHECKED = "bounds_checked"
    CONTIGUITY_CHECKED = "contiguity_checked"
    DONE = "done"


class ClueRef(BaseModel):
    """Reference to one direction of a clue."""
    id: str
    direction: Direction

    def __str__(self) -> str:
        return f"{self.id} {self.direction.value}"


class IdRef(BaseModel):
    """One entry of a clue's id list, e.g. the ``2 down`` in ``1,2 down``."""
    id: int = Field(..., ge=0)
    direction: Optional[Direction] = None


class Dimensions(BaseModel):
    """Grid size: ``across`` is the width, ``down`` the height."""
    across: int = Field(..., gt=0)
    down: int = Field(..., gt=0)

    def along(self, direction: Direction) -> int:
        return self.across if direction == Direction.ACROSS else self.down


class AnswerPart(BaseModel):
    """A single segment of an answer."""
    source: str
    text: str
    length: int = Field(..., ge=0)
    separator: Optional[str] = None  # links this part to the previous one
    assigned_to: Optional[ClueRef] = None


class Answer(BaseModel):
    """A clue's segmented answer."""
    parts: List[AnswerPart] = Field(default_factory=list)
    length: int = 0
    length_owned: Optional[int] = None  # total before redistribution, owners only


class Clue(BaseModel):
    """One direction of a numbered clue, with its raw fragments and resolved links."""
    id: int
    direction: Direction
    x: int
    y: int
    ids: List[IdRef] = Field(default_factory=list)
    ids_text: str
    body: str
    answer_text: str
    line: str
    position: int  # index within its direction's list
    belongs_to: Optional[ClueRef] = None
    owns: List[ClueRef] = Field(default_factory=list)
    answer: Optional[Answer] = None

    @property
    def ref(self) -> ClueRef:
        return ClueRef(id=str(self.id), direction=self.direction)


class CluePair(BaseModel):
    """The across and down variants sharing a clue id."""
    across: Optional[Clue] = None
    down: Optional[Clue] = None

    def get(self, direction: Direction) -> Optional[Clue]:
        return self.across if direction == Direction.ACROSS else self.down

    def set(self, clue: Clue) -> None:
        if clue.direction == Direction.ACROSS:
            self.across = clue
        else:
            self.down = clue

    def variants(self) -> List[Clue]:
        return [c for c in (self.across, self.down) if c is not None]


class Header(BaseModel):
    """Metadata block plus the raw across/down bullet lines."""
    version: Optional[str] = None
    name: Optional[str] = None
    author: Optional[str] = None
    editor: Optional[str] = None
    copyright: Optional[str] = None
    publisher: Optional[str] = None
    pubdate: Optional[str] = None
    size: Optional[str] = None
    across: List[str] = Field(default_factory=list)
    down: List[str] = Field(default_factory=list)


class ParseError(BaseModel):
    """A single parse or validation problem."""
    code: str
    message: str
    stage: Stage
    line: Optional[int] = None
    column: Optional[int] = None
    clue: Optional[ClueRef] = None

    def __str__(self) -> str:
        return self.message


class ParseResult(BaseModel):
    """Result of parsing a crossword text."""
    diagnostics: List[ParseError] = Field(default_factory=list)
    stage: Stage = Stage.EMPTY
    header: Optional[Header] = None
    dimensions: Optional[Dimensions] = None
    clues: Dict[str, CluePair] = Field(default_factory=dict)
    largest_clue_id: Optional[str] = None

    @computed_field
    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    @computed_field
    @property
    def is_valid(self) -> bool:
        return self.stage == Stage.DONE and len(self.diagnostics) == 0

    def clue(self, ref: ClueRef) -> Optional[Clue]:
        return find_clue(self.clues, ref.id, ref.direction)


def iter_clues(clues: Dict[str, CluePair]) -> Iterator[Clue]:
    """Yield every clue, by id, across before down."""
    for pair in clues.values():
        yield from pair.variants()


def find_clue(clues: Dict[str, CluePair], clue_id: str, direction: Direction) -> Optional[Clue]:
    pair = clues.get(clue_id)
    return pair.get(direction) if pair else None
