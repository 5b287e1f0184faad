"""
Tests for answer segmentation and length reconciliation.

Covers:
- Splitting answers into letter and length parts
- Answer parse errors
- Multi-part answers on linked clues
- Handing tail parts of an owner's answer to its owned clues
"""

import pytest

from crossword_format import ClueRef, Direction, PLACEHOLDER, parse
from crossword_format.answers import segment_answer
from crossword_format.grammar import MAX_DIGITS, GrammarError

from conftest import build_text


class TestSegmentAnswer:
    """Test cases for splitting a single answer."""

    def test_single_length(self):
        """A bare length is one placeholder part."""
        answer = segment_answer("9")
        assert len(answer.parts) == 1
        assert answer.parts[0].source == "9"
        assert answer.parts[0].text == PLACEHOLDER * 9
        assert answer.parts[0].length == 9
        assert answer.parts[0].separator is None
        assert answer.length == 9
        assert answer.length_owned is None

    def test_multiple_lengths(self):
        """Parts keep their order and the separator before them."""
        answer = segment_answer("5,4,3")
        assert [p.length for p in answer.parts] == [5, 4, 3]
        assert [p.separator for p in answer.parts] == [None, ",", ","]
        assert answer.length == 12

    def test_letters(self):
        """Letter runs are their own display text."""
        answer = segment_answer("CAT|dog")
        assert [p.text for p in answer.parts] == ["CAT", "dog"]
        assert [p.length for p in answer.parts] == [3, 3]
        assert answer.parts[1].separator == "|"

    def test_mixed_separators(self):
        """Each part records the separator that precedes it."""
        answer = segment_answer("5-4|2,3")
        assert [p.separator for p in answer.parts] == [None, "-", "|", ","]
        assert answer.length == 14

    def test_whitespace_around_separators(self):
        """Spaces around separators are ignored."""
        answer = segment_answer(" 5, 4 ")
        assert [p.length for p in answer.parts] == [5, 4]

    @pytest.mark.parametrize("text", ["5a", "5,,4", "5,", "0", "5;4", "?", "4 4"])
    def test_invalid_answers(self, text):
        """Tokens must be letters or positive lengths joined by separators."""
        with pytest.raises(GrammarError):
            segment_answer(text)

    def test_error_column_points_at_token(self):
        """The reported column is where the offending token starts."""
        with pytest.raises(GrammarError) as exc_info:
            segment_answer("10,0")
        assert exc_info.value.column == 3

    def test_max_length(self):
        """Lengths beyond max_length are rejected."""
        assert segment_answer("5,15", max_length=15).length == 20
        with pytest.raises(GrammarError) as exc_info:
            segment_answer("5, 16", max_length=15)
        assert exc_info.value.expected == "a length of at most 15"
        assert exc_info.value.column == 3

    def test_overlong_digit_run(self):
        """A length with too many digits is a grammar error."""
        with pytest.raises(GrammarError) as exc_info:
            segment_answer("9" * 5000)
        assert exc_info.value.expected == f"a number of at most {MAX_DIGITS} digits"
        assert exc_info.value.column == 0


class TestSegmentation:
    """Test cases for answers within a parse."""

    def test_answer_attached(self):
        """Every clue gets an answer."""
        result = parse(build_text(across=["(1,1) 1. Tries during proper practice session (9)"]))
        answer = result.clues["1"].across.answer
        assert answer.length == 9
        assert answer.parts[0].assigned_to is None

    def test_unparsable_answer(self):
        """A bad answer token is a 'failed to parse' error."""
        result = parse(build_text(across=["(1,1) 1. Bad answer (5x)"]))
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert "failed to parse" in result.errors[0]

    def test_all_bad_answers_reported(self):
        """Segmentation reports every bad answer, not just the first."""
        result = parse(build_text(
            across=["(1,1) 1. Bad (5x)"],
            down=["(3,1) 2. Also bad (0)"],
        ))
        assert [d.code for d in result.diagnostics] == ["INVALID_ANSWER", "INVALID_ANSWER"]

    @pytest.mark.parametrize("answer,expected", [
        ("16", "a length of at most 15"),
        ("3,99999999", "a length of at most 15"),
        ("99999999999999", f"a number of at most {MAX_DIGITS} digits"),
        ("9" * 5000, f"a number of at most {MAX_DIGITS} digits"),
    ])
    def test_length_longer_than_grid(self, answer, expected):
        """A length no grid line can hold fails to parse."""
        result = parse(build_text(across=[f"(1,1) 1. Body ({answer})"]))
        assert [d.code for d in result.diagnostics] == ["INVALID_ANSWER"]
        assert "failed to parse" in result.errors[0]
        assert expected in result.errors[0]
        assert result.clues["1"].across.answer is None

    def test_length_limit_follows_larger_dimension(self):
        """On a rectangular grid the longer side sets the limit."""
        result = parse(build_text(
            across=["(1,1) 1. Wide (20)"],
            down=["(1,1) 1. Too long here (20)"],
            size="20x5",
        ))
        assert [d.code for d in result.diagnostics] == ["OUTSIDE_GRID"]

    def test_belongs_to_multi_part_answer(self):
        """A linked clue must be a single word."""
        result = parse(build_text(
            across=["(1,1) 1,2 down. Pitch (5,2,1)"],
            down=["(7,1) 2. See 1 Across (2,1)"],
        ))
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert "belongs-to with multi-part answer not allowed" in result.errors[0]


class TestReconciliation:
    """Test cases for sharing an answer between linked clues."""

    @pytest.mark.parametrize("separator", [",", "-", "|"])
    def test_owner_keeps_leading_parts(self, separator):
        """(5,4,3) split over an owner and two owned clues leaves 5 for the owner."""
        result = parse(build_text(
            across=[f"(1,1) 1,2 down,3 down. Pitch ({separator.join(['5', '4', '3'])})"],
            down=["(7,1) 2. See 1 Across (4)", "(9,1) 3. See 1 Across (3)"],
        ))
        assert result.errors == []

        answer = result.clues["1"].across.answer
        assert answer.length == 5
        assert answer.length_owned == 12
        assert answer.parts[1].separator == separator
        assert answer.parts[2].separator == separator
        assert answer.parts[0].assigned_to is None
        assert answer.parts[1].assigned_to == ClueRef(id="2", direction=Direction.DOWN)
        assert answer.parts[2].assigned_to == ClueRef(id="3", direction=Direction.DOWN)

    def test_owned_clue_spans_several_parts(self):
        """An owned clue may take more than one trailing part."""
        result = parse(build_text(
            across=["(1,1) 1,2 down. Pitch (5,2-2)"],
            down=["(7,1) 2. See 1 Across (4)"],
        ))
        assert result.errors == []

        answer = result.clues["1"].across.answer
        assert answer.length == 5
        assert answer.length_owned == 9
        owned_ref = ClueRef(id="2", direction=Direction.DOWN)
        assert [p.assigned_to for p in answer.parts] == [None, owned_ref, owned_ref]

    def test_owned_clues_unchanged(self):
        """Owned clues keep their own declared lengths."""
        result = parse(build_text(
            across=["(1,1) 1,2 down,3 down. Pitch (5,4,3)"],
            down=["(7,1) 2. See 1 Across (4)", "(9,1) 3. See 1 Across (3)"],
        ))
        assert result.clues["2"].down.answer.length == 4
        assert result.clues["2"].down.answer.length_owned is None
        assert result.clues["3"].down.answer.length == 3

    def test_cannot_encompass(self):
        """Owned lengths must line up with whole parts."""
        result = parse(build_text(
            across=["(1,1) 1,2 down,3 down. Pitch (5,4,3)"],
            down=["(7,1) 2. See 1 Across (4)", "(9,1) 3. See 1 Across (2)"],
        ))
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert "cannot encompass the answer of owned clue" in result.errors[0]

    def test_owned_longer_than_answer(self):
        """Running out of parts is also a mismatch."""
        result = parse(build_text(
            across=["(1,1) 1,2 down. Pitch (3)"],
            down=["(7,1) 2. See 1 Across (4)"],
        ))
        assert result.is_valid is False
        assert [d.code for d in result.diagnostics] == ["CANNOT_ENCOMPASS"]

    def test_owner_left_with_nothing(self):
        """An owner must keep at least one part for itself."""
        result = parse(build_text(
            across=["(1,1) 1,2 down,3 down. Pitch (4,3)"],
            down=["(7,1) 2. See 1 Across (4)", "(9,1) 3. See 1 Across (3)"],
        ))
        assert result.is_valid is False
        assert [d.code for d in result.diagnostics] == ["NO_REMAINING_PARTS"]
