"""Tests for index/lexical.py module.

Covers:
- locate_keyword()
- find_prelude_end()
- is_cursor_in_prelude()
- extract_names()
"""

from __future__ import annotations

import pytest

from layerlens.index.lexical import (
    extract_names,
    find_prelude_end,
    is_cursor_in_prelude,
    locate_keyword,
)
from layerlens.index.models import NameToken, Span


class TestLocateKeyword:
    """Tests for locate_keyword function."""

    def test_finds_keyword_span(self) -> None:
        """Returns the span of @layer on the line."""
        assert locate_keyword("@layer reset, base;") == Span(0, 6)

    def test_finds_indented_keyword(self) -> None:
        """Offsets are absolute within the line."""
        assert locate_keyword("  @layer base {") == Span(2, 8)

    def test_is_case_insensitive(self) -> None:
        """@LAYER and @Layer are recognized."""
        assert locate_keyword("@LAYER a;") == Span(0, 6)
        assert locate_keyword("@Layer a;") == Span(0, 6)

    def test_requires_whole_word(self) -> None:
        """@layers is not the keyword."""
        assert locate_keyword("@layers a;") is None

    def test_returns_none_without_keyword(self) -> None:
        """Lines without the keyword yield None."""
        assert locate_keyword(".btn { color: red; }") is None

    def test_returns_first_occurrence(self) -> None:
        """Only the first keyword on a line is located."""
        assert locate_keyword("@layer a; @layer b;") == Span(0, 6)


class TestFindPreludeEnd:
    """Tests for find_prelude_end function."""

    def test_stops_at_semicolon(self) -> None:
        line = "@layer a, b;"
        assert find_prelude_end(line, 6) == 11

    def test_stops_at_brace(self) -> None:
        line = "@layer a {"
        assert find_prelude_end(line, 6) == 9

    def test_first_terminator_wins(self) -> None:
        """When both exist, whichever comes first in the line wins."""
        assert find_prelude_end("@layer a { b; }", 6) == 9
        assert find_prelude_end("@layer a; b {", 6) == 8

    def test_unterminated_line_runs_to_end(self) -> None:
        line = "@layer reset, base"
        assert find_prelude_end(line, 6) == len(line)

    def test_ignores_terminators_before_from_index(self) -> None:
        line = "a; @layer b;"
        assert find_prelude_end(line, 9) == 11


class TestIsCursorInPrelude:
    """Tests for is_cursor_in_prelude function."""

    LINE = "  @layer reset, base; .x {}"

    def test_false_without_keyword(self) -> None:
        assert is_cursor_in_prelude(".x { color: red; }", 3) is False

    @pytest.mark.parametrize("cursor", range(9, 20))
    def test_true_between_keyword_and_terminator(self, cursor: int) -> None:
        """Every offset after the keyword and before ';' is inside."""
        assert is_cursor_in_prelude(self.LINE, cursor) is True

    def test_bounds_are_inclusive(self) -> None:
        """Keyword start and the terminator offset itself both count."""
        assert is_cursor_in_prelude(self.LINE, 2) is True
        assert is_cursor_in_prelude(self.LINE, 20) is True

    def test_false_before_keyword(self) -> None:
        assert is_cursor_in_prelude(self.LINE, 0) is False
        assert is_cursor_in_prelude(self.LINE, 1) is False

    def test_false_after_terminator(self) -> None:
        assert is_cursor_in_prelude(self.LINE, 21) is False
        assert is_cursor_in_prelude(self.LINE, 25) is False

    def test_unterminated_line_covers_to_end(self) -> None:
        line = "@layer reset"
        assert is_cursor_in_prelude(line, len(line)) is True


class TestExtractNames:
    """Tests for extract_names function."""

    def test_extracts_names_with_absolute_offsets(self) -> None:
        line = "@layer reset, base;"
        assert extract_names(line, 6, 18) == [
            NameToken("reset", 7, 12),
            NameToken("base", 14, 18),
        ]

    def test_keeps_dotted_names_whole(self) -> None:
        """utilities.buttons is one token, not two."""
        line = "@layer utilities.buttons, a.b.c;"
        names = [t.name for t in extract_names(line, 6, 31)]
        assert names == ["utilities.buttons", "a.b.c"]

    def test_accepts_hyphens_and_underscores(self) -> None:
        line = "@layer -vendor, _private, my-layer.-x;"
        names = [t.name for t in extract_names(line, 6, len(line) - 1)]
        assert names == ["-vendor", "_private", "my-layer.-x"]

    def test_empty_prelude(self) -> None:
        assert extract_names("@layer {", 6, 7) == []

    def test_token_text_matches_offsets(self) -> None:
        line = "   @layer theme ,layout,  utilities ;"
        for token in extract_names(line, 9, line.index(";")):
            assert line[token.start : token.end] == token.name
