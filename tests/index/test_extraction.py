"""Tests for index/extraction.py module.

Covers:
- parse_name_list()
- line_and_column()
- make_preview()
- extract_declarations()
- scan_file()
"""

from __future__ import annotations

from layerlens.config.constants import PREVIEW_MAX_CHARS
from layerlens.index.extraction import (
    extract_declarations,
    line_and_column,
    make_preview,
    parse_name_list,
    scan_file,
)
from layerlens.index.models import SkipReason, SourceLocation


class TestParseNameList:
    """Tests for parse_name_list function."""

    def test_splits_and_trims(self) -> None:
        assert parse_name_list(" reset ,base,  utilities ") == ("reset", "base", "utilities")

    def test_dedup_keeps_first_occurrence(self) -> None:
        assert parse_name_list("a, b, a, c") == ("a", "b", "c")

    def test_drops_empty_segments(self) -> None:
        """Trailing and doubled commas are tolerated."""
        assert parse_name_list("a,, b,") == ("a", "b")

    def test_dedup_is_exact_string_equality(self) -> None:
        """Case differences are distinct names."""
        assert parse_name_list("Base, base") == ("Base", "base")

    def test_only_commas_is_empty(self) -> None:
        assert parse_name_list(" , ,") == ()


class TestLineAndColumn:
    """Tests for line_and_column function."""

    def test_first_line(self) -> None:
        assert line_and_column("abc", 2) == (0, 2)

    def test_after_newlines(self) -> None:
        text = "a\nbc\n  @layer x;"
        assert line_and_column(text, text.index("@")) == (2, 2)

    def test_start_of_line(self) -> None:
        text = "a\n@layer"
        assert line_and_column(text, 2) == (1, 0)


class TestMakePreview:
    """Tests for make_preview function."""

    def test_collapses_whitespace(self) -> None:
        assert make_preview("@layer\n  a,\n\tb;") == "@layer a, b;"

    def test_truncates_to_cap(self) -> None:
        statement = "@layer " + ", ".join(f"layer{i}" for i in range(200)) + ";"
        preview = make_preview(statement)
        assert len(preview) == PREVIEW_MAX_CHARS
        assert "\n" not in preview


class TestExtractDeclarations:
    """Tests for extract_declarations function."""

    def test_single_statement(self) -> None:
        decls = extract_declarations("@layer reset, base, utilities;", "a.css")
        assert len(decls) == 1
        assert decls[0].names == ("reset", "base", "utilities")
        assert decls[0].location == SourceLocation("a.css", 0, 0)
        assert decls[0].preview == "@layer reset, base, utilities;"

    def test_duplicates_collapse(self) -> None:
        (decl,) = extract_declarations("@layer a, b, a, c;")
        assert decl.names == ("a", "b", "c")

    def test_location_of_later_statement(self) -> None:
        text = "/* tokens */\n\n.x { }\n  @layer reset, base, utilities;\n"
        (decl,) = extract_declarations(text, "styles/main.scss")
        assert decl.location == SourceLocation("styles/main.scss", 3, 2)

    def test_multiline_statement(self) -> None:
        text = "@layer\n  reset,\n  base;\n"
        (decl,) = extract_declarations(text)
        assert decl.names == ("reset", "base")
        assert decl.preview == "@layer reset, base;"

    def test_block_form_is_ignored(self) -> None:
        text = "@layer base {\n  a { color: red; }\n}\n"
        assert extract_declarations(text) == []

    def test_anonymous_block_is_ignored(self) -> None:
        assert extract_declarations("@layer { a { color: red; } }") == []

    def test_empty_list_is_discarded_and_scan_continues(self) -> None:
        text = "@layer , ;\n@layer a, b;"
        decls = extract_declarations(text)
        assert [d.names for d in decls] == [("a", "b")]
        assert decls[0].location.line == 1

    def test_case_insensitive_keyword(self) -> None:
        (decl,) = extract_declarations("@LAYER a, b;")
        assert decl.names == ("a", "b")

    def test_multiple_statements_in_source_order(self) -> None:
        text = "@layer a;\n@layer b, c;\n@layer d, e, f;"
        decls = extract_declarations(text)
        assert [d.names for d in decls] == [("a",), ("b", "c"), ("d", "e", "f")]
        assert [d.location.line for d in decls] == [0, 1, 2]


class TestScanFile:
    """Tests for scan_file function."""

    def test_ok_scan(self) -> None:
        result = scan_file("a.css", b"@layer a, b;")
        assert result.ok
        assert result.skipped is None
        assert result.declarations[0].names == ("a", "b")

    def test_oversized_file_is_skipped(self) -> None:
        result = scan_file("big.css", b"@layer a;" + b" " * 100, max_bytes=50)
        assert result.skipped is SkipReason.OVERSIZED
        assert result.declarations == ()

    def test_undecodable_file_is_skipped(self) -> None:
        result = scan_file("bin.css", b"\xff\xfe@layer a;\x80")
        assert result.skipped is SkipReason.UNDECODABLE
        assert result.declarations == ()

    def test_bom_is_tolerated(self) -> None:
        result = scan_file("bom.css", "\ufeff@layer a, b;".encode())
        assert result.ok
        assert result.declarations[0].location.column == 0

    def test_file_without_declarations(self) -> None:
        result = scan_file("plain.css", b".x { color: red; }")
        assert result.ok
        assert result.declarations == ()
