"""Unit tests for indentation inference and re-indentation."""

import pytest

from swift_refactor.indentation import (
    DEFAULT_INDENTATION_UNIT,
    IndentationUnit,
    infer_indentation,
    infer_indentation_unit,
    infer_newline,
    leading_indentation,
    line_indentation,
    reindented,
    starts_line,
    strip_indentation,
)
from swift_refactor.syntax.nodes import TryExpr
from swift_refactor.syntax.parser import parse_source
from swift_refactor.syntax.trivia import Trivia, TriviaPiece


class TestIndentationUnit:
    def test_spaces_and_tab(self):
        assert IndentationUnit.spaces(4).code == "    "
        assert IndentationUnit.tab().code == "\t"
        assert str(IndentationUnit.spaces(2)) == "2 spaces"
        assert str(IndentationUnit.tab()) == "1 tab"

    def test_width_must_be_positive(self):
        with pytest.raises(ValueError):
            IndentationUnit.spaces(0)

    def test_added_to_merges_same_kind(self):
        assert IndentationUnit.spaces(2).added_to(Trivia.spaces(4)) == Trivia.spaces(6)
        assert IndentationUnit.tab().added_to(Trivia.tabs(1)) == Trivia.tabs(2)

    def test_added_to_appends_other_kind(self):
        assert IndentationUnit.spaces(2).added_to(Trivia.tabs(1)) == Trivia.of(
            TriviaPiece.tabs(1), TriviaPiece.spaces(2)
        )
        assert IndentationUnit.tab().added_to(Trivia()) == Trivia.tabs(1)


class TestLeadingIndentation:
    def test_after_last_newline(self):
        trivia = Trivia.from_text("  // a\n\t\t")
        assert leading_indentation(trivia) == Trivia.tabs(2)

    def test_without_newline(self):
        assert leading_indentation(Trivia.spaces(3)) == Trivia.spaces(3)

    def test_stops_at_comment(self):
        assert leading_indentation(Trivia.from_text("\n  /* c */ ")) == Trivia.spaces(2)


class TestInference:
    def test_infers_four_spaces(self):
        tree = parse_source("func f() {\n    a()\n    if x {\n        b()\n    }\n}\n")
        assert infer_indentation(tree) == IndentationUnit.spaces(4)

    def test_infers_tabs(self):
        tree = parse_source("func f() {\n\ta()\n}\n")
        assert infer_indentation(tree) == IndentationUnit.tab()

    def test_most_common_wins(self):
        source = "a {\n  b()\n}\nc {\n    d()\n}\ne {\n    f()\n}\n"
        assert infer_indentation(parse_source(source)) == IndentationUnit.spaces(4)

    def test_first_seen_wins_ties(self):
        source = "a {\n   b()\n}\nc {\n  d()\n}\n"
        assert infer_indentation(parse_source(source)) == IndentationUnit.spaces(3)

    def test_continuation_lines_count(self):
        # a relative sample, not the absolute indentation of the line
        tree = parse_source("  let a = b\n      .c()\n")
        assert infer_indentation(tree) == IndentationUnit.spaces(2)

    def test_no_samples(self):
        tree = parse_source("a()\nb()\n")
        assert infer_indentation(tree) is None
        assert infer_indentation_unit(tree) == DEFAULT_INDENTATION_UNIT
        assert infer_indentation_unit(tree, IndentationUnit.tab()) == IndentationUnit.tab()
        assert infer_indentation_unit(None) == DEFAULT_INDENTATION_UNIT


class TestLineIndentation:
    def test_nested_statement(self):
        tree = parse_source("func f() {\n    let a = try! g()\n}")
        (try_expr,) = tree.find_all(TryExpr)
        assert line_indentation(tree, try_expr) == Trivia.spaces(4)

    def test_uses_first_token_of_the_line(self):
        tree = parse_source("\tlet a = b +\n\t\ttry! c()")
        (try_expr,) = tree.find_all(TryExpr)
        assert line_indentation(tree, try_expr) == Trivia.tabs(2)
        assert line_indentation(tree, tree.statements[0]) == Trivia.tabs(1)

    def test_detached_node(self):
        tree = parse_source("a")
        other = parse_source("  b").statements[0]
        assert line_indentation(tree, other) == Trivia()

    def test_starts_line(self):
        tree = parse_source("a(); b()\nc()")
        first, second, third = tree.statements
        assert starts_line(tree, first)
        assert not starts_line(tree, second)
        assert starts_line(tree, third)
        assert starts_line(None, second)


class TestNewlineStyle:
    def test_crlf(self):
        assert infer_newline(parse_source("a\r\nb")) == Trivia.of(TriviaPiece.carriage_return_line_feeds(1))

    def test_lf_and_default(self):
        assert infer_newline(parse_source("a\nb")) == Trivia.newline()
        assert infer_newline(parse_source("a")) == Trivia.newline()
        assert infer_newline(None) == Trivia.newline()


class TestStripIndentation:
    def test_exact_prefix(self):
        assert strip_indentation(Trivia.of(TriviaPiece.spaces(4)), Trivia.spaces(4)) == Trivia()

    def test_partial_last_piece(self):
        assert strip_indentation(Trivia.spaces(6), Trivia.spaces(4)) == Trivia.spaces(2)

    def test_mismatch_is_left_in_place(self):
        assert strip_indentation(Trivia.tabs(1), Trivia.spaces(4)) == Trivia.tabs(1)

    def test_shorter_run_is_left_in_place(self):
        assert strip_indentation(Trivia.spaces(2), Trivia.spaces(4)) == Trivia.spaces(2)

    def test_keeps_following_pieces(self):
        trivia = Trivia.from_text("  // c")
        assert strip_indentation(trivia, Trivia.spaces(2)) == Trivia.of(TriviaPiece.line_comment("// c"))


class TestReindented:
    def test_moves_every_line(self):
        statement = parse_source("  let a = b +\n    c // tail\n").statements[0].item
        moved = reindented(statement, Trivia.spaces(2), Trivia.spaces(4))
        assert moved.code == "  let a = b +\n      c // tail"

    def test_indent_first_line(self):
        statement = parse_source("f(\n  x)").statements[0].item
        moved = reindented(statement, Trivia(), Trivia.tabs(1), indent_first_line=True)
        assert moved.code == "\tf(\n\t  x)"

    def test_unchanged_without_newlines(self):
        statement = parse_source("f(x)").statements[0].item
        assert reindented(statement, Trivia(), Trivia.spaces(2)) is statement
