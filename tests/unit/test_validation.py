"""Tests for validation of rewritten source."""

from collections import Counter

import pytest

from swift_refactor.exceptions import TransformationValidationError
from swift_refactor.validation import collect_comments, validate_output


def test_collect_comments_from_leading_and_trailing_trivia():
    code = "// head\nlet a = b // tail\n/* block */ c()\n// tail\n"
    assert collect_comments(code) == Counter({"// head": 1, "// tail": 2, "/* block */": 1})


def test_valid_output_passes():
    validate_output("let a = try! f() // why", "do {\n  let a = try f() // why\n} catch {\n}")


def test_unparsable_output_is_rejected():
    with pytest.raises(TransformationValidationError, match="does not parse") as exc_info:
        validate_output("a()", "a() {", "demo.swift")
    assert exc_info.value.details == {"validation_type": "output", "source_file": "demo.swift"}


def test_lost_comment_is_rejected():
    with pytest.raises(TransformationValidationError, match="lost 1 comment"):
        validate_output("a() // keep me\nb()", "a()\nb()")


def test_duplicate_comments_are_counted():
    with pytest.raises(TransformationValidationError, match="lost 1 comment"):
        validate_output("// same\n// same\na()", "// same\na()")


def test_added_comments_are_fine():
    validate_output("a()", "// new\na()")
