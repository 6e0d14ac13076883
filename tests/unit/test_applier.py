"""Tests for RefactoringApplier and apply_refactoring."""

import logging

import pytest

from swift_refactor.applier import RefactoringApplier, apply_refactoring, direct_candidates
from swift_refactor.config import RefactorConfig
from swift_refactor.debug import DEBUG_ENV_VAR
from swift_refactor.exceptions import RefactorError
from swift_refactor.indentation import IndentationUnit
from swift_refactor.refactoring import ConvertToDoCatch, SyntaxRefactoringProvider
from swift_refactor.result import Result
from swift_refactor.syntax.nodes import TryExpr
from swift_refactor.syntax.parser import parse_source


class ExplodingProvider(SyntaxRefactoringProvider):
    name = "exploding"
    input_kind = TryExpr

    def check(self, syntax):
        return Result.success(syntax)

    def refactor(self, syntax, context):
        raise KeyError("boom")


class FailingProvider(SyntaxRefactoringProvider):
    name = "failing"
    input_kind = TryExpr

    def check(self, syntax):
        return Result.success(syntax)

    def refactor(self, syntax, context):
        return Result.failure(RefactorError("cannot rewrite"))


class TestDirectCandidates:
    def test_skips_nested_blocks(self):
        tree = parse_source("let a = try! run {\n  try! g()\n}")
        statement = tree.statements[0]
        (found,) = direct_candidates(statement, TryExpr)
        assert found.expression.first_token.text == "run"

    def test_source_order(self):
        tree = parse_source("let p = (try! a(), try! b())")
        found = direct_candidates(tree.statements[0], TryExpr)
        assert [node.expression.first_token.text for node in found] == ["a", "b"]


class TestApplyRefactoring:
    def test_metadata(self):
        tree = parse_source("let a = try! f()\nlet b = try? g()\n")
        result = apply_refactoring(tree, ConvertToDoCatch())
        assert result.is_success()
        assert result.metadata == {
            "rule": "convert-to-do-catch",
            "applied": 1,
            "skipped": 1,
            "errors": [],
            "indentation_unit": "2 spaces",
        }

    def test_unchanged_tree_is_returned_as_is(self):
        tree = parse_source("let b = try? g()\nh()\n")
        assert apply_refactoring(tree, ConvertToDoCatch()).unwrap() is tree

    def test_untouched_statements_are_shared(self):
        tree = parse_source("a()\nlet b = try! c()\nd()\n")
        updated = apply_refactoring(tree, ConvertToDoCatch()).unwrap()
        assert updated.statements[0] is tree.statements[0]
        assert updated.statements[2] is tree.statements[2]

    def test_config_fallback_indentation(self):
        tree = parse_source("let a = try! f()")
        config = RefactorConfig(fallback_indent_width=4)
        result = apply_refactoring(tree, ConvertToDoCatch(), config)
        assert result.unwrap().code == "do {\n    let a = try f()\n} catch {\n    <#code#>\n}"
        assert result.metadata["indentation_unit"] == "4 spaces"

    def test_explicit_indentation_unit(self):
        tree = parse_source("let a = try! f()")
        applier = RefactoringApplier(ConvertToDoCatch(), tree, indentation_unit=IndentationUnit.tab())
        assert tree.visit(applier).code == "do {\n\tlet a = try f()\n} catch {\n\t<#code#>\n}"
        assert applier.applied == 1


class TestProviderFailures:
    def test_failure_result_is_recorded(self, caplog):
        tree = parse_source("let a = try! f()")
        with caplog.at_level(logging.WARNING, logger="swift_refactor.applier"):
            result = apply_refactoring(tree, FailingProvider())
        assert result.unwrap() is tree
        assert result.metadata["errors"] == ["cannot rewrite"]
        assert "cannot rewrite" in caplog.text

    def test_exception_is_counted_without_debug(self, monkeypatch):
        monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
        tree = parse_source("let a = try! f()\nlet b = try! g()")
        result = apply_refactoring(tree, ExplodingProvider())
        assert result.unwrap() is tree
        assert result.metadata["applied"] == 0
        assert result.metadata["errors"] == ["KeyError: 'boom'", "KeyError: 'boom'"]

    def test_exception_is_reraised_with_debug(self, monkeypatch):
        monkeypatch.setenv(DEBUG_ENV_VAR, "1")
        tree = parse_source("let a = try! f()")
        with pytest.raises(KeyError, match="boom"):
            apply_refactoring(tree, ExplodingProvider())

    def test_candidate_mismatch_leaves_statement(self, mocker):
        tree = parse_source("let a = try! f()")
        mocker.patch("swift_refactor.applier.direct_candidates", side_effect=[[object()], []])
        result = apply_refactoring(tree, ConvertToDoCatch())
        assert result.unwrap() is tree
        assert result.metadata["applied"] == 0
