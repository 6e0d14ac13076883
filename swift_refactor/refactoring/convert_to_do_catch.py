"""Convert a force-try expression into a do/catch statement.

``let value = try! load()`` becomes::

    do {
      let value = try load()
    } catch {
      <#code#>
    }

The enclosing statement moves into the ``do`` body one indentation unit
deeper than the line it came from. Comments and blank lines around the
statement are kept: trivia before the statement's line stays in front of
``do``, and anything attached to the ``!`` marker moves onto ``try``.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..exceptions import RefactorError
from ..indentation import (
    DEFAULT_INDENTATION_UNIT,
    IndentationUnit,
    infer_indentation_unit,
    infer_newline,
    leading_indentation,
    line_indentation,
    reindented,
    starts_line,
    strip_indentation,
)
from ..result import Result
from ..syntax.nodes import (
    CatchClause,
    CodeBlock,
    CodeBlockItem,
    DoStmt,
    Statement,
    SyntaxNode,
    TryExpr,
)
from ..syntax.tokens import Token, TokenKind
from ..syntax.trivia import EMPTY_TRIVIA, Trivia
from .base import RefactorContext, SyntaxRefactoringProvider

logger = logging.getLogger(__name__)

NOT_FORCE_TRY = "not a force-try expression"


class ConvertToDoCatch(SyntaxRefactoringProvider):
    """Rewrite ``try!`` into ``do { try ... } catch { <#code#> }``."""

    name = "convert-to-do-catch"
    description = "Wrap a force-try statement in do/catch with a placeholder handler"
    input_kind = TryExpr

    def check(self, syntax: SyntaxNode) -> Result[TryExpr]:
        """Succeed with the node when it is a ``try!`` expression.

        A plain ``try``, a ``try?`` or any other node yields a
        not-applicable failure naming the marker that was seen.
        """
        node_type = type(syntax).__name__
        if not isinstance(syntax, TryExpr):
            return Result.not_applicable(NOT_FORCE_TRY, rule=self.name, node_type=node_type)
        marker = syntax.question_or_exclamation_mark
        if marker is None or marker.kind is not TokenKind.EXCLAMATION_MARK:
            return Result.not_applicable(
                NOT_FORCE_TRY, rule=self.name, node_type=node_type, marker=None if marker is None else marker.text
            )
        return Result.success(syntax)

    def refactor(self, syntax: SyntaxNode, context: RefactorContext) -> Result[tuple[CodeBlockItem, ...]]:
        checked = self.check(syntax)
        if not checked.is_success():
            return Result.failure(checked.error or RefactorError(NOT_FORCE_TRY), checked.metadata)
        try_expr = checked.unwrap()

        unit = context.indentation_unit
        if unit is None:
            unit = infer_indentation_unit(context.root, context.config.fallback_indentation())
        base = context.base_indentation
        if base is None:
            base = self._base_indentation(try_expr, context)
        at_line_start = context.at_line_start
        if at_line_start is None:
            at_line_start = context.statement is None or starts_line(context.root, context.statement)

        try:
            items = self.build(
                try_expr,
                unit,
                base,
                statement=context.statement,
                at_line_start=at_line_start,
                placeholder=context.config.placeholder,
                newline=infer_newline(context.root if context.root is not None else context.statement),
            )
        except RefactorError as e:
            return Result.failure(e, {"rule": self.name})

        logger.debug("Converted force-try to do/catch (unit=%s, base=%r)", unit, base.code)
        return Result.success(
            items, {"rule": self.name, "indentation_unit": str(unit), "base_indentation": base.code}
        )

    @staticmethod
    def _base_indentation(try_expr: TryExpr, context: RefactorContext) -> Trivia:
        anchor: SyntaxNode = context.statement if context.statement is not None else try_expr
        if context.root is not None:
            return line_indentation(context.root, anchor)
        first = anchor.first_token
        return EMPTY_TRIVIA if first is None else leading_indentation(first.leading_trivia)

    def _first_token(self, node: SyntaxNode) -> Token:
        first = node.first_token
        if first is None:
            raise RefactorError("Cannot wrap a statement without tokens", {"rule": self.name})
        return first

    @staticmethod
    def strip_force_marker(try_expr: TryExpr) -> TryExpr:
        """Drop the ``!`` and move its trivia onto the ``try`` keyword.

        ``try!f()`` has no trivia to move, so a single space is added to
        keep ``try`` apart from its operand.
        """
        marker = try_expr.question_or_exclamation_mark
        if marker is None:
            return try_expr
        keyword = try_expr.try_keyword
        trailing = keyword.trailing_trivia + marker.leading_trivia + marker.trailing_trivia
        operand_first = try_expr.expression.first_token
        if not trailing and operand_first is not None and not operand_first.leading_trivia:
            trailing = Trivia.spaces(1)
        return try_expr.with_changes(
            try_keyword=keyword.with_trailing_trivia(trailing), question_or_exclamation_mark=None
        )

    def build(
        self,
        try_expr: TryExpr,
        indentation_unit: IndentationUnit = DEFAULT_INDENTATION_UNIT,
        base_indentation: Trivia = EMPTY_TRIVIA,
        statement: CodeBlockItem | None = None,
        at_line_start: bool = True,
        placeholder: str = "<#code#>",
        newline: Trivia | None = None,
    ) -> tuple[CodeBlockItem, ...]:
        """Build the do/catch statement replacing ``statement``.

        Args:
            try_expr: The force-try candidate.
            indentation_unit: Indentation of one nesting level.
            base_indentation: Indentation of the statement's line.
            statement: Enclosing statement; a bare expression is wrapped
                in a new statement when omitted.
            at_line_start: Whether the statement is the first thing on its
                line. When it is not, ``do`` takes over the statement's
                leading trivia unchanged.
            placeholder: Text of the editor placeholder in the catch body.
            newline: Line break used for the new lines; a line feed by
                default.

        Returns:
            A single-element tuple holding the new statement.

        Raises:
            RefactorError: If ``try_expr`` is not part of ``statement``.
        """
        newline = newline or Trivia.newline()
        stripped = self.strip_force_marker(try_expr)
        if statement is None:
            inner: SyntaxNode = Statement((stripped,))
            semicolon = None
        else:
            if not any(node is try_expr for node in statement.walk()):
                raise RefactorError("Force-try expression is not part of the given statement", {"rule": self.name})
            inner = statement.item.deep_replace(try_expr, stripped)
            semicolon = statement.semicolon

        inner, closing_trailing = _detach_trailing_whitespace(inner)
        first = self._first_token(inner)
        leading = first.leading_trivia
        if at_line_start:
            newline_index = leading.last_newline_index()
            split = 0 if newline_index is None else newline_index + 1
            do_leading = Trivia(leading.pieces[:split]) + base_indentation
            inner_leading = strip_indentation(Trivia(leading.pieces[split:]), base_indentation)
        else:
            do_leading = leading
            inner_leading = EMPTY_TRIVIA
        inner = inner.deep_replace(first, first.with_leading_trivia(inner_leading))

        body_indentation = indentation_unit.added_to(base_indentation)
        inner = reindented(inner, base_indentation, body_indentation, indent_first_line=True)
        first = self._first_token(inner)
        inner = inner.deep_replace(first, first.with_leading_trivia(newline + first.leading_trivia))

        closing_leading = newline + base_indentation
        do_body = CodeBlock(
            left_brace=Token.left_brace(),
            statements=(CodeBlockItem(inner),),
            right_brace=Token.right_brace(closing_leading, Trivia.spaces(1)),
        )
        handler = Statement((Token.placeholder(placeholder, newline + body_indentation),))
        catch_clause = CatchClause(
            catch_keyword=Token.keyword("catch", trailing_trivia=Trivia.spaces(1)),
            catch_items=(),
            body=CodeBlock(
                Token.left_brace(), (CodeBlockItem(handler),), Token.right_brace(closing_leading, closing_trailing)
            ),
        )
        do_stmt = DoStmt(
            do_keyword=Token.keyword("do", do_leading, Trivia.spaces(1)),
            body=do_body,
            catch_clauses=(catch_clause,),
        )
        return (CodeBlockItem(do_stmt, semicolon),)


def _detach_trailing_whitespace(node: SyntaxNode) -> tuple[SyntaxNode, Trivia]:
    """Split spaces and tabs off the end of ``node``'s last token.

    Returns the trimmed node and the detached whitespace, which belongs
    after the closing brace of the new statement.
    """
    last = node.last_token
    if last is None:
        return node, EMPTY_TRIVIA
    pieces = last.trailing_trivia.pieces
    end = len(pieces)
    while end and pieces[end - 1].is_whitespace:
        end -= 1
    if end == len(pieces):
        return node, EMPTY_TRIVIA
    trimmed = last.with_trailing_trivia(Trivia(pieces[:end]))
    return node.deep_replace(last, trimmed), Trivia(pieces[end:])
