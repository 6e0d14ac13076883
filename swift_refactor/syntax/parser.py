"""Statement-level parser for the Swift subset used by the refactorings.

The parser recognizes just enough structure for the rewrites: statements,
brace-delimited code blocks, ``do``/``catch`` statements and ``try``
expressions. Everything else stays as flat token sequences inside
:class:`~swift_refactor.syntax.nodes.Statement` and
:class:`~swift_refactor.syntax.nodes.Expr` nodes, so rendering a parsed
tree always reproduces the input byte for byte.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..exceptions import ParseError
from .lexer import tokenize
from .nodes import CatchClause, CodeBlock, CodeBlockItem, DoStmt, Expr, SourceFile, Statement, SyntaxElement, TryExpr
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Keywords that continue the current statement when they start a new line.
_CONTINUATION_KEYWORDS = frozenset({"else", "catch", "where"})
# Statements whose `{` after a `try` operand opens a body, not a trailing closure.
_CONDITION_KEYWORDS = frozenset({"if", "guard", "while", "for", "switch"})
_OPENERS = frozenset({TokenKind.LEFT_PAREN, TokenKind.LEFT_SQUARE})
_CLOSERS = frozenset({TokenKind.RIGHT_PAREN, TokenKind.RIGHT_SQUARE})
_TRY_MARKERS = frozenset({TokenKind.EXCLAMATION_MARK, TokenKind.POSTFIX_QUESTION_MARK})
_POSTFIX_OPERATORS = frozenset({"!", "?"})


class _Parser:
    def __init__(self, tokens: list[Token], source_file: str) -> None:
        self.tokens = tokens
        self.source_file = source_file
        self.index = 0

    # Token cursor

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_at(self, offset: int) -> Token:
        return self.tokens[min(self.index + offset, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind is not TokenKind.END_OF_FILE:
            self.index += 1
        return token

    def _previous(self) -> Token | None:
        return self.tokens[self.index - 1] if self.index > 0 else None

    def _error(self, message: str, index: int | None = None) -> ParseError:
        target = self.index if index is None else index
        text = "".join(token.code for token in self.tokens[:target])
        text += self.tokens[target].leading_trivia.code
        line = text.count("\n") + 1
        column = len(text) - (text.rfind("\n") + 1)
        return ParseError(message, self.source_file, line=line, column=column)

    # Grammar

    def parse_source_file(self) -> SourceFile:
        statements = self._parse_statements()
        end = self._peek()
        if end.kind is not TokenKind.END_OF_FILE:
            raise self._error("Unexpected '}' without matching '{'")
        return SourceFile(statements=tuple(statements), end_of_file=end)

    def _parse_statements(self) -> list[CodeBlockItem]:
        items: list[CodeBlockItem] = []
        while True:
            token = self._peek()
            if token.kind is TokenKind.END_OF_FILE or token.kind is TokenKind.RIGHT_BRACE:
                return items
            if token.kind is TokenKind.SEMICOLON:
                # Empty statement: keep the semicolon in the tree.
                items.append(CodeBlockItem(item=Statement(elements=()), semicolon=self._advance()))
                continue
            item = self._parse_statement()
            semicolon = self._advance() if self._peek().kind is TokenKind.SEMICOLON else None
            items.append(CodeBlockItem(item=item, semicolon=semicolon))

    def _parse_statement(self) -> DoStmt | Statement:
        token = self._peek()
        if token.is_keyword("do") and self._peek_at(1).kind is TokenKind.LEFT_BRACE:
            return self._parse_do_stmt()
        in_condition = token.kind is TokenKind.KEYWORD and token.text in _CONDITION_KEYWORDS
        elements = self._parse_elements(in_try=False, in_condition=in_condition, newline_sensitive=True)
        return Statement(elements=tuple(elements))

    def _parse_do_stmt(self) -> DoStmt:
        do_keyword = self._advance()
        do_body = self._parse_code_block()
        clauses: list[CatchClause] = []
        while self._peek().is_keyword("catch"):
            catch_keyword = self._advance()
            items: list[SyntaxElement] = []
            while self._peek().kind not in (TokenKind.LEFT_BRACE, TokenKind.END_OF_FILE, TokenKind.RIGHT_BRACE):
                items.append(self._advance())
            if self._peek().kind is not TokenKind.LEFT_BRACE:
                raise self._error("Expected '{' after 'catch'")
            body = self._parse_code_block()
            clauses.append(CatchClause(catch_keyword=catch_keyword, catch_items=tuple(items), body=body))
        return DoStmt(do_keyword=do_keyword, body=do_body, catch_clauses=tuple(clauses))

    def _parse_code_block(self) -> CodeBlock:
        opening_index = self.index
        left_brace = self._advance()
        statements = self._parse_statements()
        if self._peek().kind is not TokenKind.RIGHT_BRACE:
            raise self._error("Expected '}' to close '{'", opening_index)
        right_brace = self._advance()
        return CodeBlock(left_brace=left_brace, statements=tuple(statements), right_brace=right_brace)

    def _parse_try_expr(self, in_condition: bool, newline_sensitive: bool) -> TryExpr:
        try_keyword = self._advance()
        marker = self._advance() if self._peek().kind in _TRY_MARKERS else None
        start = self.index
        elements = self._parse_elements(in_try=True, in_condition=in_condition, newline_sensitive=newline_sensitive)
        if not elements:
            raise self._error("Expected expression after 'try'", start)
        return TryExpr(try_keyword=try_keyword, question_or_exclamation_mark=marker, expression=Expr(tuple(elements)))

    def _parse_elements(self, in_try: bool, in_condition: bool, newline_sensitive: bool) -> list[SyntaxElement]:
        elements: list[SyntaxElement] = []
        depth = 0
        while True:
            token = self._peek()
            if token.kind is TokenKind.END_OF_FILE:
                if depth:
                    raise self._error("Unbalanced brackets at end of file")
                return elements
            if depth == 0:
                if token.kind in (TokenKind.SEMICOLON, TokenKind.RIGHT_BRACE):
                    return elements
                if elements and newline_sensitive and self._starts_new_statement(token):
                    return elements
                if in_try and (token.kind is TokenKind.COMMA or token.kind in _CLOSERS or token.is_keyword("else")):
                    return elements
                if in_try and in_condition and token.kind is TokenKind.LEFT_BRACE:
                    return elements
            if token.kind is TokenKind.LEFT_BRACE:
                elements.append(self._parse_code_block())
                continue
            if token.is_keyword("try"):
                elements.append(self._parse_try_expr(in_condition, newline_sensitive and depth == 0))
                continue
            if token.kind in _OPENERS:
                depth += 1
            elif token.kind in _CLOSERS:
                if depth == 0:
                    raise self._error(f"Unexpected '{token.text}'")
                depth -= 1
            elements.append(self._advance())

    def _starts_new_statement(self, token: Token) -> bool:
        if not token.leading_trivia.contains_newline:
            return False
        if token.kind in (TokenKind.PERIOD, TokenKind.OPERATOR):
            return False
        if token.kind is TokenKind.KEYWORD and token.text in _CONTINUATION_KEYWORDS:
            return False
        previous = self._previous()
        if previous is None:
            return True
        if previous.kind is TokenKind.COMMA:
            return False
        # A trailing `!` or `?` is a postfix unwrap, anything else binds to the next line.
        return previous.kind is not TokenKind.OPERATOR or previous.text in _POSTFIX_OPERATORS


def parse_source(source: str, source_file: str = "<string>") -> SourceFile:
    """Parse Swift source text into a :class:`SourceFile` tree.

    Args:
        source: Swift source text.
        source_file: Name used in error messages.

    Returns:
        The parsed tree; ``tree.code == source`` always holds.

    Raises:
        ParseError: On unbalanced braces or brackets, a ``try`` without an
            operand, or an unterminated string literal.
    """
    tokens = tokenize(source, source_file)
    tree = _Parser(tokens, source_file).parse_source_file()
    logger.debug("Parsed %s: %d top-level statements", source_file, len(tree.statements))
    return tree
