"""Token leaves of the syntax tree.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .trivia import EMPTY_TRIVIA, Trivia


class TokenKind(Enum):
    """Lexical categories produced by the lexer."""

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    INTEGER_LITERAL = "integer_literal"
    FLOAT_LITERAL = "float_literal"
    STRING_LITERAL = "string_literal"
    OPERATOR = "operator"
    # `!` directly after `try`
    EXCLAMATION_MARK = "exclamation_mark"
    # `?` directly after `try`
    POSTFIX_QUESTION_MARK = "postfix_question_mark"
    LEFT_BRACE = "left_brace"
    RIGHT_BRACE = "right_brace"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    LEFT_SQUARE = "left_square"
    RIGHT_SQUARE = "right_square"
    COMMA = "comma"
    COLON = "colon"
    SEMICOLON = "semicolon"
    PERIOD = "period"
    AT_SIGN = "at_sign"
    POUND_KEYWORD = "pound_keyword"
    EDITOR_PLACEHOLDER = "editor_placeholder"
    UNKNOWN = "unknown"
    END_OF_FILE = "end_of_file"


KEYWORDS = frozenset(
    {
        "any",
        "as",
        "associatedtype",
        "async",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "continue",
        "default",
        "defer",
        "deinit",
        "do",
        "else",
        "enum",
        "extension",
        "fallthrough",
        "false",
        "fileprivate",
        "final",
        "for",
        "func",
        "guard",
        "if",
        "import",
        "in",
        "init",
        "inout",
        "internal",
        "is",
        "let",
        "mutating",
        "nil",
        "open",
        "operator",
        "override",
        "private",
        "protocol",
        "public",
        "repeat",
        "rethrows",
        "return",
        "self",
        "Self",
        "some",
        "static",
        "struct",
        "subscript",
        "super",
        "switch",
        "throw",
        "throws",
        "true",
        "try",
        "typealias",
        "var",
        "where",
        "while",
    }
)


@dataclass(frozen=True)
class Token:
    """A leaf of the tree: kind, literal text, and attached trivia.

    Tokens are compared by value. Code that needs to locate a specific
    token inside a tree must compare by identity (``is``).
    """

    kind: TokenKind
    text: str
    leading_trivia: Trivia = EMPTY_TRIVIA
    trailing_trivia: Trivia = EMPTY_TRIVIA

    @property
    def code(self) -> str:
        return self.leading_trivia.code + self.text + self.trailing_trivia.code

    def with_changes(self, **changes: Any) -> Token:
        return dataclasses.replace(self, **changes)

    def with_leading_trivia(self, trivia: Trivia) -> Token:
        return dataclasses.replace(self, leading_trivia=trivia)

    def with_trailing_trivia(self, trivia: Trivia) -> Token:
        return dataclasses.replace(self, trailing_trivia=trivia)

    def is_keyword(self, text: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text == text

    @classmethod
    def keyword(cls, text: str, leading_trivia: Trivia = EMPTY_TRIVIA, trailing_trivia: Trivia = EMPTY_TRIVIA) -> Token:
        if text not in KEYWORDS:
            raise ValueError(f"Not a keyword: {text!r}")
        return cls(TokenKind.KEYWORD, text, leading_trivia, trailing_trivia)

    @classmethod
    def left_brace(cls, leading_trivia: Trivia = EMPTY_TRIVIA, trailing_trivia: Trivia = EMPTY_TRIVIA) -> Token:
        return cls(TokenKind.LEFT_BRACE, "{", leading_trivia, trailing_trivia)

    @classmethod
    def right_brace(cls, leading_trivia: Trivia = EMPTY_TRIVIA, trailing_trivia: Trivia = EMPTY_TRIVIA) -> Token:
        return cls(TokenKind.RIGHT_BRACE, "}", leading_trivia, trailing_trivia)

    @classmethod
    def placeholder(
        cls, text: str = "<#code#>", leading_trivia: Trivia = EMPTY_TRIVIA, trailing_trivia: Trivia = EMPTY_TRIVIA
    ) -> Token:
        return cls(TokenKind.EDITOR_PLACEHOLDER, text, leading_trivia, trailing_trivia)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r})"
