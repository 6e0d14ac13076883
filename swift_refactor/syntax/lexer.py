"""Tokenizer for the Swift subset understood by the refactorings.

The lexer is lossless: concatenating the ``code`` of every returned token
reproduces the input exactly. Trivia is attached the Swift way: a token's
trailing trivia runs up to, but not including, the next newline; all other
trivia is leading trivia of the following token. Trivia left at the end
of the input belongs to the ``END_OF_FILE`` token.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
import re

from ..exceptions import ParseError
from .tokens import KEYWORDS, Token, TokenKind
from .trivia import Trivia, scan_trivia_piece

logger = logging.getLogger(__name__)

_OPERATOR_CHARS = frozenset("/=-+*%<>!&|^~?.")
_PUNCTUATION = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "[": TokenKind.LEFT_SQUARE,
    "]": TokenKind.RIGHT_SQUARE,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
}
_NUMBER = re.compile(
    r"""
    0x[0-9a-fA-F_]+(?:\.[0-9a-fA-F_]+)?(?:[pP][+-]?[0-9_]+)?
    | 0o[0-7_]+
    | 0b[01_]+
    | [0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9_]+)?
    """,
    re.VERBOSE,
)


class _Lexer:
    def __init__(self, source: str, source_file: str) -> None:
        self.source = source
        self.source_file = source_file
        self.pos = 0
        self.tokens: list[Token] = []

    def run(self) -> list[Token]:
        while True:
            leading = self._scan_trivia(stop_at_newline=False)
            if self.pos >= len(self.source):
                self.tokens.append(Token(TokenKind.END_OF_FILE, "", leading))
                return self.tokens
            kind, text = self._scan_token()
            trailing = self._scan_trivia(stop_at_newline=True)
            self.tokens.append(Token(kind, text, leading, trailing))

    def _scan_trivia(self, stop_at_newline: bool) -> Trivia:
        start = self.pos
        while self.pos < len(self.source):
            if stop_at_newline and self.source[self.pos] in "\r\n":
                break
            end = scan_trivia_piece(self.source, self.pos)
            if end is None:
                break
            self.pos = end
        return Trivia.from_text(self.source[start : self.pos])

    def _scan_token(self) -> tuple[TokenKind, str]:
        src = self.source
        start = self.pos
        ch = src[start]

        if self._after_bare_try() and ch in "!?":
            self.pos += 1
            return (TokenKind.EXCLAMATION_MARK if ch == "!" else TokenKind.POSTFIX_QUESTION_MARK), ch

        if src.startswith("<#", start):
            end = src.find("#>", start + 2)
            if end != -1:
                self.pos = end + 2
                return TokenKind.EDITOR_PLACEHOLDER, src[start : self.pos]

        if ch in _PUNCTUATION:
            self.pos += 1
            return _PUNCTUATION[ch], ch

        if ch == '"' or (ch == "#" and self._raw_string_ahead()):
            self._scan_string()
            return TokenKind.STRING_LITERAL, src[start : self.pos]

        if ch == "#" or ch == "@":
            self.pos += 1
            self._scan_identifier_chars()
            if ch == "@":
                return TokenKind.AT_SIGN, src[start : self.pos]
            return TokenKind.POUND_KEYWORD, src[start : self.pos]

        if ch == "`":
            end = src.find("`", start + 1)
            self.pos = len(src) if end == -1 else end + 1
            return TokenKind.IDENTIFIER, src[start : self.pos]

        if ch == "$" or ch == "_" or ch.isalpha():
            self.pos += 1
            self._scan_identifier_chars()
            text = src[start : self.pos]
            if text in KEYWORDS:
                return TokenKind.KEYWORD, text
            return TokenKind.IDENTIFIER, text

        match = _NUMBER.match(src, start)
        if match is not None:
            self.pos = match.end()
            text = match.group(0)
            is_float = "." in text or (not text.startswith("0x") and ("e" in text or "E" in text))
            return (TokenKind.FLOAT_LITERAL if is_float else TokenKind.INTEGER_LITERAL), text

        if ch == "." and not src.startswith("..", start):
            self.pos += 1
            return TokenKind.PERIOD, ch

        if ch in _OPERATOR_CHARS:
            self.pos += 1
            while (
                self.pos < len(src)
                and src[self.pos] in _OPERATOR_CHARS
                and not src.startswith("//", self.pos)
                and not src.startswith("/*", self.pos)
            ):
                self.pos += 1
            return TokenKind.OPERATOR, src[start : self.pos]

        self.pos += 1
        logger.debug("Unknown character %r at offset %d in %s", ch, start, self.source_file)
        return TokenKind.UNKNOWN, ch

    def _after_bare_try(self) -> bool:
        if not self.tokens:
            return False
        previous = self.tokens[-1]
        return previous.is_keyword("try") and not previous.trailing_trivia

    def _scan_identifier_chars(self) -> None:
        src = self.source
        while self.pos < len(src) and (src[self.pos] == "_" or src[self.pos].isalnum()):
            self.pos += 1

    def _raw_string_ahead(self) -> bool:
        offset = self.pos
        while offset < len(self.source) and self.source[offset] == "#":
            offset += 1
        return offset < len(self.source) and self.source[offset] == '"'

    def _scan_string(self) -> None:
        src = self.source
        start = self.pos
        hashes = 0
        while src[self.pos] == "#":
            hashes += 1
            self.pos += 1
        delimiter = '"""' if src.startswith('"""', self.pos) else '"'
        self.pos += len(delimiter)
        closing = delimiter + "#" * hashes
        escape = "\\" + "#" * hashes
        while self.pos < len(src):
            if src.startswith(closing, self.pos):
                self.pos += len(closing)
                return
            if delimiter == '"' and src[self.pos] == "\n":
                break
            if src.startswith(escape + "(", self.pos):
                self.pos += len(escape) + 1
                self._skip_interpolation()
            elif src.startswith(escape, self.pos):
                self.pos += len(escape) + 1
            else:
                self.pos += 1
        line = src.count("\n", 0, start) + 1
        column = start - (src.rfind("\n", 0, start) + 1)
        raise ParseError("Unterminated string literal", self.source_file, line=line, column=column)

    def _skip_interpolation(self) -> None:
        depth = 1
        src = self.source
        while self.pos < len(src) and depth:
            ch = src[self.pos]
            if ch == '"':
                self._scan_string()
                continue
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            self.pos += 1


def tokenize(source: str, source_file: str = "<string>") -> list[Token]:
    """Split ``source`` into tokens with attached trivia.

    Args:
        source: Swift source text.
        source_file: Name used in error messages.

    Returns:
        The tokens in order, always ending with an ``END_OF_FILE`` token.

    Raises:
        ParseError: If a string literal is not terminated.
    """
    return _Lexer(source, source_file).run()
