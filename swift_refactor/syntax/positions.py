"""Source positions for tokens and nodes of a parsed tree.

Nodes carry no positions of their own, so positions are computed on
demand for a given root, the way ``libcst.metadata.PositionProvider``
resolves them for a module.
"""

from __future__ import annotations

from dataclasses import dataclass

from .nodes import SyntaxNode
from .tokens import Token


@dataclass(frozen=True)
class CodePosition:
    """1-based line and 0-based column of a token's text."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class PositionIndex:
    """Start positions of every token under ``root``, looked up by identity."""

    def __init__(self, root: SyntaxNode) -> None:
        self._positions: dict[int, CodePosition] = {}
        # Keep the tokens alive so their ids stay unique for our lifetime.
        self._tokens: list[Token] = []
        line, column = 1, 0
        for token in root.tokens():
            line, column = _advance(line, column, token.leading_trivia.code)
            self._positions[id(token)] = CodePosition(line, column)
            self._tokens.append(token)
            line, column = _advance(line, column, token.text + token.trailing_trivia.code)

    def start_of(self, node: SyntaxNode | Token) -> CodePosition | None:
        token = node if isinstance(node, Token) else node.first_token
        if token is None:
            return None
        return self._positions.get(id(token))


def _advance(line: int, column: int, text: str) -> tuple[int, int]:
    newlines = text.count("\n")
    if newlines:
        return line + newlines, len(text) - text.rfind("\n") - 1
    return line, column + len(text)
