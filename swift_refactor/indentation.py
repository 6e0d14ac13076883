"""Indentation inference and re-indentation of syntax trees.

Rewrites that introduce nesting need two facts from the surrounding
source: the file's indentation unit (how much one nesting level adds) and
the indentation of the line the rewritten code sits on. Both are read
from the tree rather than configured, so the output follows the style of
the file being edited.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

from .syntax.nodes import SyntaxNode
from .syntax.tokens import Token, TokenKind
from .syntax.trivia import EMPTY_TRIVIA, Trivia, TriviaKind, TriviaPiece
from .syntax.visitor import SyntaxTransformer

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=SyntaxNode)


@dataclass(frozen=True)
class IndentationUnit:
    """One nesting level: ``width`` spaces, or a single tab."""

    use_tabs: bool = False
    width: int = 2

    @classmethod
    def spaces(cls, width: int) -> IndentationUnit:
        if width < 1:
            raise ValueError("Indentation width must be positive")
        return cls(use_tabs=False, width=width)

    @classmethod
    def tab(cls) -> IndentationUnit:
        return cls(use_tabs=True, width=1)

    @property
    def trivia(self) -> Trivia:
        return Trivia.tabs(1) if self.use_tabs else Trivia.spaces(self.width)

    @property
    def code(self) -> str:
        return self.trivia.code

    def added_to(self, base: Trivia) -> Trivia:
        """Return ``base`` indented one more level.

        The unit is folded into a trailing run of the same kind, so the
        result matches what the lexer produces for the same text.
        """
        unit = self.trivia[0]
        if base and base[-1].kind is unit.kind:
            last = base[-1]
            return Trivia(base.pieces[:-1] + (TriviaPiece(last.kind, count=last.count + unit.count),))
        return base + unit

    def __str__(self) -> str:
        return "1 tab" if self.use_tabs else f"{self.width} spaces"


DEFAULT_INDENTATION_UNIT = IndentationUnit.spaces(2)


def leading_indentation(trivia: Trivia) -> Trivia:
    """Whitespace pieces that directly follow the last newline of ``trivia``.

    Without a newline the scan starts at the beginning, which is right for
    the first token of a file.
    """
    newline_index = trivia.last_newline_index()
    start = 0 if newline_index is None else newline_index + 1
    pieces: list[TriviaPiece] = []
    for piece in trivia.pieces[start:]:
        if not piece.is_whitespace:
            break
        pieces.append(piece)
    return Trivia(tuple(pieces))


def _line_starts(root: SyntaxNode) -> Iterator[tuple[Token, bool]]:
    """Yield ``(token, starts_line)`` for every token under ``root``."""
    previous: Token | None = None
    for token in root.tokens():
        starts_line = previous is None or token.leading_trivia.contains_newline
        if previous is not None and previous.trailing_trivia.contains_newline:
            # A block comment in trailing trivia can span lines.
            starts_line = True
        yield token, starts_line
        previous = token


def starts_line(root: SyntaxNode | None, node: SyntaxNode | Token) -> bool:
    """True when ``node``'s first token is the first token on its line.

    Without a root the node is assumed to start its line.
    """
    target = node if isinstance(node, Token) else node.first_token
    if target is None:
        return False
    if root is None:
        return True
    for token, at_start in _line_starts(root):
        if token is target:
            return at_start
    return target.leading_trivia.contains_newline


def line_indentation(root: SyntaxNode, node: SyntaxNode | Token) -> Trivia:
    """Return the indentation of the line holding ``node``'s first token.

    ``node`` is located in ``root`` by identity. Returns empty trivia when
    the node is not part of ``root`` or has no tokens.
    """
    target = node if isinstance(node, Token) else node.first_token
    if target is None:
        return EMPTY_TRIVIA
    indentation = EMPTY_TRIVIA
    for token, starts_line in _line_starts(root):
        if starts_line:
            indentation = leading_indentation(token.leading_trivia)
        if token is target:
            return indentation
    logger.debug("Node %s not found under root; assuming no indentation", type(node).__name__)
    return EMPTY_TRIVIA


def infer_indentation(tree: SyntaxNode) -> IndentationUnit | None:
    """Infer the indentation unit used by ``tree``.

    Every line that is indented further than the line before it yields a
    sample: the extra indentation, if it is only spaces or a single tab.
    The most common sample wins; ties go to the first one seen.

    Returns:
        The inferred unit, or ``None`` when the tree has no sample.
    """
    samples: Counter[IndentationUnit] = Counter()
    previous_indent = ""
    for token, starts_line in _line_starts(tree):
        if not starts_line or token.kind is TokenKind.END_OF_FILE:
            continue
        indent = leading_indentation(token.leading_trivia).code
        if len(indent) > len(previous_indent) and indent.startswith(previous_indent):
            added = indent[len(previous_indent) :]
            if added == "\t":
                samples[IndentationUnit.tab()] += 1
            elif added.strip(" ") == "":
                samples[IndentationUnit.spaces(len(added))] += 1
        previous_indent = indent
    if not samples:
        return None
    unit, count = samples.most_common(1)[0]
    logger.debug("Inferred indentation %s from %d of %d samples", unit, count, sum(samples.values()))
    return unit


def infer_indentation_unit(
    tree: SyntaxNode | None, default: IndentationUnit = DEFAULT_INDENTATION_UNIT
) -> IndentationUnit:
    """Like :func:`infer_indentation` but falls back to ``default`` (2 spaces)."""
    if tree is None:
        return default
    return infer_indentation(tree) or default


def infer_newline(tree: SyntaxNode | None) -> Trivia:
    """Return a single line break in the style of the first one in ``tree``."""
    if tree is not None:
        for token in tree.tokens():
            for piece in token.leading_trivia.pieces + token.trailing_trivia.pieces:
                if piece.kind is TriviaKind.CARRIAGE_RETURN_LINE_FEEDS:
                    return Trivia.of(TriviaPiece.carriage_return_line_feeds(1))
                if piece.kind is TriviaKind.NEWLINES:
                    return Trivia.newline()
    return Trivia.newline()


def strip_indentation(trivia: Trivia, base: Trivia) -> Trivia:
    """Remove ``base`` from the front of ``trivia``, piece by piece.

    Stops at the first piece that differs, so mismatched indentation (for
    example tabs where ``base`` has spaces) is left in place. The last
    piece of ``base`` may also match the front of a longer run of the same
    kind, which leaves the remainder of that run.
    """
    index = 0
    while index < len(base) and index < len(trivia):
        piece, expected = trivia[index], base[index]
        if piece == expected:
            index += 1
            continue
        partial = piece.is_whitespace and piece.kind is expected.kind and piece.count > expected.count
        if partial and index == len(base) - 1:
            remainder = TriviaPiece(piece.kind, count=piece.count - expected.count)
            return Trivia((remainder,) + trivia.pieces[index + 1 :])
        break
    return Trivia(trivia.pieces[index:])


def _reindent_trivia(trivia: Trivia, base: Trivia, indentation: Trivia) -> Trivia:
    pieces: list[TriviaPiece] = []
    remaining = trivia.pieces
    while remaining:
        piece, remaining = remaining[0], remaining[1:]
        pieces.append(piece)
        if piece.is_newline:
            remaining = strip_indentation(Trivia(remaining), base).pieces
            pieces.extend(indentation.pieces)
    return Trivia(tuple(pieces))


class _Reindenter(SyntaxTransformer):
    def __init__(self, base: Trivia, indentation: Trivia) -> None:
        self.base = base
        self.indentation = indentation

    def leave_Token(self, token: Token) -> Token:
        leading = _reindent_trivia(token.leading_trivia, self.base, self.indentation)
        trailing = _reindent_trivia(token.trailing_trivia, self.base, self.indentation)
        if leading == token.leading_trivia and trailing == token.trailing_trivia:
            return token
        return token.with_changes(leading_trivia=leading, trailing_trivia=trailing)


def reindented(node: N, base: Trivia, indentation: Trivia, indent_first_line: bool = False) -> N:
    """Move every line of ``node`` from ``base`` to ``indentation``.

    After each newline inside the node's trivia, a ``base`` prefix is
    stripped with :func:`strip_indentation` and ``indentation`` inserted.
    With ``indent_first_line``, ``indentation`` is also prepended to the
    first token, whose own leading trivia is expected to be stripped
    already.
    """
    updated = node.visit(_Reindenter(base, indentation))
    if indent_first_line and indentation:
        first = updated.first_token
        if first is not None:
            updated = updated.deep_replace(first, first.with_leading_trivia(indentation + first.leading_trivia))
    return updated
