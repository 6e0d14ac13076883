"""Trivia pieces and trivia sequences.

Trivia is the non-semantic text around tokens: whitespace, newlines and
comments. It is stored on tokens rather than as separate nodes, as an
ordered tuple of :class:`TriviaPiece` values. Pieces compare by exact
value, which is what indentation stripping relies on.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class TriviaKind(Enum):
    """Kinds of trivia pieces."""

    SPACES = "spaces"
    TABS = "tabs"
    NEWLINES = "newlines"
    CARRIAGE_RETURN_LINE_FEEDS = "carriage_return_line_feeds"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


_WHITESPACE_KINDS = frozenset({TriviaKind.SPACES, TriviaKind.TABS})
_NEWLINE_KINDS = frozenset({TriviaKind.NEWLINES, TriviaKind.CARRIAGE_RETURN_LINE_FEEDS})
_COMMENT_KINDS = frozenset({TriviaKind.LINE_COMMENT, TriviaKind.BLOCK_COMMENT})
_RUN_TEXT = {
    TriviaKind.SPACES: " ",
    TriviaKind.TABS: "\t",
    TriviaKind.NEWLINES: "\n",
    TriviaKind.CARRIAGE_RETURN_LINE_FEEDS: "\r\n",
}


@dataclass(frozen=True)
class TriviaPiece:
    """A single run of whitespace or newlines, or a single comment.

    Whitespace and newline pieces carry a ``count``; comment pieces carry
    their literal ``text`` including the comment delimiters.
    """

    kind: TriviaKind
    count: int = 0
    text: str = ""

    @classmethod
    def spaces(cls, count: int) -> TriviaPiece:
        return cls(TriviaKind.SPACES, count=count)

    @classmethod
    def tabs(cls, count: int) -> TriviaPiece:
        return cls(TriviaKind.TABS, count=count)

    @classmethod
    def newlines(cls, count: int) -> TriviaPiece:
        return cls(TriviaKind.NEWLINES, count=count)

    @classmethod
    def carriage_return_line_feeds(cls, count: int) -> TriviaPiece:
        return cls(TriviaKind.CARRIAGE_RETURN_LINE_FEEDS, count=count)

    @classmethod
    def line_comment(cls, text: str) -> TriviaPiece:
        return cls(TriviaKind.LINE_COMMENT, text=text)

    @classmethod
    def block_comment(cls, text: str) -> TriviaPiece:
        return cls(TriviaKind.BLOCK_COMMENT, text=text)

    @property
    def code(self) -> str:
        """Source text of the piece."""
        if self.kind in _COMMENT_KINDS:
            return self.text
        return _RUN_TEXT[self.kind] * self.count

    @property
    def is_newline(self) -> bool:
        return self.kind in _NEWLINE_KINDS

    @property
    def is_whitespace(self) -> bool:
        """True for spaces and tabs (newlines are not whitespace here)."""
        return self.kind in _WHITESPACE_KINDS

    @property
    def is_comment(self) -> bool:
        return self.kind in _COMMENT_KINDS

    def __repr__(self) -> str:
        if self.is_comment:
            return f"TriviaPiece.{self.kind.value}({self.text!r})"
        return f"TriviaPiece.{self.kind.value}({self.count})"


@dataclass(frozen=True)
class Trivia:
    """Immutable ordered sequence of trivia pieces.

    ``Trivia`` supports ``+`` with another ``Trivia`` or a single piece and
    iterates over its pieces. Adjacent runs are not merged on
    concatenation, mirroring how the pieces were produced.
    """

    pieces: tuple[TriviaPiece, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.pieces, tuple):
            object.__setattr__(self, "pieces", tuple(self.pieces))

    @classmethod
    def of(cls, *pieces: TriviaPiece) -> Trivia:
        return cls(tuple(pieces))

    @classmethod
    def spaces(cls, count: int) -> Trivia:
        return cls((TriviaPiece.spaces(count),)) if count else EMPTY_TRIVIA

    @classmethod
    def tabs(cls, count: int) -> Trivia:
        return cls((TriviaPiece.tabs(count),)) if count else EMPTY_TRIVIA

    @classmethod
    def newline(cls) -> Trivia:
        return cls((TriviaPiece.newlines(1),))

    @classmethod
    def from_text(cls, text: str) -> Trivia:
        """Scan raw trivia text into pieces.

        Runs of spaces, tabs, and newlines each become one piece. ``//``
        comments run to the end of the line; ``/* */`` comments may nest.

        Raises:
            ValueError: If ``text`` contains anything that is not trivia.
        """
        pieces: list[TriviaPiece] = []
        i = 0
        while i < len(text):
            end = scan_trivia_piece(text, i)
            if end is None:
                raise ValueError(f"Not trivia at offset {i}: {text[i:i + 10]!r}")
            pieces.append(_make_piece(text[i:end]))
            i = end
        return cls(tuple(pieces))

    def __add__(self, other: object) -> Trivia:
        if isinstance(other, Trivia):
            return Trivia(self.pieces + other.pieces)
        if isinstance(other, TriviaPiece):
            return Trivia(self.pieces + (other,))
        return NotImplemented

    def __iter__(self) -> Iterator[TriviaPiece]:
        return iter(self.pieces)

    def __len__(self) -> int:
        return len(self.pieces)

    def __bool__(self) -> bool:
        return bool(self.pieces)

    def __getitem__(self, index: int) -> TriviaPiece:
        return self.pieces[index]

    @property
    def code(self) -> str:
        return "".join(piece.code for piece in self.pieces)

    @property
    def contains_newline(self) -> bool:
        return any(piece.is_newline for piece in self.pieces)

    @property
    def comments(self) -> list[str]:
        return [piece.text for piece in self.pieces if piece.is_comment]

    def last_newline_index(self) -> int | None:
        """Index of the last newline piece, or ``None``."""
        for index in range(len(self.pieces) - 1, -1, -1):
            if self.pieces[index].is_newline:
                return index
        return None

    def __repr__(self) -> str:
        return f"Trivia({list(self.pieces)!r})"


EMPTY_TRIVIA = Trivia()


def trivia_from_pieces(pieces: Iterable[TriviaPiece]) -> Trivia:
    return Trivia(tuple(pieces))


def scan_trivia_piece(text: str, start: int) -> int | None:
    """Return the end offset of the trivia piece starting at ``start``.

    Returns ``None`` when the character at ``start`` does not begin trivia.
    An unterminated block comment extends to the end of ``text``.
    """
    ch = text[start]
    if ch in " \t\n":
        end = start
        while end < len(text) and text[end] == ch:
            end += 1
        return end
    if text.startswith("\r\n", start):
        end = start
        while text.startswith("\r\n", end):
            end += 2
        return end
    if text.startswith("//", start):
        end = start
        while end < len(text) and text[end] not in "\r\n":
            end += 1
        return end
    if text.startswith("/*", start):
        depth = 0
        end = start
        while end < len(text):
            if text.startswith("/*", end):
                depth += 1
                end += 2
            elif text.startswith("*/", end):
                depth -= 1
                end += 2
                if depth == 0:
                    return end
            else:
                end += 1
        return end
    return None


def _make_piece(chunk: str) -> TriviaPiece:
    if chunk.startswith("//"):
        return TriviaPiece.line_comment(chunk)
    if chunk.startswith("/*"):
        return TriviaPiece.block_comment(chunk)
    if chunk.startswith("\r\n"):
        return TriviaPiece.carriage_return_line_feeds(len(chunk) // 2)
    if chunk[0] == " ":
        return TriviaPiece.spaces(len(chunk))
    if chunk[0] == "\t":
        return TriviaPiece.tabs(len(chunk))
    return TriviaPiece.newlines(len(chunk))
