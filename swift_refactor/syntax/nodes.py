"""Immutable syntax nodes for the Swift subset handled by the refactorings.

Nodes are frozen dataclasses. Updating a node means building a new one
with :meth:`SyntaxNode.with_changes` or :meth:`SyntaxNode.deep_replace`;
unchanged children are shared between the old and the new tree, and a
traversal that changes nothing returns the very same objects.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from .tokens import Token
from .trivia import Trivia
from .visitor import FlattenSentinel, SyntaxTransformer, SyntaxVisitor

N = TypeVar("N", bound="SyntaxNode")


@dataclass(frozen=True)
class SyntaxNode:
    """Base class for all non-leaf nodes."""

    def __post_init__(self) -> None:
        # Builders may hand in lists; store tuples so nodes stay hashable.
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                object.__setattr__(self, f.name, tuple(value))

    def children(self) -> Iterator[SyntaxElement]:
        """Yield direct child nodes and tokens in source order."""
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                yield from value
            elif value is not None:
                yield value

    def tokens(self) -> Iterator[Token]:
        """Yield every token of the subtree in source order."""
        for child in self.children():
            if isinstance(child, Token):
                yield child
            else:
                yield from child.tokens()

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and all descendant nodes, preorder."""
        yield self
        for child in self.children():
            if isinstance(child, SyntaxNode):
                yield from child.walk()

    def find_all(self, kind: type[N]) -> list[N]:
        return [node for node in self.walk() if isinstance(node, kind)]

    @property
    def first_token(self) -> Token | None:
        return next(self.tokens(), None)

    @property
    def last_token(self) -> Token | None:
        last = None
        for token in self.tokens():
            last = token
        return last

    @property
    def code(self) -> str:
        """Render the subtree back to source text."""
        return "".join(token.code for token in self.tokens())

    def with_changes(self: N, **changes: Any) -> N:
        return dataclasses.replace(self, **changes)

    def deep_equals(self, other: object) -> bool:
        return self == other

    def deep_replace(self: N, old: SyntaxElement, new: SyntaxElement) -> N:
        """Return a copy of the subtree with ``old`` (matched by identity) swapped for ``new``."""
        if old is self:
            return new  # type: ignore[return-value]
        return self.visit(_IdentityReplacer(old, new))

    def with_leading_trivia(self: N, trivia: Trivia) -> N:
        first = self.first_token
        if first is None:
            return self
        return self.deep_replace(first, first.with_leading_trivia(trivia))

    def with_trailing_trivia(self: N, trivia: Trivia) -> N:
        last = self.last_token
        if last is None:
            return self
        return self.deep_replace(last, last.with_trailing_trivia(trivia))

    def visit(self, visitor: SyntaxVisitor) -> Any:
        """Walk the subtree with ``visitor``.

        For a :class:`SyntaxTransformer` the return value is the
        replacement for this node (possibly a :class:`FlattenSentinel`);
        for a plain visitor it is the node itself.
        """
        updated = self._visit_children(visitor) if visitor.on_visit(self) else self
        if isinstance(visitor, SyntaxTransformer):
            return visitor.on_leave(self, updated)
        visitor.on_leave(self)
        return self

    def _visit_children(self: N, visitor: SyntaxVisitor) -> N:
        changes: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            new_value = _visit_value(value, visitor, f.name)
            if new_value is not value:
                changes[f.name] = new_value
        if not changes:
            return self
        return dataclasses.replace(self, **changes)


SyntaxElement = SyntaxNode | Token


def _visit_value(value: Any, visitor: SyntaxVisitor, field_name: str) -> Any:
    if isinstance(value, Token):
        return visitor.on_token(value)
    if isinstance(value, SyntaxNode):
        result = value.visit(visitor)
        if isinstance(result, FlattenSentinel):
            raise TypeError(f"Cannot flatten into single-node field {field_name!r}")
        return result
    if isinstance(value, tuple):
        items: list[Any] = []
        changed = False
        for item in value:
            if isinstance(item, SyntaxNode):
                result = item.visit(visitor)
            else:
                result = _visit_value(item, visitor, field_name)
            if isinstance(result, FlattenSentinel):
                items.extend(result.nodes)
                changed = True
            else:
                items.append(result)
                changed = changed or result is not item
        return tuple(items) if changed else value
    return value


class _IdentityReplacer(SyntaxTransformer):
    def __init__(self, old: SyntaxElement, new: SyntaxElement) -> None:
        self.old = old
        self.new = new

    def on_leave(self, original_node: SyntaxNode, updated_node: SyntaxNode) -> Any:
        return self.new if original_node is self.old else updated_node

    def on_token(self, token: Token) -> Token:
        return self.new if token is self.old else token  # type: ignore[return-value]


@dataclass(frozen=True)
class Expr(SyntaxNode):
    """An unstructured expression: tokens plus any nested nodes."""

    elements: tuple[SyntaxElement, ...] = ()


@dataclass(frozen=True)
class TryExpr(SyntaxNode):
    """``try``, ``try!`` or ``try?`` applied to an expression."""

    try_keyword: Token
    question_or_exclamation_mark: Token | None
    expression: Expr


@dataclass(frozen=True)
class Statement(SyntaxNode):
    """A statement the parser does not model further."""

    elements: tuple[SyntaxElement, ...] = ()


@dataclass(frozen=True)
class CodeBlockItem(SyntaxNode):
    item: SyntaxNode
    semicolon: Token | None = None


@dataclass(frozen=True)
class CodeBlock(SyntaxNode):
    left_brace: Token
    statements: tuple[CodeBlockItem, ...]
    right_brace: Token


@dataclass(frozen=True)
class CatchClause(SyntaxNode):
    catch_keyword: Token
    catch_items: tuple[SyntaxElement, ...]
    body: CodeBlock


@dataclass(frozen=True)
class DoStmt(SyntaxNode):
    do_keyword: Token
    body: CodeBlock
    catch_clauses: tuple[CatchClause, ...] = ()


@dataclass(frozen=True)
class SourceFile(SyntaxNode):
    statements: tuple[CodeBlockItem, ...]
    end_of_file: Token
