"""Visitor and transformer protocols for syntax trees.

Dispatch follows the libcst convention: a visitor may define
``visit_<NodeClass>`` (return ``False`` to skip the children) and
``leave_<NodeClass>`` methods. A transformer's ``leave_`` methods receive
the original node and the node rebuilt from transformed children, and
return the replacement. Returning a :class:`FlattenSentinel` splices
several nodes into the parent's tuple field.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .nodes import SyntaxNode
    from .tokens import Token


class FlattenSentinel:
    """Replacement standing for zero or more sibling nodes."""

    def __init__(self, nodes: Iterable[SyntaxNode]) -> None:
        self.nodes: tuple[SyntaxNode, ...] = tuple(nodes)

    def __iter__(self) -> Iterator[SyntaxNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"FlattenSentinel({[type(n).__name__ for n in self.nodes]})"


class SyntaxVisitor:
    """Read-only tree walk."""

    def on_visit(self, node: SyntaxNode) -> bool:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            return True
        result = method(node)
        return True if result is None else bool(result)

    def on_leave(self, original_node: SyntaxNode) -> None:
        method = getattr(self, f"leave_{type(original_node).__name__}", None)
        if method is not None:
            method(original_node)

    def on_token(self, token: Token) -> Token:
        method = getattr(self, "visit_Token", None)
        if method is not None:
            method(token)
        return token


class SyntaxTransformer(SyntaxVisitor):
    """Tree walk that may replace nodes and tokens."""

    def on_leave(self, original_node: SyntaxNode, updated_node: SyntaxNode) -> Any:  # type: ignore[override]
        method = getattr(self, f"leave_{type(original_node).__name__}", None)
        if method is None:
            return updated_node
        return method(original_node, updated_node)

    def on_token(self, token: Token) -> Token:
        method = getattr(self, "leave_Token", None)
        if method is None:
            return token
        return method(token)
