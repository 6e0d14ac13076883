"""Immutable Swift-subset syntax trees with attached trivia.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .lexer import tokenize
from .nodes import (
    CatchClause,
    CodeBlock,
    CodeBlockItem,
    DoStmt,
    Expr,
    SourceFile,
    Statement,
    SyntaxElement,
    SyntaxNode,
    TryExpr,
)
from .parser import parse_source
from .positions import CodePosition, PositionIndex
from .tokens import Token, TokenKind
from .trivia import EMPTY_TRIVIA, Trivia, TriviaKind, TriviaPiece
from .visitor import FlattenSentinel, SyntaxTransformer, SyntaxVisitor

__all__ = [
    "CatchClause",
    "CodeBlock",
    "CodeBlockItem",
    "CodePosition",
    "DoStmt",
    "EMPTY_TRIVIA",
    "Expr",
    "FlattenSentinel",
    "PositionIndex",
    "SourceFile",
    "Statement",
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxTransformer",
    "SyntaxVisitor",
    "Token",
    "TokenKind",
    "Trivia",
    "TriviaKind",
    "TriviaPiece",
    "TryExpr",
    "parse_source",
    "tokenize",
]
