"""Refactoring provider contract and registry.

A provider is a predicate plus a transform over one kind of node:
``check`` decides whether a candidate qualifies, and ``refactor`` turns a
qualifying candidate into the statements that replace its enclosing
statement. Providers are stateless; everything a rewrite needs from the
surrounding file travels in a :class:`RefactorContext`.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..config import RefactorConfig
from ..exceptions import RefactorError
from ..indentation import IndentationUnit
from ..result import Result
from ..syntax.nodes import CodeBlockItem, SyntaxNode
from ..syntax.trivia import Trivia

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefactorContext:
    """Surroundings of a candidate node.

    Attributes:
        root: Tree the candidate belongs to. Used to infer the indentation
            unit and the candidate's line indentation when those are not
            given directly.
        statement: The ``CodeBlockItem`` enclosing the candidate, if any.
        indentation_unit: Precomputed indentation unit.
        base_indentation: Precomputed indentation of the candidate's line.
        at_line_start: Whether the statement begins its line; looked up in
            ``root`` when not given.
        config: Run configuration.
    """

    root: SyntaxNode | None = None
    statement: CodeBlockItem | None = None
    indentation_unit: IndentationUnit | None = None
    base_indentation: Trivia | None = None
    at_line_start: bool | None = None
    config: RefactorConfig = field(default_factory=RefactorConfig)


class SyntaxRefactoringProvider(ABC):
    """Base class for refactoring rules."""

    name: str = ""
    description: str = ""
    input_kind: type[SyntaxNode] = SyntaxNode

    @abstractmethod
    def check(self, syntax: SyntaxNode) -> Result[Any]:
        """Return the typed candidate on success, or a not-applicable failure."""

    @abstractmethod
    def refactor(self, syntax: SyntaxNode, context: RefactorContext) -> Result[tuple[CodeBlockItem, ...]]:
        """Return the statements replacing the candidate's enclosing statement."""

    def is_applicable(self, syntax: SyntaxNode) -> bool:
        return self.check(syntax).is_success()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class RefactoringRegistry:
    """Providers keyed by the node kind they accept."""

    def __init__(self) -> None:
        self._providers: dict[str, SyntaxRefactoringProvider] = {}

    def register(self, provider: SyntaxRefactoringProvider) -> None:
        """Register ``provider`` under its name.

        Raises:
            RefactorError: If a provider with the same name is registered.
        """
        if not provider.name:
            raise RefactorError("Refactoring provider has no name", {"provider": type(provider).__name__})
        if provider.name in self._providers:
            raise RefactorError(f"Refactoring already registered: {provider.name}", {"rule": provider.name})
        self._providers[provider.name] = provider
        logger.debug("Registered refactoring %s for %s", provider.name, provider.input_kind.__name__)

    def get(self, name: str) -> SyntaxRefactoringProvider | None:
        return self._providers.get(name)

    def providers_for(self, node: SyntaxNode) -> list[SyntaxRefactoringProvider]:
        """Providers whose input kind matches ``node``, in registration order."""
        return [provider for provider in self._providers.values() if isinstance(node, provider.input_kind)]

    def names(self) -> list[str]:
        return list(self._providers)

    def __iter__(self):
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)


def default_registry() -> RefactoringRegistry:
    """Return a registry holding the built-in refactorings."""
    from .convert_to_do_catch import ConvertToDoCatch

    registry = RefactoringRegistry()
    registry.register(ConvertToDoCatch())
    return registry
