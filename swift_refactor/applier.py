"""Apply a refactoring provider across a whole tree.

:class:`RefactoringApplier` is the host side of the provider contract: it
walks a parsed file, finds candidate nodes, asks the provider for a
replacement, and splices the returned statements into the enclosing
block. Each statement is rewritten at most once per pass. Statements in
nested blocks are rewritten before the statement that contains them.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import RefactorConfig
from .debug import maybe_reraise
from .indentation import IndentationUnit, infer_indentation_unit, line_indentation, starts_line
from .refactoring.base import RefactorContext, SyntaxRefactoringProvider
from .result import Result
from .syntax.nodes import CodeBlock, CodeBlockItem, SourceFile, SyntaxNode
from .syntax.visitor import FlattenSentinel, SyntaxTransformer

logger = logging.getLogger(__name__)


def direct_candidates(node: SyntaxNode, kind: type[SyntaxNode]) -> list[SyntaxNode]:
    """Nodes of ``kind`` under ``node`` that are not inside a nested block.

    Candidates inside a nested :class:`CodeBlock` belong to the statements
    of that block, not to ``node``.
    """
    found: list[SyntaxNode] = []
    stack: list[SyntaxNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, kind):
            found.append(current)
        children = [child for child in current.children() if isinstance(child, SyntaxNode)]
        stack.extend(reversed([child for child in children if not isinstance(child, CodeBlock)]))
    return found


class RefactoringApplier(SyntaxTransformer):
    """Transformer that applies one provider to every statement of a tree.

    Args:
        provider: Rule to apply.
        root: The tree being transformed. Line indentation is looked up
            here, so it must be the tree the traversal starts from.
        config: Run configuration.
        indentation_unit: Unit to use instead of inferring one from
            ``root``.
    """

    def __init__(
        self,
        provider: SyntaxRefactoringProvider,
        root: SyntaxNode,
        config: RefactorConfig | None = None,
        indentation_unit: IndentationUnit | None = None,
    ) -> None:
        self.provider = provider
        self.root = root
        self.config = config or RefactorConfig()
        self.indentation_unit = indentation_unit or infer_indentation_unit(
            root, self.config.fallback_indentation()
        )
        self.applied = 0
        self.skipped = 0
        self.errors: list[str] = []

    def leave_CodeBlockItem(self, original_node: CodeBlockItem, updated_node: CodeBlockItem) -> Any:
        originals = direct_candidates(original_node, self.provider.input_kind)
        if not originals:
            return updated_node
        candidates = direct_candidates(updated_node, self.provider.input_kind)
        if len(candidates) != len(originals):
            # Nested rewrites never add or remove direct candidates.
            logger.warning("Candidate mismatch in statement; leaving it unchanged")
            return updated_node

        context = RefactorContext(
            root=self.root,
            statement=updated_node,
            indentation_unit=self.indentation_unit,
            base_indentation=line_indentation(self.root, original_node),
            at_line_start=starts_line(self.root, original_node),
            config=self.config,
        )
        for candidate in candidates:
            try:
                result = self.provider.refactor(candidate, context)
            except Exception as e:
                logger.exception("Refactoring %s raised on %s", self.provider.name, type(candidate).__name__)
                maybe_reraise(e)
                self.errors.append(f"{type(e).__name__}: {e}")
                continue
            if result.is_success():
                self.applied += 1
                return FlattenSentinel(result.unwrap())
            if result.is_not_applicable():
                self.skipped += 1
                logger.debug("Skipping %s: %s", type(candidate).__name__, result.error)
            else:
                self.errors.append(str(result.error))
                logger.warning("Refactoring %s failed: %s", self.provider.name, result.error)
        return updated_node


def apply_refactoring(
    tree: SourceFile, provider: SyntaxRefactoringProvider, config: RefactorConfig | None = None
) -> Result[SourceFile]:
    """Apply ``provider`` to every statement of ``tree``.

    Returns:
        The rewritten tree (the very same object when nothing applied)
        with ``applied``, ``skipped`` and ``errors`` in the metadata.
    """
    applier = RefactoringApplier(provider, tree, config)
    updated = tree.visit(applier)
    metadata = {
        "rule": provider.name,
        "applied": applier.applied,
        "skipped": applier.skipped,
        "errors": list(applier.errors),
        "indentation_unit": str(applier.indentation_unit),
    }
    if applier.applied:
        logger.info("Applied %s %d time(s)", provider.name, applier.applied)
    return Result.success(updated, metadata)
