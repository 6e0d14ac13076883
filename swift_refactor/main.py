"""Programmatic API for swift_refactor.

This module exposes the entry points used by the CLI and tests:
``refactor_source`` rewrites source text, ``refactor_file`` rewrites a
file (optionally in place), and ``scan_source`` lists candidate nodes
without changing anything. The ``refactor_*`` functions report parse and
IO problems as failed ``Result`` values instead of raising.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from .applier import apply_refactoring
from .config import RefactorConfig
from .exceptions import RefactorError, TransformationValidationError
from .refactoring.base import RefactoringRegistry, SyntaxRefactoringProvider, default_registry
from .result import Result
from .syntax.parser import parse_source
from .syntax.positions import PositionIndex
from .validation import validate_output

logger = logging.getLogger(__name__)

DEFAULT_RULE = "convert-to-do-catch"


@dataclass(frozen=True)
class Candidate:
    """A node the rule was asked about during a scan."""

    line: int
    column: int
    snippet: str
    applicable: bool
    reason: str | None = None


def resolve_rule(rule: str, registry: RefactoringRegistry | None = None) -> SyntaxRefactoringProvider:
    """Look up a rule by name.

    Raises:
        RefactorError: If no rule has that name.
    """
    registry = default_registry() if registry is None else registry
    provider = registry.get(rule)
    if provider is None:
        raise RefactorError(f"Unknown refactoring rule: {rule}", {"rule": rule, "available": registry.names()})
    return provider


def refactor_source(
    code: str,
    config: RefactorConfig | None = None,
    rule: str = DEFAULT_RULE,
    source_name: str = "<string>",
) -> Result[str]:
    """Apply ``rule`` to every applicable node of ``code``.

    Args:
        code: Swift source text.
        config: Optional configuration; defaults are used when omitted.
        rule: Name of the registered rule to apply.
        source_name: Name used in error messages.

    Returns:
        ``Result`` holding the rewritten source, which equals ``code`` when
        nothing applied. Metadata carries ``applied``, ``skipped`` and
        ``errors`` from the traversal.
    """
    config = config or RefactorConfig()
    try:
        provider = resolve_rule(rule)
        tree = parse_source(code, source_name)
    except RefactorError as e:
        return Result.failure(e, {"source": source_name})

    applied = apply_refactoring(tree, provider, config)
    if not applied.is_success():
        return Result.failure(applied.error or RefactorError("Refactoring failed"), applied.metadata)
    metadata = dict(applied.metadata or {})
    metadata["source"] = source_name
    new_code = applied.unwrap().code
    if new_code == code:
        return Result.success(code, metadata)

    if config.validate_output:
        try:
            validate_output(code, new_code, source_name)
        except TransformationValidationError as e:
            logger.error("Rejected rewrite of %s: %s", source_name, e)
            return Result.failure(e, metadata)
    return Result.success(new_code, metadata)


def refactor_file(
    path: str | Path,
    config: RefactorConfig | None = None,
    rule: str = DEFAULT_RULE,
    in_place: bool = False,
) -> Result[str]:
    """Apply ``rule`` to the file at ``path``.

    Files above ``config.max_file_size_mb`` are skipped. With
    ``in_place`` the file is rewritten when anything changed, after
    copying the original to ``<name>.bak`` if ``config.backup_originals``
    is set.

    Returns:
        ``Result`` holding the rewritten source; metadata adds ``path``,
        ``changed`` and ``written``.
    """
    config = config or RefactorConfig()
    source_path = Path(path)
    try:
        size = source_path.stat().st_size
        if size > config.max_file_size_mb * 1024 * 1024:
            logger.warning("Skipping %s: %d bytes exceeds the %d MB limit", source_path, size, config.max_file_size_mb)
            return Result.skipped(f"file exceeds {config.max_file_size_mb} MB", {"path": str(source_path)})
        # newline="" keeps CRLF line endings so they survive the round trip
        with open(source_path, encoding=config.encoding, newline="") as f:
            code = f.read()
    except (OSError, UnicodeDecodeError) as e:
        return Result.failure(e, {"path": str(source_path)})

    result = refactor_source(code, config, rule, source_name=str(source_path))
    if not result.is_success():
        metadata = {**(result.metadata or {}), "path": str(source_path)}
        return Result.failure(result.error or RefactorError("Refactoring failed"), metadata)

    new_code = result.unwrap()
    metadata = {**(result.metadata or {}), "path": str(source_path), "changed": new_code != code, "written": False}
    if in_place and new_code != code:
        try:
            if config.backup_originals:
                backup_path = source_path.with_suffix(f"{source_path.suffix}.bak")
                shutil.copy2(source_path, backup_path)
                logger.info("Created backup: %s", backup_path)
            source_path.write_text(new_code, encoding=config.encoding, newline="")
        except OSError as e:
            return Result.failure(e, metadata)
        metadata["written"] = True
        logger.info("Rewrote %s (%d change(s))", source_path, metadata.get("applied", 0))
    return Result.success(new_code, metadata)


def scan_source(code: str, rule: str = DEFAULT_RULE, source_name: str = "<string>") -> list[Candidate]:
    """List every node of the rule's input kind with its applicability.

    Raises:
        ParseError: If ``code`` cannot be parsed.
        RefactorError: If ``rule`` is unknown.
    """
    provider = resolve_rule(rule)
    tree = parse_source(code, source_name)
    positions = PositionIndex(tree)
    candidates: list[Candidate] = []
    for node in tree.find_all(provider.input_kind):
        position = positions.start_of(node)
        if position is None:
            continue
        checked = provider.check(node)
        snippet = " ".join(node.code.split())
        reason = None if checked.is_success() else str(checked.error)
        candidates.append(Candidate(position.line, position.column, snippet, checked.is_success(), reason))
    return candidates
