"""Custom exception classes for the Swift refactoring tool.

Each exception carries an optional ``details`` mapping with structured
context (for example the source file and location, or the rule that
declined a node) so callers can diagnose failures programmatically.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class RefactorError(Exception):
    """Base exception for refactoring-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(RefactorError):
    """Raised when Swift source cannot be parsed.

    Args:
        message: Error message describing the parse failure.
        source_file: Path (or pseudo-name) of the source being parsed.
        line: Optional 1-based line number where the error occurred.
        column: Optional 0-based column offset where the error occurred.
    """

    def __init__(self, message: str, source_file: str, line: int | None = None, column: int | None = None):
        details: dict[str, Any] = {"source_file": source_file}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)

    def __str__(self) -> str:
        location = self.details["source_file"]
        if "line" in self.details:
            location += f":{self.details['line']}"
            if "column" in self.details:
                location += f":{self.details['column']}"
        return f"{location}: {self.message}"


class RefactoringNotApplicableError(RefactorError):
    """The candidate node does not match the rule's precondition.

    This is an expected outcome when scanning a tree; hosts skip the node
    and carry on.

    Args:
        message: Reason the rule does not apply.
        rule: Optional name of the rule that declined.
        node_type: Optional class name of the candidate node.
        details: Optional extra diagnostic data.
    """

    def __init__(
        self,
        message: str,
        rule: str | None = None,
        node_type: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged: dict[str, Any] = dict(details or {})
        if rule:
            merged["rule"] = rule
        if node_type:
            merged["node_type"] = node_type
        super().__init__(message, merged)


class TransformationValidationError(RefactorError):
    """Raised when rewritten code fails re-parsing or lost comments."""

    def __init__(self, message: str, source_file: str | None = None):
        details: dict[str, Any] = {"validation_type": "output"}
        if source_file:
            details["source_file"] = source_file
        super().__init__(message, details)


class ConfigurationError(RefactorError):
    """Raised when a configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
