"""Result type for functional error handling.

This module provides an immutable ``Result[T]`` type that carries either
a value or an exception, plus a ``metadata`` mapping. Refactoring rules
return ``Result`` values rather than raising, so a host scanning a tree
can treat "rule does not apply" as an ordinary outcome.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import RefactoringNotApplicableError

T = TypeVar("T")
R = TypeVar("R")


class ResultStatus(Enum):
    """Enumerates possible statuses for a ``Result``.

    Values include ``SUCCESS``, ``ERROR``, and ``SKIPPED``.
    """

    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable result value with a structured error.

    The class models operation outcomes and provides convenience
    constructors (``success``, ``failure``, ``not_applicable``,
    ``skipped``) plus ``map``/``bind`` for composition.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Validate internal consistency of the result instance.

        Ensures success results don't carry errors and error results don't
        carry data.
        """
        if self.status == ResultStatus.SUCCESS and self.error is not None:
            raise ValueError("Success results cannot have errors")
        if self.status == ResultStatus.ERROR and self.data is not None:
            raise ValueError("Error results cannot have data")
        if self.status == ResultStatus.ERROR and self.error is None:
            raise ValueError("Error results need an error")
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a successful result.

        Args:
            data: Successful value.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==SUCCESS``.
        """
        return cls(status=ResultStatus.SUCCESS, data=data, error=None, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create an error result.

        Args:
            error: Exception instance describing the failure.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==ERROR``.
        """
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def not_applicable(
        cls, reason: str, rule: str | None = None, node_type: str | None = None, **details: Any
    ) -> "Result[T]":
        """Create the typed failure a rule returns for a non-matching node."""
        error = RefactoringNotApplicableError(reason, rule=rule, node_type=node_type, details=details)
        return cls.failure(error)

    @classmethod
    def skipped(cls, reason: str, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a skipped result.

        Args:
            reason: Explanation for why the operation was skipped; stored
                under ``metadata["reason"]``.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==SKIPPED``.
        """
        return cls(status=ResultStatus.SKIPPED, metadata={**(metadata or {}), "reason": reason})

    def is_success(self) -> bool:
        """Return True when the result is a success."""
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        """Check if result is an error."""
        return self.status == ResultStatus.ERROR

    def is_skipped(self) -> bool:
        """Check if result was skipped."""
        return self.status == ResultStatus.SKIPPED

    def is_not_applicable(self) -> bool:
        """True when the error is a ``RefactoringNotApplicableError``."""
        return self.is_error() and isinstance(self.error, RefactoringNotApplicableError)

    def map(self, func: Callable[[T], R]) -> "Result[R]":
        """Apply a function to the successful result data.

        Args:
            func: Function to apply to the data.

        Returns:
            A new ``Result`` containing transformed data, or the original
            error result if this result is an error.
        """
        if not self.is_success():
            return Result[R](status=self.status, error=self.error, metadata=self.metadata)
        try:
            new_data = func(self.data)  # type: ignore[arg-type]
        except Exception as e:
            return Result.failure(e, self.metadata)
        return Result[R](status=ResultStatus.SUCCESS, data=new_data, metadata=self.metadata)

    def bind(self, func: Callable[[T], "Result[R]"]) -> "Result[R]":
        """Chain a function that returns a ``Result``.

        Args:
            func: Function that consumes the data and returns a ``Result``.

        Returns:
            The ``Result`` returned by ``func`` or the original error
            result if this result is an error.
        """
        if not self.is_success():
            return Result[R](status=self.status, error=self.error, metadata=self.metadata)
        try:
            return func(self.data)  # type: ignore[arg-type]
        except Exception as e:
            return Result.failure(e, self.metadata)

    def unwrap(self) -> T:
        """Return data if successful or raise an exception.

        Returns:
            The successful data value.

        Raises:
            Exception: The carried error, or ``RuntimeError`` if the result
                was skipped.
        """
        if self.is_error():
            raise self.error or RuntimeError("Result contains error")
        if self.is_skipped():
            raise RuntimeError("Result was skipped")
        return self.data  # type: ignore[return-value]

    def unwrap_or(self, default_value: T) -> T:
        """Return data if present, otherwise ``default_value``."""
        if self.is_success() and self.data is not None:
            return self.data
        return default_value

    def __str__(self) -> str:
        """Human-friendly string representation of the result."""
        if self.is_success():
            return f"Result(success, data={self.data})"
        elif self.is_error():
            return f"Result(error, error={self.error})"
        else:
            return f"Result(skipped, metadata={self.metadata})"
