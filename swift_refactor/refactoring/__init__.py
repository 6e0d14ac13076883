"""Refactoring rules and their registry.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .base import RefactorContext, RefactoringRegistry, SyntaxRefactoringProvider, default_registry
from .convert_to_do_catch import ConvertToDoCatch

__all__ = [
    "ConvertToDoCatch",
    "RefactorContext",
    "RefactoringRegistry",
    "SyntaxRefactoringProvider",
    "default_registry",
]
