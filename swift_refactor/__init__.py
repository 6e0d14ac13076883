"""swift_refactor package.

This initializer is intentionally lightweight: submodules are imported
lazily when a package-level name is first accessed, so importing the
package (for example from the CLI entry point) stays cheap.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.1.0"
__author__ = "Jim Schilling"
__description__ = "Trivia-preserving refactorings for Swift source files"

# Public API names. Submodules are imported lazily when accessed.
__all__ = [
    "main",
    "refactor_source",
    "refactor_file",
    "scan_source",
    "apply_refactoring",
    "RefactoringApplier",
    "ConvertToDoCatch",
    "RefactorContext",
    "RefactoringRegistry",
    "SyntaxRefactoringProvider",
    "default_registry",
    "RefactorConfig",
    "IndentationUnit",
    "Result",
    "ResultStatus",
    "parse_source",
    # Exceptions
    "RefactorError",
    "ParseError",
    "RefactoringNotApplicableError",
    "TransformationValidationError",
    "ConfigurationError",
]


def __getattr__(name: str):
    """Lazily import submodules/attributes on demand to avoid circular imports."""
    import importlib

    mapping = {
        "main": "swift_refactor.main",
        "cli": "swift_refactor.cli",
        "refactor_source": "swift_refactor.main",
        "refactor_file": "swift_refactor.main",
        "scan_source": "swift_refactor.main",
        "apply_refactoring": "swift_refactor.applier",
        "RefactoringApplier": "swift_refactor.applier",
        "ConvertToDoCatch": "swift_refactor.refactoring.convert_to_do_catch",
        "RefactorContext": "swift_refactor.refactoring.base",
        "RefactoringRegistry": "swift_refactor.refactoring.base",
        "SyntaxRefactoringProvider": "swift_refactor.refactoring.base",
        "default_registry": "swift_refactor.refactoring.base",
        "RefactorConfig": "swift_refactor.config",
        "IndentationUnit": "swift_refactor.indentation",
        "Result": "swift_refactor.result",
        "ResultStatus": "swift_refactor.result",
        "parse_source": "swift_refactor.syntax.parser",
        # Exceptions
        "RefactorError": "swift_refactor.exceptions",
        "ParseError": "swift_refactor.exceptions",
        "RefactoringNotApplicableError": "swift_refactor.exceptions",
        "TransformationValidationError": "swift_refactor.exceptions",
        "ConfigurationError": "swift_refactor.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])

    # For 'main' and 'cli' we return the module itself.
    if name in {"main", "cli"}:
        return module
    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
