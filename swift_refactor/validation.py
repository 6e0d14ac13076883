"""Validation of rewritten source.

Runs after a rewrite and before anything is written back: the output
must still parse, and every comment of the input must still be present.
A failure here means a rule produced a broken tree, so the file is left
untouched.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections import Counter

from .exceptions import ParseError, TransformationValidationError
from .syntax.lexer import tokenize
from .syntax.parser import parse_source

logger = logging.getLogger(__name__)


def collect_comments(code: str, source_file: str = "<string>") -> Counter[str]:
    """Count comment texts in ``code``, attached to any token."""
    comments: Counter[str] = Counter()
    for token in tokenize(code, source_file):
        comments.update(token.leading_trivia.comments)
        comments.update(token.trailing_trivia.comments)
    return comments


def validate_output(original_code: str, new_code: str, source_file: str = "<string>") -> None:
    """Check that ``new_code`` parses and keeps every comment of ``original_code``.

    Args:
        original_code: Source before the rewrite.
        new_code: Source after the rewrite.
        source_file: Name used in error messages.

    Raises:
        TransformationValidationError: If the rewritten code does not parse
            or a comment went missing.
    """
    try:
        parse_source(new_code, source_file)
    except ParseError as e:
        raise TransformationValidationError(f"Rewritten code does not parse: {e}", source_file) from e

    missing = collect_comments(original_code, source_file) - collect_comments(new_code, source_file)
    if missing:
        sample = ", ".join(repr(text) for text in sorted(missing)[:3])
        raise TransformationValidationError(
            f"Rewritten code lost {sum(missing.values())} comment(s): {sample}", source_file
        )
    logger.debug("Validated rewritten output for %s", source_file)
