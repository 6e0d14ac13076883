"""Debug gate for the refactoring host.

Re-raises unexpected provider exceptions when ``SWIFT_REFACTOR_DEBUG`` is
truthy, so failures surface in development and CI instead of being
counted and skipped.
"""

from __future__ import annotations

import os

DEBUG_ENV_VAR = "SWIFT_REFACTOR_DEBUG"


def get_refactor_debug() -> bool:
    v = os.getenv(DEBUG_ENV_VAR, "")
    return v in {"1", "true", "True"}


def maybe_reraise(exc: BaseException) -> None:
    """Re-raise the exception when debug is enabled, otherwise do nothing."""
    if get_refactor_debug():
        raise exc
