"""CLI helper functions for the Swift refactoring tool.

This module contains utility functions used by the CLI commands,
separated from the main CLI module for better organization.
"""

from __future__ import annotations

import difflib
import logging
from pathlib import Path

import typer

from .config import RefactorConfig, load_config_from_file

logger = logging.getLogger(__name__)


def setup_logging(debug_mode: bool = False) -> None:
    """Set up logging configuration for the application."""
    setup_logging_with_level("DEBUG" if debug_mode else "INFO")


def setup_logging_with_level(log_level: str) -> None:
    """Set up logging with a specific level."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(numeric_level)


def load_base_config(config_file: str | None) -> RefactorConfig:
    """Return the configuration from ``config_file``, or the defaults.

    Raises:
        typer.Exit: With code 1 when the file cannot be loaded.
    """
    if config_file is None:
        return RefactorConfig()
    config_result = load_config_from_file(config_file)
    if not config_result.is_success():
        typer.echo(f"Error loading configuration file: {config_result.error}", err=True)
        raise typer.Exit(code=1)
    logger.info(f"Loaded configuration from: {config_file}")
    return config_result.unwrap()


def validate_source_files(source_files: list[str]) -> list[str]:
    """Expand directories to their ``.swift`` files and drop missing paths."""
    valid: list[str] = []
    for source in source_files:
        path = Path(source)
        if path.is_dir():
            valid.extend(str(p) for p in sorted(path.rglob("*.swift")))
        elif path.is_file():
            valid.append(str(path))
        else:
            logger.warning(f"Source file not found: {source}")
    return valid


def unified_diff(original: str, updated: str, path: str) -> str:
    lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    return "".join(lines)
