"""Command-line interface for the Swift refactoring tool.

This module defines the ``swift-refactor`` commands. It uses ``typer`` to
expose the program entrypoint while delegating the work to the
programmatic API in :mod:`swift_refactor.main`, so the same logic can be
used from Python code or the CLI.

Exit codes: 0 on success, 1 when any file failed, 2 on bad usage.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path

import typer

from . import main as main_module
from .cli_helpers import load_base_config, setup_logging, setup_logging_with_level, unified_diff, validate_source_files
from .exceptions import RefactorError
from .refactoring.base import default_registry

# Initialize typer app
app = typer.Typer(
    name="swift-refactor", help="Trivia-preserving refactorings for Swift source files", add_completion=False
)

logger = logging.getLogger(__name__)


def _check_rule(rule: str) -> None:
    registry = default_registry()
    if registry.get(rule) is None:
        typer.echo(f"Error: unknown rule '{rule}'. Available: {', '.join(registry.names())}", err=True)
        raise typer.Exit(code=2)


def _require_files(source_files: list[str]) -> list[str]:
    valid_files = validate_source_files(source_files)
    if not valid_files:
        typer.echo("Error: no Swift source files found.", err=True)
        raise typer.Exit(code=2)
    return valid_files


@app.command("convert")
def convert(
    source_files: list[str] = typer.Argument(..., help="Swift files or directories to refactor"),
    rule: str = typer.Option(main_module.DEFAULT_RULE, "--rule", help="Refactoring rule to apply"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Rewrite files instead of printing them"),
    diff: bool = typer.Option(False, "--diff", help="Print unified diffs instead of the rewritten code"),
    config_file: str | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    log_level: str | None = typer.Option(None, "--log-level", help="Set logging level (DEBUG, INFO, WARNING, ERROR)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output"),
) -> None:
    """Apply a refactoring rule to Swift files.

    Without ``--in-place`` or ``--diff`` the rewritten code is printed to
    stdout and files are left untouched.
    """
    if in_place and diff:
        typer.echo("Error: --in-place and --diff cannot be used together.", err=True)
        raise typer.Exit(code=2)

    config = load_base_config(config_file)
    if log_level is not None:
        config = config.with_override(log_level=log_level.upper())
    if debug:
        setup_logging(debug_mode=True)
    else:
        setup_logging_with_level(config.log_level)

    _check_rule(rule)
    valid_files = _require_files(source_files)
    logger.info(f"Found {len(valid_files)} Swift files to process")

    failures = 0
    for path in valid_files:
        result = main_module.refactor_file(path, config=config, rule=rule, in_place=in_place)
        if result.is_skipped():
            typer.echo(f"{path}: skipped: {(result.metadata or {}).get('reason')}")
            continue
        if result.is_error():
            failures += 1
            typer.echo(f"{path}: error: {result.error}", err=True)
            continue

        metadata = result.metadata or {}
        new_code = result.unwrap()
        if diff:
            with open(path, encoding=config.encoding, newline="") as f:
                original = f.read()
            patch = unified_diff(original, new_code, path)
            if patch:
                typer.echo(patch, nl=False)
        elif in_place:
            if metadata.get("written"):
                typer.echo(f"{path}: rewrote {metadata.get('applied', 0)} statement(s)")
            else:
                typer.echo(f"{path}: unchanged")
        else:
            typer.echo(new_code, nl=False)

    if failures:
        logger.error(f"Refactoring failed for {failures} file(s)")
        raise typer.Exit(code=1)


@app.command("scan")
def scan(
    source_files: list[str] = typer.Argument(..., help="Swift files or directories to scan"),
    rule: str = typer.Option(main_module.DEFAULT_RULE, "--rule", help="Refactoring rule to check"),
    config_file: str | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),
) -> None:
    """List candidate nodes and whether the rule applies to each."""
    config = load_base_config(config_file)
    _check_rule(rule)
    failures = 0
    for path in _require_files(source_files):
        try:
            code = Path(path).read_text(encoding=config.encoding)
            candidates = main_module.scan_source(code, rule=rule, source_name=path)
        except (OSError, UnicodeDecodeError, RefactorError) as e:
            failures += 1
            typer.echo(f"{path}: error: {e}", err=True)
            continue
        for candidate in candidates:
            status = "applicable" if candidate.applicable else f"skipped: {candidate.reason}"
            typer.echo(f"{path}:{candidate.line}:{candidate.column}: {candidate.snippet} [{status}]")
    if failures:
        raise typer.Exit(code=1)


@app.command("rules")
def rules() -> None:
    """List the available refactoring rules."""
    for provider in default_registry():
        typer.echo(f"{provider.name}: {provider.description}")


@app.command("version")
def version() -> None:
    """Show the version of swift-refactor."""
    from . import __version__

    typer.echo(f"swift-refactor {__version__}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()
