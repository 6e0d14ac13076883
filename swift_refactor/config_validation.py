"""Configuration validation using pydantic schemas.

``RefactorConfig`` stays a plain frozen dataclass; its values are checked
by converting it into :class:`ValidatedRefactorConfig`, whose field
constraints and validators carry the error messages users see.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_INDENT_STYLES = ["spaces", "tabs"]


class ValidatedRefactorConfig(BaseModel):
    """Validated version of RefactorConfig with runtime validation."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    fallback_indent_style: str = Field(default="spaces", description="Indentation used when none can be inferred")
    fallback_indent_width: int = Field(default=2, ge=1, le=8, description="Spaces per fallback indentation level")
    placeholder: str = Field(default="<#code#>", description="Editor placeholder for generated catch bodies")
    validate_output: bool = Field(default=True, description="Whether to re-parse and compare comments after a rewrite")
    max_file_size_mb: int = Field(default=10, ge=1, le=100, description="Maximum file size in MB")
    encoding: str = Field(default="utf-8", description="Encoding used to read and write source files")
    backup_originals: bool = Field(default=True, description="Whether to back up files changed in place")
    log_level: str = Field(default="INFO", description="Default logging level")

    @field_validator("fallback_indent_style")
    @classmethod
    def validate_indent_style(cls, v):
        if v not in VALID_INDENT_STYLES:
            raise ValueError(f"fallback_indent_style must be one of: {', '.join(VALID_INDENT_STYLES)}, got '{v}'")
        return v

    @field_validator("placeholder")
    @classmethod
    def validate_placeholder(cls, v):
        if not (v.startswith("<#") and v.endswith("#>")) or len(v) < 5:
            raise ValueError(f"placeholder must look like '<#code#>', got '{v}'")
        if "\n" in v:
            raise ValueError("placeholder must fit on one line")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v):
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        upper_v = v.upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}, got '{v}'")
        return upper_v


def _first_error_field(error: PydanticValidationError) -> str | None:
    errors = error.errors()
    if errors and errors[0].get("loc"):
        return str(errors[0]["loc"][0])
    return None


def validate_refactor_config(config_dict: dict[str, Any]) -> ValidatedRefactorConfig:
    """Validate a configuration dictionary.

    Raises:
        ConfigurationError: If configuration is invalid; ``config_key``
            names the first offending field.
    """
    try:
        return ValidatedRefactorConfig(**config_dict)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid refactoring configuration: {e}", _first_error_field(e)) from e


def validate_refactor_config_object(config: Any) -> ValidatedRefactorConfig:
    """Validate a ``RefactorConfig`` instance."""
    return validate_refactor_config(dataclasses.asdict(config))
