"""Configuration for refactoring runs.

``RefactorConfig`` is a frozen dataclass so one instance can be shared by
every file of a run. Configuration files are YAML mappings whose keys
match the dataclass fields.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from .config_validation import validate_refactor_config_object
from .exceptions import ConfigurationError
from .indentation import IndentationUnit
from .result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefactorConfig:
    """Refactoring behavior configuration.

    The fallback indentation applies only when a file gives no sample to
    infer its own indentation unit from.
    """

    # Indentation
    fallback_indent_style: str = "spaces"
    """Either "spaces" or "tabs"."""
    fallback_indent_width: int = 2
    """Spaces per level when the fallback style is "spaces" (1-8)"""

    # Output
    placeholder: str = "<#code#>"
    """Editor placeholder inserted into generated catch bodies"""
    validate_output: bool = True
    """Re-parse rewritten code and check that no comment was lost"""

    # Files
    max_file_size_mb: int = 10
    encoding: str = "utf-8"
    backup_originals: bool = True
    """Write a ``.bak`` copy before changing a file in place"""

    log_level: str = "INFO"

    def with_override(self, **kwargs: Any) -> RefactorConfig:
        """Return a new ``RefactorConfig`` with specified overrides."""
        return dataclasses.replace(self, **kwargs)

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigurationError: If a value is out of range or of the wrong type.
        """
        validate_refactor_config_object(self)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> RefactorConfig:
        """Create config from dictionary.

        Unknown keys are ignored so configuration files may carry settings
        for other tools.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        unknown = sorted(k for k in config_dict if k not in cls.__dataclass_fields__)
        if unknown:
            logger.debug("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        config = cls(**filtered)
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    def fallback_indentation(self) -> IndentationUnit:
        if self.fallback_indent_style == "tabs":
            return IndentationUnit.tab()
        return IndentationUnit.spaces(self.fallback_indent_width)


def load_config_from_file(config_file: str) -> Result[RefactorConfig]:
    """Load a ``RefactorConfig`` from a YAML file.

    Args:
        config_file: Path to the YAML configuration file.

    Returns:
        A ``Result`` containing the configuration, or the error that
        prevented loading it.
    """
    try:
        import yaml  # type: ignore[import-untyped]

        with open(config_file, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            return Result.failure(
                ConfigurationError("Configuration file must contain a mapping"), {"config_file": config_file}
            )

        return Result.success(RefactorConfig.from_dict(config_data), {"config_file": config_file})

    except FileNotFoundError:
        return Result.failure(
            FileNotFoundError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
        )
    except ConfigurationError as e:
        return Result.failure(e, {"config_file": config_file})
    except Exception as e:
        return Result.failure(ConfigurationError(f"Error loading configuration: {e}"), {"config_file": config_file})
