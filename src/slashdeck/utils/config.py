"""Configuration management for slashdeck."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

CONFIG_FILENAME = "slashdeck.yaml"


class Config(BaseModel):
    """
    Main configuration for slashdeck.

    Configuration is loaded from the plugin root:
    1. slashdeck.yaml - Optional configuration file
    2. overrides - Values passed by the caller (e.g. CLI options), which
       take precedence over the file

    Pydantic defaults are used for fields not specified anywhere.
    """

    root: Path
    commands_path: Path = Field(default=Path("commands"))
    agents_path: Path = Field(default=Path("agents"))
    manifest_path: Path = Field(default=Path("plugin.yaml"))
    logging_path: Path | None = None
    placeholder: str = "$ARGUMENTS"
    command_marker: str = "/"
    log_level: str = "INFO"

    @field_validator("placeholder")
    @classmethod
    def placeholder_must_be_token(cls, v: str) -> str:
        if not v or any(c.isspace() for c in v):
            raise ValueError("placeholder must be a non-empty token without whitespace")
        return v

    @field_validator("command_marker")
    @classmethod
    def marker_must_be_single_char(cls, v: str) -> str:
        if len(v) != 1 or v.isspace():
            raise ValueError("command_marker must be exactly one character")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_exist(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using root."""
        for field_name in ("commands_path", "agents_path", "manifest_path"):
            path = getattr(self, field_name)
            if path.is_absolute():
                if path.is_relative_to(self.root):
                    continue
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.root / path)

        # Log directory may live outside the plugin tree
        if self.logging_path is not None:
            self.logging_path = self.root / self.logging_path.expanduser()
        return self

    @classmethod
    def load(cls, root: Path, overrides: dict[str, Any] | None = None) -> "Config":
        """
        Load configuration for a plugin root.

        Args:
            root: Plugin root directory
            overrides: Optional values taking precedence over slashdeck.yaml

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            ValidationError: If configuration is invalid
        """
        config_data: dict[str, Any] = {"root": root}

        config_file = root / CONFIG_FILENAME
        if config_file.exists():
            with open(config_file) as f:
                file_data = yaml.safe_load(f) or {}
            config_data = cls._deep_merge(config_data, file_data)

        if overrides:
            config_data = cls._deep_merge(config_data, overrides)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
