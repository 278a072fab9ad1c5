"""Configuration management for Package Comparer using Pydantic.

This module provides type-safe configuration models for the comparison
engine, relocation heuristics, logging and report output.
"""

import os
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from package_comparer.exceptions import ConfigurationError


class RelocationStrategy(str, Enum):
    """How leftover types are paired across namespaces."""

    FIRST_MATCH = "first_match"  # greedy, first candidate above threshold wins
    BEST_SCORE = "best_score"  # highest-scoring unconsumed candidate wins


class RelocationConfig(BaseModel):
    """Configuration for namespace relocation detection."""

    enabled: bool = Field(default=True, description="Detect types moved to another namespace")
    similarity_threshold: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Minimum shared-member ratio for two types to be considered the same type",
    )
    strategy: RelocationStrategy = Field(
        default=RelocationStrategy.FIRST_MATCH,
        description="Candidate selection strategy (first_match or best_score)",
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def validate_strategy(cls, v: object) -> object:
        """Accept strategy names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v


class ComparisonOptions(BaseModel):
    """Options for the type and member differs."""

    compare_type_attributes: bool = Field(
        default=True,
        description="Report attribute changes declared on the types themselves",
    )


class PathConfig(BaseModel):
    """Configuration for file paths."""

    snapshot_dir: str = Field(
        default="snapshots",
        description="Root directory holding <packageId>/<version>.json snapshot files",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="WARNING",
        description="Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    file_level: str = Field(
        default="DEBUG",
        description="File log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(default="json", description="Log file format (json or console)")
    file: str | None = Field(default=None, description="Log file path")

    @field_validator("level", "file_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v_lower


class ReportConfig(BaseModel):
    """Report output configuration."""

    format: str = Field(default="text", description="Report format (text, markdown or json)")
    verbose: bool = Field(default=False, description="Include per-member details")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate report format."""
        valid_formats = ["text", "markdown", "json"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Report format must be one of: {', '.join(valid_formats)}")
        return v_lower


class ComparerConfig(BaseSettings):
    """Main package comparer configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PACKAGE_COMPARER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    relocation: RelocationConfig = Field(
        default_factory=RelocationConfig, description="Relocation detection configuration"
    )
    comparison: ComparisonOptions = Field(
        default_factory=ComparisonOptions, description="Differ options"
    )
    paths: PathConfig = Field(default_factory=PathConfig, description="Path configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    report: ReportConfig = Field(default_factory=ReportConfig, description="Report configuration")


def load_config_from_yaml(config_path: str | Path) -> ComparerConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        ComparerConfig: Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not config_data:
        raise ConfigurationError(f"Empty configuration file: {config_path}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    config_data = _expand_env_vars(config_data)

    try:
        return ComparerConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e


def _expand_env_vars(data):
    """Recursively expand environment variables in config data.

    Supports ${VAR_NAME} syntax for environment variable substitution.
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ConfigurationError(
                    f"Environment variable '{var_name}' not found. "
                    f"Please set it in your environment or .env file."
                )
            return env_value
        return data
    else:
        return data


def save_config_to_yaml(config: ComparerConfig, output_path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        output_path: Path to output YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(mode="json")

    with open(output_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
