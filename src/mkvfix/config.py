"""Configuration management for mkvfix."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from mkvfix.utils.language import normalize_language_code


class LoggingConfig(BaseModel):
    """Logging configuration."""

    format: str = Field(default="text", description="Log format (json or text)")
    level: str = Field(default="info", description="Log level")
    output: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        if v.lower() not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError("Invalid log level")
        return v.lower()


class ExecutionConfig(BaseModel):
    """Execution configuration."""

    dry_run: bool = Field(default=False, description="Build the command but do not run it")
    require_eac3: bool = Field(
        default=False, description="Skip files without an E-AC-3 audio track"
    )
    output_suffix: str = Field(
        default="_with_aac", description="Suffix of the temporary output file"
    )

    @field_validator("output_suffix")
    @classmethod
    def validate_output_suffix(cls, v: str) -> str:
        """Validate output suffix."""
        if not v or "/" in v or "\\" in v:
            raise ValueError("Output suffix must be a non-empty file name fragment")
        return v


class ToolsConfig(BaseModel):
    """External program configuration."""

    mkvmerge: str = Field(default="mkvmerge", description="mkvmerge executable")
    ffmpeg: str = Field(default="ffmpeg", description="ffmpeg executable")


class Config(BaseModel):
    """Main configuration model."""

    language: str = Field(
        default="", description="Default audio/subtitle language (empty disables)"
    )
    prune: bool = Field(
        default=False, description="Remove tracks not in the default language"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    execution: ExecutionConfig = Field(
        default_factory=ExecutionConfig, description="Execution configuration"
    )
    tools: ToolsConfig = Field(default_factory=ToolsConfig, description="External programs")

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Normalize the default language to a 3-letter code."""
        return normalize_language_code(v.strip())

    @model_validator(mode="after")
    def validate_prune(self) -> "Config":
        """Pruning only makes sense with a default language."""
        if self.prune and not self.language:
            raise ValueError("prune requires a default language")
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}

        raw_config = cls._substitute_env_vars(raw_config)

        return cls(**raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """Recursively replace ${VAR_NAME} with os.environ['VAR_NAME']."""
        if isinstance(obj, dict):
            return {key: Config._substitute_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [Config._substitute_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            pattern = r"\$\{([^}]+)\}"

            def replace_var(match):
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    raise ValueError(
                        f"Environment variable '{var_name}' not found "
                        f"(referenced in configuration)"
                    )
                return value

            return re.sub(pattern, replace_var, obj)
        else:
            return obj

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a validated copy with command-line overrides applied.

        Options passed as None are left untouched.
        """
        data = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "dry_run":
                data["execution"]["dry_run"] = value
            else:
                data[key] = value
        return Config(**data)


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        path: Optional path to configuration file. If None, uses defaults.

    Returns:
        Config instance
    """
    if path is None:
        return Config()

    return Config.from_yaml(path)
