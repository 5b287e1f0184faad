"""Run configuration for the command-line entry point."""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
OutputFormat = Literal["text", "json"]


class RunConfig(BaseModel):
    """Settings for reporting a parse."""
    log_level: LogLevel = "WARNING"
    max_errors: int = Field(default=10, ge=1)
    output: OutputFormat = "text"

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(config_path: str) -> RunConfig:
    """Load run configuration from a YAML file. An empty file gives defaults."""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    try:
        return RunConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
