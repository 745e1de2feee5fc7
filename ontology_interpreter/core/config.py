#!/usr/bin/env python3
"""
Configuration Loader
Load configuration from config.yaml
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()

CONFIG_ENV_VAR = "ONTOLOGY_INTERPRETER_CONFIG"


class InterpreterSettings(BaseModel):
    """Typed view of the ``interpreter`` section."""
    reserved_cores: int = Field(6, ge=0, description="CPUs left free when sizing the worker pool")
    max_workers: Optional[int] = Field(None, ge=1, description="Fixed worker count, overrides reserved_cores")
    failure_policy: str = Field("fail_fast", description="fail_fast or best_effort")
    default_selection: str = Field("first", description="URI selection used by the CLI: first or prompt")

    @field_validator("failure_policy")
    @classmethod
    def check_failure_policy(cls, value: str) -> str:
        if value not in ("fail_fast", "best_effort"):
            raise ValueError("failure_policy must be 'fail_fast' or 'best_effort'")
        return value

    @field_validator("default_selection")
    @classmethod
    def check_default_selection(cls, value: str) -> str:
        if value not in ("first", "prompt"):
            raise ValueError("default_selection must be 'first' or 'prompt'")
        return value


class ConfigLoader:
    """Load and manage configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config loader.

        Args:
            config_path: YAML file to read. Falls back to the
                ONTOLOGY_INTERPRETER_CONFIG environment variable, then to
                config.yaml in the package directory.
        """
        if config_path is None:
            config_path = os.getenv(CONFIG_ENV_VAR)
        if config_path is None:
            config_path = Path(__file__).parent.parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Config file must contain a mapping: {self.config_path}")
        return config

    @property
    def config(self) -> Dict[str, Any]:
        """Get raw configuration dict."""
        return self._config

    def get_interpreter_settings(self) -> InterpreterSettings:
        """Get validated interpreter settings."""
        try:
            return InterpreterSettings(**(self._config.get('interpreter') or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid interpreter configuration: {e}") from e

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        defaults = {
            'level': 'INFO',
            'file': None,
            'format': "%(asctime)s - %(levelname)s - %(message)s"
        }
        defaults.update(self._config.get('logging') or {})
        return defaults

    def get_server_config(self) -> Dict[str, Any]:
        """Get server configuration."""
        return self._config.get('server', {
            'host': '0.0.0.0',
            'port': 8000,
            'base_url': 'http://localhost:8000'
        })

    def get_data_config(self) -> Dict[str, Any]:
        """Get data paths configuration."""
        return self._config.get('data', {
            'root': 'data'
        })

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration."""
        return self._config


# Global config loader instance
_config_loader = None


def get_config() -> ConfigLoader:
    """Get global config loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def set_config(loader: Optional[ConfigLoader]):
    """Replace the global config loader (None resets it)."""
    global _config_loader
    _config_loader = loader
