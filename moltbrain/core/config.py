"""
Configuration management for Moltbrain.

Features:
- Type-safe configuration with validation
- Environment-based configuration (MOLTBRAIN_ prefix, __ for nesting)
- YAML configuration file
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from functools import lru_cache
import yaml
import logging

from dotenv import find_dotenv, load_dotenv

from moltbrain.context.config import ContextConfig
from moltbrain.core.exceptions import ConfigurationError

logger = logging.getLogger("moltbrain.core.config")

DEFAULT_CONFIG_FILE = Path("moltbrain.yaml")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: str = Field("INFO", description="Logging level")
    metrics_enabled: bool = Field(True, description="Enable metrics collection")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()


class MoltbrainConfig(BaseSettings):
    """
    Main Moltbrain configuration.

    Loads configuration from:
    1. Configuration file values, when loaded with load_from_file (highest priority)
    2. Environment variables
    3. Defaults (lowest priority)

    Example:
        MOLTBRAIN_CONTEXT__MAX_TOKENS=8000
        MOLTBRAIN_CONTEXT__MODE=verbose
        MOLTBRAIN_OBSERVABILITY__LOG_LEVEL=debug
    """

    context: ContextConfig = Field(default_factory=ContextConfig, description="Context assembly configuration")
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig, description="Observability configuration")

    model_config = SettingsConfigDict(
        env_prefix="MOLTBRAIN_",
        env_nested_delimiter="__",
        case_sensitive=False
    )

    @classmethod
    def load_from_file(cls, config_path: Path) -> "MoltbrainConfig":
        """
        Load configuration from YAML file.

        Values in the file override environment variables.

        Args:
            config_path: Path to configuration file

        Returns:
            MoltbrainConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}",
                {"path": str(config_path)},
                cause=e
            )

        if not config_data:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                {"path": str(config_path)}
            )

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                {"path": str(config_path), "errors": e.errors(include_url=False)},
                cause=e
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump(mode="json")

    def save_to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save configuration
        """
        config_path = Path(config_path)
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

            logger.info(f"Configuration saved to {config_path}")

        except OSError as e:
            raise ConfigurationError(
                f"Failed to save configuration: {e}",
                {"path": str(config_path)},
                cause=e
            )


@lru_cache(maxsize=1)
def get_config(config_path: Optional[Path] = None) -> MoltbrainConfig:
    """
    Get the process configuration (cached).

    Loads ``.env`` first, then the YAML file if it exists, then defaults.

    Args:
        config_path: Configuration file (moltbrain.yaml by default)

    Returns:
        MoltbrainConfig instance
    """
    load_dotenv(find_dotenv(usecwd=True))

    path = Path(config_path) if config_path else DEFAULT_CONFIG_FILE
    if path.exists():
        config = MoltbrainConfig.load_from_file(path)
    else:
        try:
            config = MoltbrainConfig()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                {"errors": e.errors(include_url=False)},
                cause=e
            )

    logger.info(
        "Configuration loaded",
        extra={
            "max_tokens": config.context.max_tokens,
            "mode": config.context.mode.value
        }
    )
    return config


def reset_config() -> None:
    """Reset cached configuration (for testing)."""
    get_config.cache_clear()
