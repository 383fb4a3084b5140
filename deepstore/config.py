"""
deepstore Configuration

This module provides configuration management for nested attribute stores.
Includes the process-wide default configuration, file and environment
loading, and validation.
"""

import os
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, fields, replace
from pathlib import Path
import json
import yaml

from .exceptions.errors import ConfigError


DEFAULT_SEPARATOR = "."
DEFAULT_WILDCARD = "*"


@dataclass
class DeepStoreConfig:
    """Main configuration class for deepstore components"""

    # Path syntax
    separator: str = DEFAULT_SEPARATOR
    wildcard: str = DEFAULT_WILDCARD

    # Change tracking
    deep_copy_previous: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


_default_config = DeepStoreConfig()


def get_default_config() -> DeepStoreConfig:
    """Get the process-wide default configuration"""
    return _default_config


def set_default_config(config: DeepStoreConfig) -> None:
    """
    Replace the process-wide default configuration

    Only stores and codecs created afterwards pick up the new values; existing
    instances keep the separator they were built with.

    Raises:
        ConfigError: The configuration does not validate
    """
    global _default_config

    issues = validate_config(config)
    if issues:
        raise ConfigError(
            f"Invalid configuration: {'; '.join(issues)}", {"issues": issues}
        )
    _default_config = config


def load_config_from_file(config_path: Union[str, Path]) -> DeepStoreConfig:
    """
    Load configuration from a JSON or YAML file

    Args:
        config_path: Path to configuration file

    Returns:
        DeepStoreConfig instance
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        if config_path.suffix.lower() in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif config_path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {config_path.suffix}",
                {"path": str(config_path)},
            )

    return _config_from_dict(data or {})


def load_config_from_env() -> DeepStoreConfig:
    """
    Load configuration from environment variables

    Environment variables are prefixed with DEEPSTORE_
    For example: DEEPSTORE_SEPARATOR=/, DEEPSTORE_LOG_LEVEL=DEBUG

    Returns:
        DeepStoreConfig instance
    """
    config = DeepStoreConfig()

    env_mappings = {
        "DEEPSTORE_SEPARATOR": ("separator", str),
        "DEEPSTORE_WILDCARD": ("wildcard", str),
        "DEEPSTORE_DEEP_COPY_PREVIOUS": (
            "deep_copy_previous",
            _parse_bool,
        ),
        "DEEPSTORE_LOG_LEVEL": ("log_level", str),
        "DEEPSTORE_LOG_FORMAT": ("log_format", str),
    }

    for env_var, (attr_name, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                setattr(config, attr_name, converted_value)
            except (ValueError, TypeError) as e:
                raise ConfigError(
                    f"Invalid value for {env_var}: {value}. Error: {e}",
                    {"variable": env_var},
                )

    return config


def merge_configs(
    base_config: DeepStoreConfig, override_config: Dict[str, Any]
) -> DeepStoreConfig:
    """
    Merge override values into a DeepStoreConfig instance

    Args:
        base_config: Base configuration
        override_config: Override values as dictionary

    Returns:
        New DeepStoreConfig instance
    """
    known = {f.name for f in fields(DeepStoreConfig)}
    unknown = sorted(set(override_config) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {unknown}", {"keys": unknown})
    return replace(base_config, **override_config)


def validate_config(config: DeepStoreConfig) -> List[str]:
    """
    Validate configuration and return list of issues

    Args:
        config: Configuration to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if not isinstance(config.separator, str) or not config.separator:
        issues.append("separator must be a non-empty string")

    if not isinstance(config.wildcard, str) or not config.wildcard:
        issues.append("wildcard must be a non-empty string")
    elif (
        isinstance(config.separator, str)
        and config.separator
        and config.separator in config.wildcard
    ):
        issues.append("wildcard must not contain the separator")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.log_level.upper() not in valid_log_levels:
        issues.append(
            f"Invalid log_level: {config.log_level}. Must be one of {valid_log_levels}"
        )

    return issues


def resolve_config(config: Optional[DeepStoreConfig] = None) -> DeepStoreConfig:
    """Return config, or the process-wide default when None"""
    return config if config is not None else get_default_config()


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ["true", "1", "yes"]:
        return True
    if lowered in ["false", "0", "no"]:
        return False
    raise ValueError(f"not a boolean: {value}")


def _config_from_dict(data: Dict[str, Any]) -> DeepStoreConfig:
    """Create DeepStoreConfig from dictionary"""
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")
    return merge_configs(DeepStoreConfig(), data)
