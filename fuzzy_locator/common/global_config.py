"""
================================================================================
Global Configuration
================================================================================

Centralized configuration and logging setup for fuzzy_locator.

Features:
    - YAML-based configuration loading (config/config.yaml)
    - Environment-specific overlay (config/{ENV}.yaml)
    - Environment variable overrides (LOCATOR__CUSTOM__PREFIX=$)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_config_dir: Optional[Path] = None
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class ConfigurationError(Exception):
    """Raised when a configuration file can't be parsed."""
    pass


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the global Loguru logger.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Defaults to config value.
        log_file: Optional file path to write logs to.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def get_logger():
    """Returns the Loguru logger, initializing it on first use."""
    if not _logger_initialized:
        init_logger()
    return logger


def use_config_dir(path: Optional[Path]) -> None:
    """
    Point configuration loading at ``path`` and drop cached values.

    Passing None restores the default search locations.
    """
    global _config_dir
    _config_dir = Path(path) if path is not None else None
    reset_config()


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _find_config_dir() -> Optional[Path]:
    if _config_dir is not None:
        return _config_dir if _config_dir.exists() else None
    possible_config_dirs = [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]
    for dir_path in possible_config_dirs:
        if dir_path.exists():
            return dir_path
    return None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()
    config_dir = _find_config_dir()

    if config_dir is None:
        logger.debug("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "locator": {
            "custom": {
                "enabled": False,
                "prefix": "$",
                "attribute": "data-test-id",
                "strategy": "xpath",
                "show_actual": False,
            },
        },
        "actions": {
            "timeout": 5000,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Environment variable naming convention:
        - Use double underscore to separate nested keys
        - Example: LOCATOR__CUSTOM__ENABLED=true overrides locator.custom.enabled
    """
    for key, value in os.environ.items():
        if "__" in key and not key.startswith("__"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        current = d.get(key)
        if not isinstance(current, dict):
            current = {}
            d[key] = current
        d = current
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "locator.custom.prefix").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def set_config(key: str, value: Any) -> None:
    """Sets a configuration value at runtime."""
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reset_config() -> None:
    """Forget loaded values; the next lookup reloads files and environment."""
    global _config
    _config = {}


def reload_config() -> None:
    """
    Reloads the configuration from files and re-initializes logging.
    """
    global _logger_initialized
    reset_config()
    _logger_initialized = False
    _load_config()
    init_logger()
    logger.info("Configuration reloaded.")


__all__ = [
    "ConfigurationError",
    "init_logger",
    "get_logger",
    "get_config",
    "set_config",
    "reset_config",
    "reload_config",
    "use_config_dir",
]
