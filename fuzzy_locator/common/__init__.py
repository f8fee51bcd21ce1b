"""
Shared configuration and logging utilities.

Usage:
    from fuzzy_locator.common import get_config, init_logger

    init_logger()
    timeout = get_config("actions.timeout", 5000)
"""

from .global_config import (
    ConfigurationError,
    get_config,
    get_logger,
    init_logger,
    reload_config,
    reset_config,
    set_config,
    use_config_dir,
)

__all__ = [
    "ConfigurationError",
    "get_config",
    "get_logger",
    "init_logger",
    "reload_config",
    "reset_config",
    "set_config",
    "use_config_dir",
]
