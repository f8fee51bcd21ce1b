"""
================================================================================
Custom Locator
================================================================================

Short locators for test-id attributes.

With the defaults, ``"$register_button"`` is rewritten to
``.//*[@data-test-id='register_button']`` before any lookup happens:

    locator:
      custom:
        enabled: true
        prefix: "$"
        attribute: data-test-id
        strategy: xpath        # or css -> [data-test-id=register_button]
        show_actual: false     # log/print the produced selector instead

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from ..common.global_config import get_config
from .locator import Locator, LocatorFilter, LocatorKind, add_filter
from .literal import literal


DEFAULT_PREFIX = "$"
DEFAULT_ATTRIBUTE = "data-test-id"
DEFAULT_STRATEGY = "xpath"


def custom_locator(
    prefix: str = DEFAULT_PREFIX,
    attribute: str = DEFAULT_ATTRIBUTE,
    strategy: str = DEFAULT_STRATEGY,
    show_actual: bool = False,
) -> LocatorFilter:
    """
    Register a filter rewriting prefixed strings into attribute locators.

    Args:
        prefix: Marker that starts a custom locator
        attribute: Attribute matched against the rest of the string
        strategy: "xpath" or "css"
        show_actual: Render the produced selector in logs and errors

    Returns:
        The registered filter, so callers can remove it again
    """
    strategy = strategy.lower()
    if strategy not in ("xpath", "css"):
        raise ValueError(f"Unknown custom locator strategy: {strategy}")

    def _filter(raw: Any, locator: Locator) -> Optional[Locator]:
        if not isinstance(raw, str) or not raw.startswith(prefix):
            return None
        value = raw[len(prefix):]
        if strategy == "xpath":
            kind = LocatorKind.XPATH
            selector = f".//*[@{attribute}={literal(value)}]"
        else:
            kind = LocatorKind.CSS
            selector = f"[{attribute}={value}]"
        return Locator(
            kind=kind,
            value=selector,
            raw=raw,
            output=selector if show_actual else raw,
        )

    add_filter(_filter)
    logger.debug(f"Custom locator registered: {prefix}<value> -> @{attribute} ({strategy})")
    return _filter


def install_from_config() -> Optional[LocatorFilter]:
    """Register the custom locator described by ``locator.custom.*`` when enabled."""
    if not _as_bool(get_config("locator.custom.enabled", False)):
        return None
    return custom_locator(
        prefix=get_config("locator.custom.prefix", DEFAULT_PREFIX),
        attribute=get_config("locator.custom.attribute", DEFAULT_ATTRIBUTE),
        strategy=get_config("locator.custom.strategy", DEFAULT_STRATEGY),
        show_actual=_as_bool(get_config("locator.custom.show_actual", False)),
    )


def _as_bool(value: Any) -> bool:
    # Environment overrides arrive as strings
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on")
    return bool(value)


__all__ = [
    "custom_locator",
    "install_from_config",
]
