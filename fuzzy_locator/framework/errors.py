"""
================================================================================
Locator Errors
================================================================================

Exception taxonomy shared by the locator model, the resolution engine and the
actions built on top of them.

    LocatorError
    ├── InvalidLocatorKind     strict object without a recognized key
    ├── ElementNotFound        raised by callers once every tier came back empty
    ├── NestedWithinError      frame narrowing inside an element scope
    └── QueryExecutionError    the driver rejected a compiled query

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Optional


class LocatorError(Exception):
    """Base class for every locator related failure."""
    pass


class InvalidLocatorKind(LocatorError):
    """Raised when a strict locator object carries no recognized kind key."""

    def __init__(self, locator: Any, message: Optional[str] = None):
        self.locator = locator
        super().__init__(message or f"Invalid locator kind: {_render(locator)}")


class ElementNotFound(LocatorError):
    """
    Readable "element not found" error.

    The resolution engine never raises this itself. Call sites do, because
    only they know whether the missing thing was a field, a clickable element
    or a checkbox.

    Args:
        locator: Locator, string or strict object that produced no elements
        prefix: Role of the element ("Clickable element", "Field", ...)
        suffix: Trailing clause ("was not found inside element #form")
    """

    def __init__(
        self,
        locator: Any,
        prefix: str = "Element",
        suffix: str = "was not found by text|CSS|XPath",
    ):
        self.locator = locator
        self.prefix = prefix
        self.suffix = suffix
        super().__init__(f"{prefix} {_render(locator)} {suffix}")


class NestedWithinError(LocatorError):
    """Raised when a frame scope is opened inside an active element scope."""

    def __init__(self, locator: Any, active: Any):
        self.locator = locator
        self.active = active
        super().__init__(
            f"Can't switch to frame {_render(locator)} inside element scope "
            f"{_render(active)}"
        )


class QueryExecutionError(LocatorError):
    """
    Raised by a driver when a compiled query could not be executed.

    Zero matches is never an error; this is reserved for malformed selectors
    and driver failures. The driver's own exception is chained as __cause__.
    """

    def __init__(self, kind: str, value: Any, reason: str = ""):
        self.kind = kind
        self.value = value
        self.reason = reason
        message = f"Failed to execute {kind} query {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def _render(locator: Any) -> str:
    if isinstance(locator, dict):
        return json.dumps(locator, default=str)
    return str(locator)


__all__ = [
    "LocatorError",
    "InvalidLocatorKind",
    "ElementNotFound",
    "NestedWithinError",
    "QueryExecutionError",
]
