"""
fuzzy_locator - human-text element lookup for Playwright tests.

    >>> from fuzzy_locator import LocatorActions
    >>> actions = LocatorActions(page)
    >>> await actions.click("Sign in")
"""

from .framework import (
    ElementNotFound,
    InvalidLocatorKind,
    Locator,
    LocatorActions,
    LocatorError,
    LocatorKind,
    NestedWithinError,
    PlaywrightDriver,
    QueryExecutionError,
    QueryFamily,
    SearchContext,
    literal,
    resolve,
)

__version__ = "1.0.0"

__all__ = [
    "ElementNotFound",
    "InvalidLocatorKind",
    "Locator",
    "LocatorActions",
    "LocatorError",
    "LocatorKind",
    "NestedWithinError",
    "PlaywrightDriver",
    "QueryExecutionError",
    "QueryFamily",
    "SearchContext",
    "literal",
    "resolve",
]
