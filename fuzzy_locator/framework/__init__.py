"""
================================================================================
Fuzzy Locator Framework
================================================================================

Locator classification and tiered fuzzy-match resolution.

Components:
    - literal: XPath string literal escaping
    - locator: Locator model, DSL and classification filters
    - query_builders: Query tiers for clickable, checkable and field lookup
    - resolver: Resolution engine walking the tiers
    - within: Search root narrowing to elements and frames
    - playwright_driver: Playwright backed driver collaborator
    - element_actions: Click/fill/check/select actions with readable errors

Author: Automation Team
License: MIT
================================================================================
"""

from .custom_locator import custom_locator, install_from_config
from .element_actions import LocatorActions
from .errors import (
    ElementNotFound,
    InvalidLocatorKind,
    LocatorError,
    NestedWithinError,
    QueryExecutionError,
)
from .literal import combine, literal
from .locator import Locator, LocatorKind, Query, add_filter, classify, clear_filters, remove_filter
from .playwright_driver import PlaywrightDriver
from .resolver import OptionMatch, QueryFamily, resolve, resolve_options, templates_for
from .within import SearchContext, narrow

__all__ = [
    "custom_locator",
    "install_from_config",
    "LocatorActions",
    "ElementNotFound",
    "InvalidLocatorKind",
    "LocatorError",
    "NestedWithinError",
    "QueryExecutionError",
    "combine",
    "literal",
    "Locator",
    "LocatorKind",
    "Query",
    "add_filter",
    "classify",
    "clear_filters",
    "remove_filter",
    "PlaywrightDriver",
    "OptionMatch",
    "QueryFamily",
    "resolve",
    "resolve_options",
    "templates_for",
    "SearchContext",
    "narrow",
]
