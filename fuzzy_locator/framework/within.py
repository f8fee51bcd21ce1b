"""
================================================================================
Context / Within Narrowing
================================================================================

Scopes later lookups to an element or a frame.

The current search root is threaded explicitly through a SearchContext
instead of living on shared helper state. Scopes are pushed and popped with
``async with ctx.within(...)``, so leaving a block always restores the root
that was active before it.

    async with ctx.within("#login-form"):
        await actions.fill_field("Email", "user@example.com")
        async with ctx.within(".remember"):
            await actions.check_option("Remember me")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Optional, Protocol, Sequence

from loguru import logger

from .errors import ElementNotFound, NestedWithinError
from .locator import Locator, LocatorKind
from .resolver import QueryFamily, SearchRoot, resolve


class Driver(Protocol):
    """What the core needs from a browser driver."""

    async def execute(self, kind: str, value: Any, root: SearchRoot) -> List[Any]:
        ...

    async def enter_frame(self, root: SearchRoot, frames: Sequence[Locator]) -> SearchRoot:
        ...


def frame_chain(locator: Locator) -> List[Locator]:
    """Flatten a frame locator into the ordered list of frames to enter."""
    value = locator.value
    if isinstance(value, tuple):
        return list(value)
    return [value]


async def narrow(base_root: SearchRoot, context_locator: Any, driver: Driver) -> SearchRoot:
    """
    Produce a new search root scoped to ``context_locator``.

    Context strings that are not XPath shaped are read as CSS. Frame locators
    are handed to the driver; anything else resolves to its first element.

    Raises:
        ElementNotFound: the context element does not exist
    """
    locator = Locator.classify(context_locator, default_kind=LocatorKind.CSS)
    if locator.is_frame():
        return await driver.enter_frame(base_root, frame_chain(locator))

    elements = await resolve(locator, base_root, driver.execute, QueryFamily.ELEMENT)
    if not elements:
        raise ElementNotFound(locator)
    return elements[0]


@dataclass
class Scope:
    """One active narrowing."""

    locator: Locator
    root: SearchRoot

    @property
    def is_frame(self) -> bool:
        return self.locator.is_frame()


class SearchContext:
    """
    Holds the search root in effect for a test and its stack of scopes.

    Args:
        driver: Driver collaborator used for narrowing
        root: Base search root (usually the page)
    """

    def __init__(self, driver: Driver, root: SearchRoot):
        self.driver = driver
        self._base = root
        self._scopes: List[Scope] = []

    @property
    def root(self) -> SearchRoot:
        """Search root for the next lookup."""
        if self._scopes:
            return self._scopes[-1].root
        return self._base

    @property
    def depth(self) -> int:
        return len(self._scopes)

    @property
    def active_locator(self) -> Optional[Locator]:
        if self._scopes:
            return self._scopes[-1].locator
        return None

    @property
    def in_element_scope(self) -> bool:
        return any(not scope.is_frame for scope in self._scopes)

    def reset(self, root: SearchRoot) -> None:
        """Drop every scope and search ``root`` from now on (e.g. after navigation)."""
        self._base = root
        self._scopes.clear()

    async def push(self, context_locator: Any) -> SearchRoot:
        """
        Narrow the current root to ``context_locator``.

        Raises:
            NestedWithinError: a frame is entered while an element scope is active
            ElementNotFound: the context element does not exist
        """
        locator = self.check_nesting(context_locator)
        root = await narrow(self.root, locator, self.driver)
        self._scopes.append(Scope(locator, root))
        logger.debug(f"Within {locator} (depth {self.depth})")
        return root

    def check_nesting(self, context_locator: Any) -> Locator:
        """
        Classify a context locator and refuse frames below an element scope.

        Raises:
            NestedWithinError: ``context_locator`` is a frame and an element scope is active
        """
        locator = Locator.classify(context_locator, default_kind=LocatorKind.CSS)
        if locator.is_frame() and self.in_element_scope:
            raise NestedWithinError(locator, self._element_scope_locator())
        return locator

    def pop(self) -> Optional[Scope]:
        if not self._scopes:
            return None
        scope = self._scopes.pop()
        logger.debug(f"Leaving {scope.locator} (depth {self.depth})")
        return scope

    @asynccontextmanager
    async def within(self, context_locator: Any) -> AsyncIterator[SearchRoot]:
        """Run a block with lookups scoped to ``context_locator``."""
        root = await self.push(context_locator)
        try:
            yield root
        finally:
            self.pop()

    def _element_scope_locator(self) -> Optional[Locator]:
        for scope in reversed(self._scopes):
            if not scope.is_frame:
                return scope.locator
        return None


__all__ = [
    "Driver",
    "Scope",
    "SearchContext",
    "frame_chain",
    "narrow",
]
