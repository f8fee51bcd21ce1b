"""
================================================================================
Playwright Driver
================================================================================

Driver collaborator backed by Playwright's async API.

Compiled queries become Playwright selector strings:

    css       ->  css=<value>
    xpath     ->  xpath=<value>
    react     ->  _react=<Component[prop = "v"]>
    vue       ->  _vue=<Component[prop = "v"]>
    shadow    ->  css=<host> <inner> ...   (Playwright pierces open shadow roots)
    <engine>  ->  <engine>=<value>        (custom selector engines)

Search roots may be a Page, a Locator or a FrameLocator; all of them expose
``locator()`` and ``frame_locator()``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, List, Sequence

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import FrameLocator, Locator as PwLocator

from .errors import QueryExecutionError
from .locator import Locator, Query
from .resolver import SearchRoot


def build_selector(kind: str, value: Any) -> str:
    """Map a compiled query onto a Playwright selector string."""
    if kind == "css":
        return f"css={value}"
    if kind == "xpath":
        return f"xpath={value}"
    if kind == "react":
        return f"_react={value}"
    if kind == "vue":
        return f"_vue={value}"
    if kind == "shadow":
        return "css=" + " ".join(str(part) for part in value)
    return f"{kind}={value}"


class PlaywrightDriver:
    """
    Executes compiled queries through Playwright.

    Usage:
        >>> driver = PlaywrightDriver()
        >>> elements = await resolve("Sign in", page, driver.execute, QueryFamily.CLICKABLE)
    """

    async def execute(self, kind: str, value: Any, root: SearchRoot) -> List[PwLocator]:
        """
        Run one query under ``root``.

        Returns:
            Matching Playwright locators, possibly empty

        Raises:
            QueryExecutionError: Playwright rejected the selector
        """
        selector = build_selector(kind, value)
        try:
            return await root.locator(selector).all()
        except PlaywrightError as e:
            logger.debug(f"Playwright failed on {selector}: {e.message}")
            raise QueryExecutionError(kind, value, e.message) from e

    async def enter_frame(self, root: SearchRoot, frames: Sequence[Locator]) -> FrameLocator:
        """Chain ``frame_locator()`` calls down the frame list."""
        current = root
        for frame in frames:
            query: Query = frame.to_query()
            current = current.frame_locator(build_selector(query.kind, query.value))
        logger.debug(f"Entered frame chain: {[str(f) for f in frames]}")
        return current


__all__ = [
    "PlaywrightDriver",
    "build_selector",
]
