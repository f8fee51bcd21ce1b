"""
================================================================================
Locator Actions
================================================================================

User-facing actions built on the resolution engine.

Every action states which element family it is looking for and words its own
"not found" error, so failures read like the intent of the test:

    Clickable element Sign in was not found by text|CSS|XPath
    Field Email was not found by text|CSS|XPath
    Option "Poland" in #country was not found neither by a visible text nor by a value

Usage:
    >>> actions = LocatorActions(page)
    >>> await actions.fill_field("Email", "user@example.com")
    >>> async with actions.within("#login-form"):
    ...     await actions.click("Sign in")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, AsyncContextManager, Iterable, List, Optional, Union

import allure
from loguru import logger

from ..common.global_config import get_config
from ..report_tools.allure_utils import attach_locator_attempts
from .errors import ElementNotFound
from .locator import Locator, LocatorKind
from .playwright_driver import PlaywrightDriver
from .resolver import Element, QueryFamily, SearchRoot, resolve, resolve_options, templates_for
from .within import Driver, SearchContext, narrow

OPTION_NOT_FOUND_SUFFIX = "was not found neither by a visible text nor by a value"


class LocatorActions:
    """
    Element interactions addressed by fuzzy locators.

    Args:
        page: Playwright Page (or any search root the driver understands)
        driver: Driver collaborator, PlaywrightDriver by default
        timeout: Action timeout in milliseconds, ``actions.timeout`` by default
    """

    def __init__(
        self,
        page: SearchRoot,
        driver: Optional[Driver] = None,
        timeout: Optional[int] = None,
    ):
        self.page = page
        self.driver = driver or PlaywrightDriver()
        self.timeout = int(timeout or get_config("actions.timeout", 5000))
        self.context = SearchContext(self.driver, page)

    def within(self, locator: Any) -> AsyncContextManager[SearchRoot]:
        """Scope every action inside the block to ``locator``."""
        return self.context.within(locator)

    # =========================================================================
    # Clicks
    # =========================================================================

    async def click(self, locator: Any, context: Any = None) -> None:
        with allure.step(f"Click: {locator}"):
            element = await self._clickable(locator, context)
            await element.click(timeout=self.timeout)

    async def double_click(self, locator: Any, context: Any = None) -> None:
        with allure.step(f"Double click: {locator}"):
            element = await self._clickable(locator, context)
            await element.dblclick(timeout=self.timeout)

    async def right_click(self, locator: Any, context: Any = None) -> None:
        with allure.step(f"Right click: {locator}"):
            element = await self._clickable(locator, context)
            await element.click(button="right", timeout=self.timeout)

    # =========================================================================
    # Form fields
    # =========================================================================

    async def fill_field(self, field: Any, value: Any) -> None:
        """
        Clear a text field and type ``value`` into it.

        Args:
            field: Label, placeholder, name, CSS, XPath or strict locator
            value: Value to enter (converted with str())
        """
        shown = "*" * len(str(value)) if "password" in str(field).lower() else value
        with allure.step(f"Fill {field}: {shown}"):
            elements = await self._find_or_fail(field, QueryFamily.FIELD, "Field")
            await elements[0].fill(str(value), timeout=self.timeout)

    async def clear_field(self, field: Any) -> None:
        with allure.step(f"Clear field: {field}"):
            elements = await self._find_or_fail(field, QueryFamily.FIELD, "Field to clear")
            await elements[0].clear(timeout=self.timeout)

    async def check_option(self, field: Any, context: Any = None) -> None:
        """Tick a checkbox or radio button found by label, name or selector."""
        with allure.step(f"Check option: {field}"):
            element = await self._checkable(field, context)
            await element.check(timeout=self.timeout)

    async def uncheck_option(self, field: Any, context: Any = None) -> None:
        with allure.step(f"Uncheck option: {field}"):
            element = await self._checkable(field, context)
            await element.uncheck(timeout=self.timeout)

    async def select_option(self, select: Any, option: Union[str, Iterable[str]]) -> None:
        """
        Select one option, or several for multi-select lists.

        Each option is matched by visible text first and by value second.

        Raises:
            ElementNotFound: the <select> or every requested option is missing
        """
        with allure.step(f"Select {option} in {select}"):
            elements = await self._find_or_fail(select, QueryFamily.FIELD, "Selectable field")
            select_element = elements[0]

            match = await resolve_options(select_element, option, self.driver.execute)
            if not match.found:
                raise ElementNotFound(
                    select,
                    f'Option "{_render_options(option)}" in',
                    OPTION_NOT_FOUND_SUFFIX,
                )

            values = [await el.evaluate("option => option.value") for el in match.elements]
            logger.debug(f"Selecting values {values} in {select}")
            await select_element.select_option(value=values, timeout=self.timeout)

    # =========================================================================
    # Assertions and grabbers
    # =========================================================================

    async def see_element(self, locator: Any) -> None:
        """Assert that at least one element matching ``locator`` is visible."""
        with allure.step(f"See element: {locator}"):
            if await self.grab_number_of_visible_elements(locator) == 0:
                raise AssertionError(f"Element {Locator.classify(locator)} is not visible")

    async def dont_see_element(self, locator: Any) -> None:
        with allure.step(f"Don't see element: {locator}"):
            if await self.grab_number_of_visible_elements(locator) > 0:
                raise AssertionError(f"Element {Locator.classify(locator)} is still visible")

    async def grab_number_of_visible_elements(self, locator: Any) -> int:
        elements = await resolve(locator, self.context.root, self.driver.execute)
        return len(await _visible(elements))

    # =========================================================================
    # Lookup helpers
    # =========================================================================

    async def _clickable(self, locator: Any, context: Any) -> Element:
        suffix = None
        if context is not None:
            context_locator = Locator.classify(context, default_kind=LocatorKind.CSS)
            suffix = f"was not found inside element {context_locator}"
        elements = await self._find_or_fail(
            locator, QueryFamily.CLICKABLE, "Clickable element", context, suffix
        )
        if len(elements) == 1:
            return elements[0]
        return await _first_visible(elements)

    async def _checkable(self, field: Any, context: Any) -> Element:
        elements = await self._find_or_fail(
            field, QueryFamily.CHECKABLE, "Checkbox or radio", context
        )
        return elements[0]

    async def _find_or_fail(
        self,
        locator: Any,
        family: QueryFamily,
        prefix: str,
        context: Any = None,
        suffix: Optional[str] = None,
    ) -> List[Element]:
        root = self.context.root
        if context is not None:
            root = await narrow(root, self.context.check_nesting(context), self.driver)

        elements = await resolve(locator, root, self.driver.execute, family)
        if elements:
            return elements

        classified = Locator.classify(locator)
        logger.warning(f"{prefix} {classified} not found ({family.value})")
        attach_locator_attempts(classified, family, templates_for(classified, family))
        if suffix is None:
            raise ElementNotFound(locator, prefix)
        raise ElementNotFound(locator, prefix, suffix)


async def _visible(elements: List[Element]) -> List[Element]:
    return [el for el in elements if await el.is_visible()]


async def _first_visible(elements: List[Element]) -> Element:
    """First visible element, or the first element when none is visible."""
    visible = await _visible(elements)
    return visible[0] if visible else elements[0]


def _render_options(option: Union[str, Iterable[str]]) -> str:
    if isinstance(option, str):
        return option
    return ", ".join(str(o) for o in option)


__all__ = [
    "LocatorActions",
    "OPTION_NOT_FOUND_SUFFIX",
]
