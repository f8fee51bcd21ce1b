"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for running fuzzy locators against a real Playwright browser.

Key Features:
- Browser and page lifecycle per test
- Browser choice through UI_BROWSER / UI_HEADLESS
- Tests are skipped when no browser can be launched
- Page HTML attached to the Allure report on failure

================================================================================
"""

import os
from typing import AsyncGenerator

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Browser, Error as PlaywrightError, Page, async_playwright

from fuzzy_locator.framework.element_actions import LocatorActions


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture
async def browser() -> AsyncGenerator[Browser, None]:
    """
    Launch the configured browser, or skip when it isn't installed.
    """
    browser_type = os.getenv("UI_BROWSER", "chromium")
    headless = os.getenv("UI_HEADLESS", "true").lower() != "false"

    async with async_playwright() as playwright:
        try:
            browser = await getattr(playwright, browser_type).launch(headless=headless)
        except PlaywrightError as e:
            pytest.skip(f"{browser_type} could not be launched: {e.message.splitlines()[0]}")
        yield browser
        await browser.close()


@pytest_asyncio.fixture
async def page(request, browser: Browser) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches the page HTML when the test body failed.
    """
    context = await browser.new_context(viewport={"width": 1280, "height": 800})
    page = await context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            allure.attach(
                await page.content(),
                name="page_html",
                attachment_type=allure.attachment_type.HTML,
            )
        except PlaywrightError as e:
            logger.warning(f"Failed to capture page HTML on failure: {e}")
    await context.close()


@pytest.fixture
def actions(page: Page) -> LocatorActions:
    return LocatorActions(page, timeout=2000)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
