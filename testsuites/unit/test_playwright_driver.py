import pytest
from playwright.async_api import Error as PlaywrightError

from fuzzy_locator.framework.errors import QueryExecutionError
from fuzzy_locator.framework.locator import Locator
from fuzzy_locator.framework.playwright_driver import PlaywrightDriver, build_selector
from fuzzy_locator.framework.resolver import QueryFamily, resolve


class FakeLocatorSet:
    def __init__(self, root, selector):
        self.root = root
        self.selector = selector

    async def all(self):
        self.root.selectors.append(self.selector)
        if self.selector in self.root.broken:
            raise PlaywrightError(f"Unexpected token in {self.selector}")
        return list(self.root.matches.get(self.selector, []))


class FakeRoot:
    """Stands in for a Page, Locator or FrameLocator."""

    def __init__(self, name="page", matches=None, broken=()):
        self.name = name
        self.matches = matches or {}
        self.broken = set(broken)
        self.selectors = []
        self.frames = []

    def locator(self, selector):
        return FakeLocatorSet(self, selector)

    def frame_locator(self, selector):
        child = FakeRoot(f"{self.name} > {selector}")
        self.frames.append((selector, child))
        return child


@pytest.mark.parametrize(
    "kind, value, selector",
    [
        ("css", "#login", "css=#login"),
        ("xpath", ".//a", "xpath=.//a"),
        ("react", 'Button[text = "OK"]', '_react=Button[text = "OK"]'),
        ("vue", "Tab", "_vue=Tab"),
        ("shadow", ("my-app", "input.input"), "css=my-app input.input"),
        ("data-qa", "save", "data-qa=save"),
    ],
)
def test_build_selector(kind, value, selector):
    assert build_selector(kind, value) == selector


@pytest.mark.P0
@pytest.mark.asyncio
async def test_execute_returns_all_matches():
    page = FakeRoot(matches={"css=#login": ["loc-1", "loc-2"]})
    elements = await PlaywrightDriver().execute("css", "#login", page)

    assert elements == ["loc-1", "loc-2"]
    assert page.selectors == ["css=#login"]


@pytest.mark.asyncio
async def test_execute_wraps_playwright_errors():
    page = FakeRoot(broken={"css=a[[b"})

    with pytest.raises(QueryExecutionError) as exc_info:
        await PlaywrightDriver().execute("css", "a[[b", page)

    assert exc_info.value.kind == "css"
    assert exc_info.value.value == "a[[b"
    assert isinstance(exc_info.value.__cause__, PlaywrightError)


@pytest.mark.asyncio
async def test_enter_frame_chains_frame_locators():
    page = FakeRoot()
    frames = Locator.classify({"frame": ["#outer", {"xpath": "//iframe"}]}).value

    root = await PlaywrightDriver().enter_frame(page, frames)

    assert root.name == "page > css=#outer > xpath=//iframe"


@pytest.mark.asyncio
async def test_resolve_through_playwright_driver():
    driver = PlaywrightDriver()
    page = FakeRoot(matches={"css=Sign in": ["raw-button"]})

    found = await resolve("Sign in", page, driver.execute, QueryFamily.CLICKABLE)

    assert found == ["raw-button"]
    assert [s.split("=", 1)[0] for s in page.selectors] == ["xpath", "xpath", "xpath", "css"]
