"""
================================================================================
Unit Test Fixtures
================================================================================

Drivers used by the unit suite:

    RecordingExecutor   scripted results per (kind, value); records every call
    DomDriver           evaluates compiled XPath/CSS against an lxml document,
                        so query tiers are checked against real markup

================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from cssselect.parser import SelectorError
from lxml import etree, html
from lxml.cssselect import CSSSelector

from fuzzy_locator.framework.errors import QueryExecutionError
from fuzzy_locator.framework.locator import Locator


class RecordingExecutor:
    """
    Driver primitive returning scripted results.

    Args:
        results: Mapping of (kind, value) or a predicate to the result list or
            an exception instance to raise
    """

    def __init__(self, results: Optional[Dict[Any, Any]] = None, default: Any = None):
        self.results = results or {}
        self.default = default if default is not None else []
        self.calls: List[Tuple[str, Any, Any]] = []

    def __call__(self, kind: str, value: Any, root: Any) -> List[Any]:
        self.calls.append((kind, value, root))
        outcome = self.results.get((kind, value), self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    @property
    def queries(self) -> List[Tuple[str, Any]]:
        return [(kind, value) for kind, value, _ in self.calls]


class DomDriver:
    """Driver collaborator running queries against lxml elements."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []

    async def execute(self, kind: str, value: Any, root: Any) -> List[Any]:
        self.calls.append((kind, value))
        try:
            if kind == "xpath":
                return [node for node in root.xpath(value) if isinstance(node, etree._Element)]
            if kind == "css":
                return CSSSelector(value, translator="html")(root)
        except (etree.XPathError, SelectorError) as e:
            raise QueryExecutionError(kind, value, str(e)) from e
        raise QueryExecutionError(kind, value, "unsupported query kind")

    async def enter_frame(self, root: Any, frames: Sequence[Locator]) -> Any:
        current = root
        for frame in frames:
            query = frame.to_query()
            found = await self.execute(query.kind, query.value, current)
            if not found:
                raise QueryExecutionError(query.kind, query.value, "frame not found")
            current = found[0]
        return current


@pytest.fixture
def executor() -> Callable[..., RecordingExecutor]:
    return RecordingExecutor


@pytest.fixture
def dom_driver() -> DomDriver:
    return DomDriver()


@pytest.fixture
def parse_html() -> Callable[[str], Any]:
    """Parse an HTML snippet and return its <body> element as the search root."""

    def _parse(markup: str):
        document = html.document_fromstring(f"<html><body>{markup}</body></html>")
        return document.body

    return _parse


LOCATOR_XML = """<body>
  <span>Hey</span>
  <p>
    <span></span>
    <div></div>
    <div id="user" data-element="name">davert</div>
  </p>
  <div class="form-wrapper" id="buttons-wrapper">
  <fieldset id="fieldset-buttons">
    <table>
      <tr>
        <td>List</td>
        <td>Edit</td>
        <td>Delete</td>
      </tr>
      <tr>
        <td>Show</td>
        <td>Also Edit</td>
        <td>Also Delete</td>
      </tr>
    </table>
    <div id="submit-wrapper" class="form-wrapper">
      <div id="submit-element" class="form-element">
        <button name="submit" id="submit" type="submit">Sign In</button>
      </div>
    </div>
    <div id="remember-wrapper" class="form-wrapper">
      <div id="remember-element" class="form-element">
        <input type="hidden" name="remember" value="please_do" />
        <input type="checkbox" data-value="yes" id="remember" value="1" />
        <label for="remember" class="optional">Remember Me</label>
      </div>
    </div>
    <div class="form-field">
      <input name="name0" type="text" value=""/>
    </div>
    <div class="form-field">
      <input name="name1" type="text" value=""/>
    </div>
  </fieldset>
  <label>Hello<a href="#">Please click</a></label>
  </div>
  <input type="hidden" name="return_url" value="" id="return_url" />
</body>"""


@pytest.fixture
def locator_doc():
    """XML document used to evaluate DSL-built XPath."""
    return etree.fromstring(LOCATOR_XML)
