"""
================================================================================
Query Builders
================================================================================

Compile fuzzy human text into ordered query tiers for each element family.

Tier order encodes priority: exact structural matches first, attribute based
matches next, the raw value as a selector last. The resolution engine stops at
the first tier that yields anything, so within a family an earlier tier always
shadows later ones.

    Family      Tiers
    ---------   ---------------------------------------------
    clickable   narrow -> wide -> self (best effort) -> raw
    checkable   byText -> byName -> raw
    field       labelEquals -> labelContains -> byName -> raw
    option      byVisibleText | byValue (union per option)

Builders take an already escaped literal (see literal.literal) plus the raw,
unescaped locator text for the raw tier.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from cssselect import HTMLTranslator
from cssselect.parser import SelectorError

from .literal import combine, literal


@dataclass(frozen=True)
class QueryTemplate:
    """
    One fallback tier.

    Attributes:
        tier: Position in the family, 1 is tried first
        name: Tier name used in logs ("narrow", "labelContains", ...)
        kind: "css" or "xpath"
        value: Compiled selector
        best_effort: Driver failures on this tier are ignored
    """
    tier: int
    name: str
    kind: str
    value: str
    best_effort: bool = False


# --------------------------------------------------------------------------
# Shared XPath fragments
# --------------------------------------------------------------------------

_BUTTON_INPUT = "./@type = 'submit' or ./@type = 'image' or ./@type = 'button'"
_FIELD_ELEMENT = ".//*[self::input | self::textarea | self::select]"
_NOT_EXCLUDED = "[not(./@type = 'submit' or ./@type = 'image' or ./@type = 'hidden')]"
_FIELD = f"{_FIELD_ELEMENT}{_NOT_EXCLUDED}"
_CHECKABLE = ".//input[@type = 'checkbox' or @type = 'radio']"

# A bare location path such as "button" or "form/input"
_PLAIN_XPATH_PATH = re.compile(r"[A-Za-z_][\w.-]*(?:/{1,2}[A-Za-z_][\w.-]*)*")


# --------------------------------------------------------------------------
# Clickable
# --------------------------------------------------------------------------

def clickable_narrow(lit: str) -> str:
    return combine([
        f".//a[normalize-space(.)={lit}]",
        f".//button[normalize-space(.)={lit}]",
        f".//a/img[normalize-space(@alt)={lit}]/ancestor::a",
        f".//input[{_BUTTON_INPUT}][normalize-space(@value)={lit}]",
    ])


def clickable_wide(lit: str) -> str:
    return combine([
        f".//a[./@href][((contains(normalize-space(string(.)), {lit})) "
        f"or .//img[contains(./@alt, {lit})])]",
        f".//input[{_BUTTON_INPUT}][contains(./@value, {lit})]",
        f".//input[./@type = 'image'][contains(./@alt, {lit})]",
        f".//button[contains(normalize-space(string(.)), {lit})]",
        f".//label[contains(normalize-space(string(.)), {lit})]",
        f".//input[{_BUTTON_INPUT}][./@name = {lit}]",
        f".//button[./@name = {lit}]",
        f".//*[@aria-label = {lit}]",
        f".//*[@title = {lit}]",
        f".//*[@aria-labelledby = //*[@id][normalize-space(string(.)) = {lit}]/@id ]",
    ])


def clickable_self(lit: str) -> str:
    return (
        f"./self::*[contains(normalize-space(string(.)), {lit}) "
        f"or contains(normalize-space(@value), {lit})]"
    )


def clickable(lit: str, raw_value: str) -> List[QueryTemplate]:
    """Tiers for click, doubleClick, rightClick and "clickable by text"."""
    templates = [
        QueryTemplate(1, "narrow", "xpath", clickable_narrow(lit)),
        QueryTemplate(2, "wide", "xpath", clickable_wide(lit)),
        QueryTemplate(3, "self", "xpath", clickable_self(lit), best_effort=True),
    ]
    templates.extend(raw_templates(raw_value, tier=4))
    return templates


# --------------------------------------------------------------------------
# Checkable
# --------------------------------------------------------------------------

def checkable_by_text(lit: str) -> str:
    return combine([
        f"{_CHECKABLE}[(@id = //label[@for][contains(normalize-space(string(.)), {lit})]/@for) "
        f"or @placeholder = {lit}]",
        f".//label[contains(normalize-space(string(.)), {lit})]"
        f"//input[@type = 'radio' or @type = 'checkbox']",
    ])


def checkable_by_name(lit: str) -> str:
    return f"{_CHECKABLE}[@name = {lit}]"


def checkable(lit: str, raw_value: str) -> List[QueryTemplate]:
    """Tiers for checkbox and radio lookup by label or name."""
    templates = [
        QueryTemplate(1, "byText", "xpath", checkable_by_text(lit)),
        QueryTemplate(2, "byName", "xpath", checkable_by_name(lit)),
    ]
    templates.extend(raw_templates(raw_value, tier=3))
    return templates


# --------------------------------------------------------------------------
# Field
# --------------------------------------------------------------------------

def field_label_equals(lit: str) -> str:
    return combine([
        f"{_FIELD}[((./@name = {lit}) "
        f"or ./@id = //label[@for][normalize-space(string(.)) = {lit}]/@for "
        f"or ./@placeholder = {lit})]",
        f".//label[normalize-space(string(.)) = {lit}]/{_FIELD}",
    ])


def field_label_contains(lit: str) -> str:
    return combine([
        f"{_FIELD}[(((./@name = {lit}) "
        f"or ./@id = //label[@for][contains(normalize-space(string(.)), {lit})]/@for) "
        f"or ./@placeholder = {lit})]",
        f".//label[contains(normalize-space(string(.)), {lit})]/{_FIELD}",
        f".//*[@aria-label = {lit}]{_NOT_EXCLUDED}",
        f".//*[@title = {lit}]{_NOT_EXCLUDED}",
        f".//*[@aria-labelledby = //*[@id][normalize-space(string(.)) = {lit}]/@id ]"
        f"{_NOT_EXCLUDED}",
    ])


def field_by_name(lit: str) -> str:
    return f"{_FIELD}[@name = {lit}]"


def field_raw(raw_value: str) -> QueryTemplate:
    """
    Raw CSS for the field family.

    Valid CSS is compiled to XPath so the submit/image/hidden exclusion holds
    on this tier too. Anything cssselect can't parse is passed through as CSS
    and left to the driver to reject.
    """
    try:
        xpath = HTMLTranslator().css_to_xpath(raw_value, prefix=".//")
    except SelectorError:
        return QueryTemplate(4, "raw", "css", raw_value)
    return QueryTemplate(4, "raw", "xpath", f"({xpath}){_NOT_EXCLUDED}")


def field(lit: str, raw_value: str) -> List[QueryTemplate]:
    """Tiers for input, textarea and select lookup by label, placeholder or name."""
    return [
        QueryTemplate(1, "labelEquals", "xpath", field_label_equals(lit)),
        QueryTemplate(2, "labelContains", "xpath", field_label_contains(lit)),
        QueryTemplate(3, "byName", "xpath", field_by_name(lit)),
        field_raw(raw_value),
    ]


# --------------------------------------------------------------------------
# Select options
# --------------------------------------------------------------------------

def option_by_visible_text(lit: str) -> str:
    predicate = f"[normalize-space(.) = {lit}]"
    return f"./option{predicate}|./optgroup/option{predicate}"


def option_by_value(lit: str) -> str:
    predicate = f"[normalize-space(@value) = {lit}]"
    return f"./option{predicate}|./optgroup/option{predicate}"


def select_option(option: str) -> List[QueryTemplate]:
    """Templates for one option of an already located <select>."""
    lit = literal(str(option).strip())
    return [
        QueryTemplate(1, "byVisibleText", "xpath", option_by_visible_text(lit)),
        QueryTemplate(2, "byValue", "xpath", option_by_value(lit)),
    ]


# --------------------------------------------------------------------------
# Raw tier
# --------------------------------------------------------------------------

def raw_templates(raw_value: str, tier: int) -> List[QueryTemplate]:
    """
    The unmodified locator text used directly as a selector.

    CSS first; an XPath attempt follows only when the text is a plain
    location path, since arbitrary prose is not valid XPath.
    """
    templates = [QueryTemplate(tier, "raw", "css", raw_value)]
    if _PLAIN_XPATH_PATH.fullmatch(raw_value):
        templates.append(QueryTemplate(tier, "raw", "xpath", f".//{raw_value}"))
    return templates


__all__ = [
    "QueryTemplate",
    "clickable",
    "clickable_narrow",
    "clickable_wide",
    "clickable_self",
    "checkable",
    "checkable_by_text",
    "checkable_by_name",
    "field",
    "field_label_equals",
    "field_label_contains",
    "field_by_name",
    "field_raw",
    "select_option",
    "option_by_visible_text",
    "option_by_value",
    "raw_templates",
]
