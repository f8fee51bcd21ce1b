"""
================================================================================
Locator Model
================================================================================

Classifies whatever a test author passes as "the element" into one tagged
Locator value:

    "#submit"             -> css
    ".//span"             -> xpath
    "Log In"              -> fuzzy (human text, resolved through query tiers)
    "~Close"              -> custom(accessibility)
    {"name": "email"}     -> name
    {"frame": ["#a", "#b"]} -> frame chain

Locators are immutable; every DSL method returns a new XPath locator.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from cssselect import GenericTranslator
from cssselect.parser import SelectorError

from .errors import InvalidLocatorKind
from .literal import combine, literal


class LocatorKind(str, Enum):
    """Every kind a Locator can resolve to."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    CUSTOM = "custom"
    FRAME = "frame"
    REACT = "react"
    VUE = "vue"
    SHADOW = "shadow"
    FUZZY = "fuzzy"
    STRICT_UNKNOWN = "strict_unknown"


# Object keys mapped to their kind. Any other key names a custom engine.
_OBJECT_KINDS: Dict[str, LocatorKind] = {
    "css": LocatorKind.CSS,
    "xpath": LocatorKind.XPATH,
    "id": LocatorKind.ID,
    "name": LocatorKind.NAME,
    "frame": LocatorKind.FRAME,
    "react": LocatorKind.REACT,
    "vue": LocatorKind.VUE,
    "shadow": LocatorKind.SHADOW,
}

# Keys that qualify a locator object but never name its kind
_AUXILIARY_KEYS = {"props"}

ACCESSIBILITY_PREFIX = "~"
ACCESSIBILITY_ENGINE = "accessibility"

# --------------------------------------------------------------------------
# Syntactic sniffing
# --------------------------------------------------------------------------

_IDENT = r"-?[_a-zA-Z][_a-zA-Z0-9-]*"
_ATTR = (
    r"\[\s*[_a-zA-Z][-\w:]*\s*"
    r"(?:[~|^$*]?=\s*(?:\"[^\"]*\"|'[^']*'|[^\]\s\"']+)\s*(?:[iIsS]\s*)?)?\]"
)
_PSEUDO = rf"::?{_IDENT}(?:\([^()]*\))?"
_SUFFIX = rf"(?:#{_IDENT}|\.{_IDENT}|{_ATTR}|{_PSEUDO})"
_COMPOUND = rf"(?:(?:{_IDENT}|\*){_SUFFIX}*|{_SUFFIX}+)"
_COMPLEX = rf"{_COMPOUND}(?:\s*[>+~]\s*{_COMPOUND}|\s+{_COMPOUND})*"
_CSS_GRAMMAR = re.compile(rf"{_COMPLEX}(?:\s*,\s*{_COMPLEX})*")
_CSS_MARKERS = re.compile(r"[#.\[:]")
_CSS_IDENT_START = re.compile(_IDENT)


def looks_like_xpath(text: str) -> bool:
    """XPath locators begin with // or ./ once leading brackets are dropped."""
    return text.lstrip("(")[:2] in ("//", "./")


def looks_like_css(text: str) -> bool:
    """
    Decide whether ``text`` is a CSS selector rather than human text.

    Plain words ("Login", "Sign in") stay fuzzy: a selector needs at least
    one #id, .class, [attr] or :pseudo part. Combinators and ``*`` alone
    don't count, so labels like "Email *" or "Next > Step" stay text.
    """
    if not text:
        return False
    if text[0] == "[":
        return True
    if text[0] in "#." and _CSS_IDENT_START.match(text, 1):
        return True
    stripped = text.strip()
    if not _CSS_MARKERS.search(stripped):
        return False
    return _CSS_GRAMMAR.fullmatch(stripped) is not None


def escape_css_identifier(value: str) -> str:
    escaped: List[str] = []
    for index, char in enumerate(value):
        if char.isalnum() and not (index == 0 and char.isdigit()) or char in ("-", "_"):
            escaped.append(char)
        else:
            escaped.append(f"\\{ord(char):x} ")
    return "".join(escaped)


def escape_css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


# --------------------------------------------------------------------------
# Filters
# --------------------------------------------------------------------------

LocatorFilter = Callable[[Any, "Locator"], Optional["Locator"]]

_filters: List[LocatorFilter] = []


def add_filter(fn: LocatorFilter) -> int:
    """
    Register a filter that may replace a freshly classified locator.

    Filters receive the raw user value and the classified Locator, and return
    a replacement Locator or None to keep it.

    Returns:
        Number of registered filters
    """
    _filters.append(fn)
    return len(_filters)


def remove_filter(fn: LocatorFilter) -> None:
    if fn in _filters:
        _filters.remove(fn)


def clear_filters() -> None:
    _filters.clear()


# --------------------------------------------------------------------------
# Locator
# --------------------------------------------------------------------------

@dataclass(frozen=True)
class Query:
    """A concrete query handed to a driver: ``css``, ``xpath`` or an engine name."""

    kind: str
    value: Any


@dataclass(frozen=True)
class Locator:
    """
    Classified element locator.

    Attributes:
        kind: Resolved LocatorKind
        value: Matcher extracted for the kind (CSS text, XPath text, fuzzy text,
            inner Locator or tuple of Locators for frames)
        raw: Value exactly as supplied by the caller
        engine: Engine name for custom locators (e.g. "accessibility", "android")
        props: Component props for react/vue locators
        output: Display override used by ``str()``
        strict: True when built from a locator object
    """

    kind: LocatorKind
    value: Any = None
    raw: Any = field(default=None, compare=False, hash=False)
    engine: Optional[str] = None
    props: Optional[Mapping[str, Any]] = field(default=None, compare=False, hash=False)
    output: Optional[str] = field(default=None, compare=False)
    strict: bool = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def classify(
        cls,
        value: Any,
        default_kind: Optional[LocatorKind] = None,
        strict: bool = False,
    ) -> "Locator":
        """
        Classify a user supplied value.

        Args:
            value: String, locator object (dict) or an existing Locator
            default_kind: Kind given to strings that are neither XPath nor CSS
                shaped. Defaults to fuzzy.
            strict: Reject locator objects without a recognized kind key

        Raises:
            InvalidLocatorKind: ``strict`` was requested and the object has no kind key
        """
        if isinstance(value, Locator):
            return value
        if isinstance(value, Mapping):
            locator = _classify_object(value, strict)
        elif value is None or value == "":
            locator = cls(kind=LocatorKind.STRICT_UNKNOWN, raw=value)
        else:
            locator = _classify_string(str(value), default_kind)
        return _apply_filters(value, locator)

    @classmethod
    def build(cls, value: Any = None) -> "Locator":
        """Start a DSL chain. No value matches every element."""
        if value is None or value == "":
            return cls.classify({"xpath": "//*"})
        return cls.classify(value, default_kind=LocatorKind.CSS)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_fuzzy(self) -> bool:
        return self.kind is LocatorKind.FUZZY

    def is_css(self) -> bool:
        return self.kind is LocatorKind.CSS

    def is_xpath(self) -> bool:
        return self.kind is LocatorKind.XPATH

    def is_custom(self) -> bool:
        return self.kind is LocatorKind.CUSTOM

    def is_frame(self) -> bool:
        return self.kind is LocatorKind.FRAME

    def is_shadow(self) -> bool:
        return self.kind is LocatorKind.SHADOW

    def is_react(self) -> bool:
        return self.kind is LocatorKind.REACT

    def is_vue(self) -> bool:
        return self.kind is LocatorKind.VUE

    def is_null(self) -> bool:
        return self.kind is LocatorKind.STRICT_UNKNOWN

    def is_strict(self) -> bool:
        return self.strict

    def is_basic(self) -> bool:
        return self.is_css() or self.is_xpath()

    def is_accessibility_id(self) -> bool:
        return self.is_custom() and self.engine == ACCESSIBILITY_ENGINE

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def simplify(self) -> Any:
        """Return the single matcher for this locator, bypassing fuzzy tiers."""
        kind = self.kind
        if kind is LocatorKind.STRICT_UNKNOWN:
            return None
        if kind is LocatorKind.ID:
            return f"#{escape_css_identifier(str(self.value))}"
        if kind is LocatorKind.NAME:
            return f'[name="{escape_css_string(str(self.value))}"]'
        if kind is LocatorKind.SHADOW:
            return {"shadow": list(self.value)}
        if self.is_accessibility_id():
            return f'[aria-label="{escape_css_string(str(self.value))}"]'
        return self.value

    def to_query(self) -> Query:
        """
        Compile a non-fuzzy locator into a driver query.

        Raises:
            InvalidLocatorKind: for frame and null locators, which are never queried
        """
        kind = self.kind
        if kind in (LocatorKind.FRAME, LocatorKind.STRICT_UNKNOWN):
            raise InvalidLocatorKind(
                self.raw, f"Locator {self} can't be executed as a query"
            )
        if kind in (LocatorKind.CSS, LocatorKind.ID, LocatorKind.NAME, LocatorKind.FUZZY):
            return Query("css", self.simplify())
        if kind is LocatorKind.XPATH:
            return Query("xpath", self.value)
        if kind is LocatorKind.SHADOW:
            return Query("shadow", tuple(self.value))
        if kind in (LocatorKind.REACT, LocatorKind.VUE):
            return Query(kind.value, f"{self.value}{_prop_predicates(self.props)}")
        if self.is_accessibility_id():
            return Query("css", self.simplify())
        return Query(self.engine or "custom", self.value)

    def to_strict(self) -> Optional[Dict[str, Any]]:
        if self.is_null():
            return None
        return {self._type_name(): self.value}

    def to_xpath(self) -> str:
        """
        Convert a CSS or XPath locator into XPath.

        Raises:
            ValueError: for kinds without an XPath form
        """
        if self.is_xpath():
            return self.value
        if self.is_css() or self.kind in (LocatorKind.ID, LocatorKind.NAME):
            try:
                return GenericTranslator().css_to_xpath(self.simplify(), prefix=".//")
            except SelectorError as e:
                raise ValueError(f"Can't convert {self} to XPath: {e}") from e
        raise ValueError(f"Can't convert {self} to XPath")

    def _type_name(self) -> str:
        if self.kind is LocatorKind.CUSTOM and self.engine:
            return self.engine
        return self.kind.value

    def __str__(self) -> str:
        if self.output is not None:
            return self.output
        if self.is_frame():
            value = self.value
            if isinstance(value, tuple):
                rendered = "[" + ", ".join(str(v) for v in value) + "]"
            else:
                rendered = str(value)
            return f"{{frame: {rendered}}}"
        if isinstance(self.value, tuple):
            return f"{{{self._type_name()}: {list(self.value)}}}"
        return f"{{{self._type_name()}: {self.value}}}"

    # ------------------------------------------------------------------
    # DSL
    # ------------------------------------------------------------------

    def or_(self, locator: Any) -> "Locator":
        other = Locator.classify(locator, default_kind=LocatorKind.CSS)
        return _xpath_locator(combine([self.to_xpath(), other.to_xpath()]))

    def find(self, locator: Any) -> "Locator":
        return _xpath_locator(f"{self.to_xpath()}//{_sub_selector(locator)}")

    def with_child(self, locator: Any) -> "Locator":
        return _xpath_locator(f"{self.to_xpath()}[./child::{_sub_selector(locator)}]")

    def with_descendant(self, locator: Any) -> "Locator":
        return _xpath_locator(
            f"{self.to_xpath()}[./descendant::{_sub_selector(locator)}]"
        )

    def at(self, position: int) -> "Locator":
        """
        Pick the element at 1-based ``position``; negative values count from the end.
        """
        if position == 0:
            raise ValueError(
                "0 is not valid element position. XPath expects first element to have index 1"
            )
        if position > 0:
            xpath_position = str(position)
        else:
            xpath_position = f"last()-{abs(position + 1)}"
        return _xpath_locator(f"({self.to_xpath()})[position()={xpath_position}]")

    def first(self) -> "Locator":
        return self.at(1)

    def last(self) -> "Locator":
        return self.at(-1)

    def with_text(self, text: str) -> "Locator":
        return _xpath_locator(f"{self.to_xpath()}[contains(., {literal(text)})]")

    def with_attr(self, attributes: Mapping[str, str]) -> "Locator":
        operands = [f"@{name} = {literal(value)}" for name, value in attributes.items()]
        return _xpath_locator(f"{self.to_xpath()}[{' and '.join(operands)}]")

    def inside(self, locator: Any) -> "Locator":
        return _xpath_locator(f"{self.to_xpath()}[ancestor::{_sub_selector(locator)}]")

    def after(self, locator: Any) -> "Locator":
        return _xpath_locator(
            f"{self.to_xpath()}[preceding-sibling::{_sub_selector(locator)}]"
        )

    def before(self, locator: Any) -> "Locator":
        return _xpath_locator(
            f"{self.to_xpath()}[following-sibling::{_sub_selector(locator)}]"
        )

    def as_(self, output: str) -> "Locator":
        """Give the locator a human readable name for logs and errors."""
        return replace(self, output=output)


def classify(
    value: Any,
    default_kind: Optional[LocatorKind] = None,
    strict: bool = False,
) -> Locator:
    """Module level shortcut for :meth:`Locator.classify`."""
    return Locator.classify(value, default_kind=default_kind, strict=strict)


def _classify_string(text: str, default_kind: Optional[LocatorKind]) -> Locator:
    if looks_like_xpath(text):
        kind = LocatorKind.XPATH
    elif text.startswith(ACCESSIBILITY_PREFIX) and len(text) > 1:
        return Locator(
            kind=LocatorKind.CUSTOM,
            value=text[len(ACCESSIBILITY_PREFIX):],
            raw=text,
            engine=ACCESSIBILITY_ENGINE,
            output=text,
        )
    elif looks_like_css(text):
        kind = LocatorKind.CSS
    else:
        kind = default_kind or LocatorKind.FUZZY
    return Locator(kind=kind, value=text, raw=text, output=text)


def _classify_object(obj: Mapping[str, Any], strict: bool) -> Locator:
    key = next((k for k in obj if k not in _AUXILIARY_KEYS), None)
    if key is None:
        if strict:
            raise InvalidLocatorKind(dict(obj))
        return Locator(kind=LocatorKind.STRICT_UNKNOWN, raw=obj, strict=True)

    value = obj[key]
    kind = _OBJECT_KINDS.get(key, LocatorKind.CUSTOM)
    engine = key if kind is LocatorKind.CUSTOM else None

    if kind is LocatorKind.FRAME:
        value = _classify_frame(value)
    elif kind is LocatorKind.SHADOW:
        value = tuple(value) if isinstance(value, (list, tuple)) else (value,)

    return Locator(
        kind=kind,
        value=value,
        raw=obj,
        engine=engine,
        props=obj.get("props"),
        strict=True,
    )


def _classify_frame(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(Locator.classify(v, default_kind=LocatorKind.CSS) for v in value)
    return Locator.classify(value, default_kind=LocatorKind.CSS)


def _prop_predicates(props: Optional[Mapping[str, Any]]) -> str:
    if not props:
        return ""
    return "".join(f'[{key} = "{value}"]' for key, value in props.items())


def _apply_filters(raw: Any, locator: Locator) -> Locator:
    for fn in list(_filters):
        replacement = fn(raw, locator)
        if replacement is not None:
            locator = replacement
    return locator


def _xpath_locator(xpath: str) -> Locator:
    return Locator(kind=LocatorKind.XPATH, value=xpath, raw={"xpath": xpath}, strict=True)


def _sub_selector(locator: Any) -> str:
    xpath = Locator.classify(locator, default_kind=LocatorKind.CSS).to_xpath()
    if looks_like_xpath(xpath) and xpath.startswith("("):
        raise ValueError(
            "XPath with round brackets is not possible here! "
            "May be a nested locator with at() last() or first() causes this error."
        )
    return re.sub(r"^[./]+", "", xpath)


__all__ = [
    "LocatorKind",
    "Locator",
    "Query",
    "classify",
    "add_filter",
    "remove_filter",
    "clear_filters",
    "looks_like_css",
    "looks_like_xpath",
    "escape_css_identifier",
    "escape_css_string",
    "ACCESSIBILITY_PREFIX",
    "ACCESSIBILITY_ENGINE",
]
