"""
================================================================================
Resolution Engine
================================================================================

Turns a Locator into driver element handles.

    strict / raw locator  ->  exactly one driver call, no fallback
    fuzzy locator         ->  query tiers of the requested family, in order,
                              first non-empty result wins

The engine never raises ElementNotFound; it returns an empty list and lets
the call site word the error. Driver failures propagate unchanged, except on
best-effort tiers (clickable "self") where they count as "no match".

The driver collaborator is a single callable::

    execute(kind: str, value: Any, root: SearchRoot) -> list | Awaitable[list]

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, List, Union

from loguru import logger

from . import query_builders
from .errors import InvalidLocatorKind
from .literal import literal
from .locator import Locator, Query
from .query_builders import QueryTemplate

# Opaque handles owned by the driver
SearchRoot = Any
Element = Any

Execute = Callable[[str, Any, SearchRoot], Union[List[Element], Awaitable[List[Element]]]]


class QueryFamily(str, Enum):
    """Intent stated by the call site; the engine never guesses it."""

    ELEMENT = "element"
    CLICKABLE = "clickable"
    CHECKABLE = "checkable"
    FIELD = "field"


_BUILDERS = {
    QueryFamily.CLICKABLE: query_builders.clickable,
    QueryFamily.CHECKABLE: query_builders.checkable,
    QueryFamily.FIELD: query_builders.field,
}


def templates_for(locator: Locator, family: QueryFamily = QueryFamily.ELEMENT) -> List[QueryTemplate]:
    """
    Compile the ordered query attempts for ``locator``.

    Non-fuzzy locators produce a single template, fuzzy ones the family tiers.
    The generic element family has no fuzzy tiers and only uses the raw value.
    """
    if locator.is_null():
        return []
    if not locator.is_fuzzy():
        query = locator.to_query()
        return [QueryTemplate(1, locator.kind.value, query.kind, query.value)]

    raw_value = str(locator.value)
    builder = _BUILDERS.get(family)
    if builder is None:
        return query_builders.raw_templates(raw_value, tier=1)
    return builder(literal(raw_value), raw_value)


async def resolve(
    locator: Any,
    root: SearchRoot,
    execute: Execute,
    family: QueryFamily = QueryFamily.ELEMENT,
) -> List[Element]:
    """
    Resolve ``locator`` against ``root``.

    Args:
        locator: Locator or any raw value accepted by Locator.classify
        root: Search root handed through to ``execute``
        execute: Driver primitive running one query
        family: Query family for fuzzy locators

    Returns:
        Elements of the first successful attempt, or an empty list. Null
        locators (None, "" or an object without a kind) match nothing.

    Raises:
        InvalidLocatorKind: frame locators, which only narrow a search
        QueryExecutionError: propagated from ``execute`` on non best-effort tiers
    """
    locator = Locator.classify(locator)
    if locator.is_frame():
        raise InvalidLocatorKind(
            locator.raw, f"Frame locator {locator} can only be used to narrow a search"
        )
    if locator.is_null():
        logger.debug(f"Null locator {locator.raw!r} matches nothing")
        return []

    if not locator.is_fuzzy():
        query = locator.to_query()
        logger.debug(f"Resolving {locator} as {query.kind}: {query.value}")
        return await _run(execute, query, root)

    for template in templates_for(locator, family):
        query = Query(template.kind, template.value)
        if template.best_effort:
            try:
                elements = await _run(execute, query, root)
            except Exception as e:
                logger.debug(
                    f"Ignoring failure of best-effort tier '{template.name}' "
                    f"for {locator}: {e}"
                )
                continue
        else:
            elements = await _run(execute, query, root)

        if elements:
            logger.debug(
                f"{family.value} {locator} matched {len(elements)} element(s) "
                f"on tier {template.tier} '{template.name}'"
            )
            return elements
        logger.debug(f"{family.value} {locator}: tier {template.tier} '{template.name}' empty")

    logger.debug(f"{family.value} {locator}: all tiers exhausted")
    return []


@dataclass
class OptionMatch:
    """Outcome of selecting options inside one <select>."""

    elements: List[Element] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.elements)


async def resolve_options(
    select_root: SearchRoot,
    options: Union[str, Iterable[str]],
    execute: Execute,
) -> OptionMatch:
    """
    Find <option> elements of an already located <select>.

    Each option is looked up on its own, by visible text first and by value
    second. Every option that matches contributes its elements, so multi
    select lists get all requested options.
    """
    if isinstance(options, str):
        options = [options]

    result = OptionMatch()
    for option in options:
        matched: List[Element] = []
        for template in query_builders.select_option(option):
            matched = await _run(execute, Query(template.kind, template.value), select_root)
            if matched:
                break
        if matched:
            result.elements.extend(matched)
        else:
            result.missing.append(str(option))

    if result.missing and result.elements:
        logger.warning(f"Options found neither by visible text nor by value: {result.missing}")
    return result


async def _run(execute: Execute, query: Query, root: SearchRoot) -> List[Element]:
    result = execute(query.kind, query.value, root)
    if inspect.isawaitable(result):
        result = await result
    return list(result or [])


__all__ = [
    "QueryFamily",
    "OptionMatch",
    "SearchRoot",
    "Element",
    "Execute",
    "resolve",
    "resolve_options",
    "templates_for",
]
