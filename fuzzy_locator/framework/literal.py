"""
XPath string literal helpers.

XPath 1.0 has no escape sequence inside string literals, so text holding both
quote characters has to be stitched together with ``concat()``.
"""

from __future__ import annotations

from typing import Any, Iterable


def literal(text: Any) -> str:
    """
    Quote ``text`` so it can be spliced into an XPath expression.

    Examples:
        Login           ->  'Login'
        it's            ->  "it's"
        it's a "test"   ->  concat('it', "'", 's a "test"')
    """
    text = "" if text is None else str(text)
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    fragments = [f"'{fragment}'" for fragment in text.split("'")]
    return "concat(" + ", \"'\", ".join(fragments) + ")"


def combine(queries: Iterable[str]) -> str:
    """Join XPath expressions into a single union expression."""
    return " | ".join(queries)


__all__ = ["literal", "combine"]
