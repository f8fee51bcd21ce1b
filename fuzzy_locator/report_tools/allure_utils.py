"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the actions layer to make lookup failures
readable in Allure reports.

Features:
- Text and JSON attachments
- Dump of every query tier tried for a locator

================================================================================
"""

import json
from typing import Any, Iterable

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_locator_attempts(locator: Any, family: Any, templates: Iterable[Any]):
    """
    Attach the ordered query tiers tried for a locator.

    Args:
        locator: Locator (or raw value) that was resolved
        family: Query family name or enum member
        templates: QueryTemplate objects in the order they were tried
    """
    family_name = getattr(family, "value", family)
    attempts = [
        {
            "tier": t.tier,
            "name": t.name,
            "kind": t.kind,
            "value": t.value,
            "best_effort": t.best_effort,
        }
        for t in templates
    ]
    logger.debug(f"Attaching {len(attempts)} attempt(s) for {family_name} {locator}")
    attach_json(
        {"locator": str(locator), "family": family_name, "attempts": attempts},
        name=f"Locator attempts: {locator}",
    )


__all__ = [
    "attach_json",
    "attach_text",
    "attach_locator_attempts",
]
