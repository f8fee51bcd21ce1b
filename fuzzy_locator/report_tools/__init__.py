"""Allure reporting helpers."""

from .allure_utils import attach_json, attach_locator_attempts, attach_text

__all__ = [
    "attach_json",
    "attach_locator_attempts",
    "attach_text",
]
