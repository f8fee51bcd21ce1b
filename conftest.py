"""
Repository-level pytest configuration.

Keeps every test isolated from global locator state:
  - configuration is reloaded from scratch for each test
  - locator filters registered by one test never leak into the next
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from fuzzy_locator.common import global_config
from fuzzy_locator.framework.locator import clear_filters


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def _isolated_locator_state() -> Generator[None, None, None]:
    """Reset cached configuration and registered locator filters around each test."""
    global_config.use_config_dir(None)
    clear_filters()

    yield

    clear_filters()
    global_config.use_config_dir(None)
