from __future__ import annotations

import pytest

from pseudograph.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
