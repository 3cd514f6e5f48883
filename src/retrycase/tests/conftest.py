"""Shared fixtures: fresh settings and random source for every test."""

from __future__ import annotations

import pytest

from retrycase.foundation.config import clear_settings_cache
from retrycase.runtime.retry import reset_random


@pytest.fixture(autouse=True)
def clean_globals() -> object:
    """Reset cached settings and the shared random source around each test."""
    clear_settings_cache()
    reset_random()
    yield
    clear_settings_cache()
    reset_random()


@pytest.fixture
def sleeps() -> list[float]:
    """Collected pauses; pass ``sleeps.append`` as the sleeper."""
    return []
