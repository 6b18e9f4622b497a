from __future__ import annotations

import random

import pytest
from hypothesis import settings

from note_junction.grouping.types import GroupingConfig
from note_junction.utils.io_utils import load_settings


def pytest_configure(config: pytest.Config) -> None:
    # Set xfail_strict to False globally
    config.option.xfail_strict = False
    config.addinivalue_line("markers", "hypothesis: property-based tests")


# ---- Deterministic Testing Configuration ---------------------

# Global deterministic seed
DETERMINISTIC_SEED = 42


@pytest.fixture(autouse=True)
def set_deterministic_seed():
    """Set deterministic seed for all tests"""
    random.seed(DETERMINISTIC_SEED)
    yield
    # Reset after test
    random.seed()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per path; start every test from a cold cache."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def bare_config() -> GroupingConfig:
    """No exclusions, no priorities, no attribute expansion."""
    return GroupingConfig(exclusions=(), low_priority=(), high_priority=(), attribute_names=())


# Hypothesis settings for all property-based tests
settings.register_profile("deterministic",
    deadline=None,
    max_examples=200,
    derandomize=True,
    database=None
)
settings.load_profile("deterministic")
