"""
Shared fixtures for Dupe tests.
"""

import pytest

from dupe.store.registry import Registry, set_default_registry


@pytest.fixture(autouse=True)
def default_registry():
    """Fresh process-wide registry for every test."""
    registry = Registry()
    set_default_registry(registry)

    yield registry

    set_default_registry(None)


@pytest.fixture
def registry():
    """Explicit registry, independent of the default one."""
    return Registry()
