"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the trapinfra test suite.
"""

from collections.abc import Generator

import pytest

from tests.helpers.slots import FakeSlots
from trapinfra import TrapConfig, TrapContext, reset_context

# =============================================================================
# Plugin Registration
# =============================================================================

pytest_plugins = [
    "tests.fixtures.logging",
    "tests.fixtures.signals",
]


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no real signal delivery)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real signal dispositions)"
    )
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (signals raised and delivered)"
    )


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def slots() -> FakeSlots:
    """Provide an in-memory slot factory."""
    return FakeSlots()


@pytest.fixture
def ctx(slots: FakeSlots) -> TrapContext:
    """
    Provide a context with default policies over in-memory slots.

    Returns:
        TrapContext: Fresh context, not yet synchronized
    """
    return TrapContext(config=TrapConfig(), slot_factory=slots)


@pytest.fixture(autouse=True)
def reset_process_context() -> Generator[None, None, None]:
    """Drop the process context after each test."""
    yield
    reset_context()


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Add 'unit' marker to tests without other markers."""
    for item in items:
        if not any(
            mark.name in ["integration", "property", "e2e"]
            for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
