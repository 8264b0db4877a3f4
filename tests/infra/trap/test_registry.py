"""
Tests for trap/registry.py.

Tests command registry functionality including:
- Fresh handles for every store, identical bodies included
- Fetching and unknown handles
- Labels used by debug output
"""

import functools

import pytest

from trapinfra.exceptions import UnknownHandle
from trapinfra.trap.registry import Command, CommandRegistry, describe


def on_term(signum, frame):
    pass


class Handler:
    def __call__(self, signum, frame):
        pass

    def method(self, signum, frame):
        pass


@pytest.mark.unit
class TestStore:
    """Test CommandRegistry.store and last_handle."""

    def test_handles_start_at_zero_and_increase(self):
        registry = CommandRegistry()
        assert registry.store(on_term) == 0
        assert registry.store(on_term) == 1
        assert registry.store(on_term) == 2

    def test_identical_bodies_get_distinct_handles(self):
        registry = CommandRegistry()
        first = registry.store(on_term)
        second = registry.store(on_term)
        assert first != second
        assert registry.fetch(first).body is registry.fetch(second).body

    def test_last_handle(self):
        registry = CommandRegistry()
        assert registry.last_handle() is None
        registry.store(on_term)
        handle = registry.store(on_term)
        assert registry.last_handle() == handle

    def test_isolation_flag(self):
        registry = CommandRegistry()
        raw = registry.store(on_term, isolated=False)
        assert registry.fetch(raw).isolated is False
        assert registry.fetch(registry.store(on_term)).isolated is True

    def test_len_and_contains(self):
        registry = CommandRegistry()
        handle = registry.store(on_term)
        assert len(registry) == 1
        assert handle in registry
        assert handle + 1 not in registry


@pytest.mark.unit
class TestFetch:
    """Test CommandRegistry.fetch."""

    def test_fetch_returns_command(self):
        registry = CommandRegistry()
        handle = registry.store(on_term, label="term")
        command = registry.fetch(handle)
        assert command == Command(handle=handle, body=on_term, isolated=True, label="term")

    @pytest.mark.parametrize("handle", [0, 5, -1, "0", None])
    def test_unknown_handle(self, handle):
        registry = CommandRegistry()
        with pytest.raises(UnknownHandle) as exc_info:
            registry.fetch(handle)
        assert exc_info.value.handle == handle


@pytest.mark.unit
class TestDescribe:
    """Test labels of callables."""

    def test_function(self):
        assert describe(on_term) == f"{__name__}.on_term"

    def test_bound_method(self):
        assert describe(Handler().method) == f"{__name__}.Handler.method"

    def test_partial(self):
        assert describe(functools.partial(on_term, 1)) == f"partial({__name__}.on_term)"

    def test_callable_instance_falls_back_to_repr(self):
        handler = Handler()
        assert describe(handler) == repr(handler)
