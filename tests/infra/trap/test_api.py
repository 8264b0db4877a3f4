"""Tests for the module-level functions bound to the process context."""

from io import StringIO

import pytest

import trapinfra
from trapinfra import TrapConfig, TrapContext
from trapinfra.exceptions import InvalidSignal


@pytest.fixture
def process_ctx(ctx):
    trapinfra.set_context(ctx)
    return ctx


@pytest.mark.unit
class TestProcessContext:
    """Test get_context(), set_context() and reset_context()."""

    def test_created_once(self, monkeypatch):
        monkeypatch.delenv("TRAP_APPEND", raising=False)
        first = trapinfra.get_context()
        assert trapinfra.get_context() is first
        assert isinstance(first, TrapContext)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TRAP_APPEND", "TRUE")
        assert trapinfra.get_context().config.append is True

    def test_reset(self, process_ctx):
        assert trapinfra.get_context() is process_ctx
        trapinfra.reset_context()
        assert trapinfra.get_context() is not process_ctx


@pytest.mark.unit
class TestModuleFunctions:
    """Test that module functions delegate to the process context."""

    def test_add_and_remove(self, process_ctx, slots):
        handle = trapinfra.add(print, "TERM", "INT")
        assert trapinfra.last_handle() == handle
        assert process_ctx.signals() == ["SIGINT", "SIGTERM"]

        trapinfra.remove(handle, "INT")

        assert process_ctx.signals() == ["SIGTERM"]
        assert slots.handler("SIGINT") is None

    def test_register_and_clear(self, process_ctx):
        trapinfra.register(print, "HUP")
        trapinfra.add_raw(len, "HUP")
        assert len(process_ctx.commands("HUP")) == 2

        trapinfra.clear("HUP")

        assert process_ctx.signals() == []

    def test_pause_and_restore(self, process_ctx, slots):
        trapinfra.add(print, "USR1")
        trapinfra.pause("USR1")
        assert slots.handler("SIGUSR1") is None
        trapinfra.restore("USR1")
        assert slots.handler("SIGUSR1") is not None

    def test_debug(self, process_ctx):
        trapinfra.add(print, "INT")
        out = StringIO()
        trapinfra.debug("INT", file=out)
        assert out.getvalue() == "SIGINT      : builtins.print\n"

        raw = StringIO()
        trapinfra.debug_raw("INT", file=raw)
        assert "builtins.print" in raw.getvalue()

    def test_trap(self, process_ctx):
        trapinfra.trap(print, "INT")
        trapinfra.trap("INT")
        assert process_ctx.signals() == []

    def test_resolve(self, process_ctx):
        assert trapinfra.resolve("int") == "SIGINT"
        with pytest.raises(InvalidSignal):
            trapinfra.resolve("bogus")

    def test_configure(self, process_ctx):
        config = trapinfra.configure(append=True)
        assert config == TrapConfig(append=True)
        assert process_ctx.config.append is True
