"""
End-to-end tests delivering real signals to the test process.

``signal.raise_signal`` runs the Python-level handler before it returns, so
delivery is observed synchronously.
"""

import signal
import sys
import threading
from io import StringIO

import pytest

from tests.helpers.recorder import Recorder
from trapinfra import TrapConfig, TrapContext
from trapinfra.exceptions import SlotError

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.usefixtures("real_signals"),
    pytest.mark.skipif(not hasattr(signal, "SIGUSR1"), reason="requires SIGUSR1"),
]


@pytest.fixture
def live_ctx():
    """Context over the real process slots."""
    signal.signal(signal.SIGUSR1, signal.SIG_DFL)
    signal.signal(signal.SIGUSR2, signal.SIG_DFL)
    return TrapContext(config=TrapConfig())


def test_commands_run_in_order_on_delivery(live_ctx):
    recorder = Recorder()
    live_ctx.add(recorder.command("A"), "USR1")
    live_ctx.add(recorder.command("B"), "USR1")

    signal.raise_signal(signal.SIGUSR1)

    assert recorder.calls == ["A", "B"]


def test_failure_isolated_and_reraised(live_ctx):
    recorder = Recorder()
    live_ctx.add(recorder.command("A", fail=RuntimeError("boom")), "USR1")
    live_ctx.add(recorder.command("B"), "USR1")

    with pytest.raises(RuntimeError, match="boom"):
        signal.raise_signal(signal.SIGUSR1)

    assert recorder.calls == ["A", "B"]


def test_pre_existing_handler_kept(live_ctx):
    recorder = Recorder()
    signal.signal(signal.SIGUSR2, recorder.command("old"))

    live_ctx.add(recorder.command("new"), "USR2")
    signal.raise_signal(signal.SIGUSR2)

    assert recorder.calls == ["old", "new"]


def test_pause_and_restore(live_ctx):
    recorder = Recorder()
    live_ctx.add(recorder.command("A"), "USR1")

    live_ctx.pause("USR1")
    assert signal.getsignal(signal.SIGUSR1) == signal.SIG_DFL

    # Ignore while paused so delivery is harmless, then give it back
    signal.signal(signal.SIGUSR1, signal.SIG_IGN)
    signal.raise_signal(signal.SIGUSR1)
    signal.signal(signal.SIGUSR1, signal.SIG_DFL)
    assert recorder.calls == []

    live_ctx.restore("USR1")
    signal.raise_signal(signal.SIGUSR1)
    assert recorder.calls == ["A"]


def test_removal_restores_default(live_ctx):
    handle = live_ctx.add(print, "USR1")
    live_ctx.remove(handle)
    assert signal.getsignal(signal.SIGUSR1) == signal.SIG_DFL


def test_err_pseudo_signal(live_ctx, capsys):
    recorder = Recorder()
    live_ctx.add(recorder.command("err"), "ERR")

    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        sys.excepthook(type(e), e, e.__traceback__)

    assert recorder.calls == ["err"]
    assert "RuntimeError: boom" in capsys.readouterr().err


def test_display_reads_live_slot(live_ctx):
    signal.signal(signal.SIGUSR2, signal.SIG_IGN)
    out = StringIO()
    live_ctx.trap("-p", "USR2", file=out)
    assert out.getvalue() == "trap -- 'SIG_IGN' SIGUSR2\n"


def test_add_outside_main_thread_leaves_model_unchanged(live_ctx):
    live_ctx.signals()
    errors = []

    def worker():
        try:
            live_ctx.add(print, "USR1")
        except SlotError as e:
            errors.append(e)

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()

    assert len(errors) == 1
    assert "SIGUSR1" not in live_ctx.signals()
    assert signal.getsignal(signal.SIGUSR1) == signal.SIG_DFL
