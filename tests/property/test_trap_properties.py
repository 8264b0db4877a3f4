"""Property-based tests for signal resolution and handler composition."""

import signal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tests.helpers.recorder import Recorder
from tests.helpers.slots import FakeSlots
from trapinfra import TrapConfig, TrapContext
from trapinfra.trap import SignalDirectory

DIRECTORY = SignalDirectory.build()

# Catchable OS signals only; the names themselves do not matter to the model
CATCHABLE = [s.name for s in (signal.SIGHUP, signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)]


def _spellings(member: signal.Signals) -> list:
    short = member.name[3:]
    return [
        member.name,
        member.name.lower(),
        short,
        short.lower(),
        short.title(),
        str(int(member)),
        int(member),
        f" {member.name} ",
    ]


def _fresh_context():
    slots = FakeSlots()
    return TrapContext(config=TrapConfig(), slot_factory=slots), slots


@pytest.mark.property
@pytest.mark.unit
class TestResolutionProperties:
    """Every spelling of a signal resolves to one canonical name."""

    @given(member=st.sampled_from(list(signal.Signals)))
    def test_spellings_agree(self, member: signal.Signals) -> None:
        canonical = DIRECTORY.resolve(member.name)
        for spelling in _spellings(member):
            assert DIRECTORY.resolve(spelling) == canonical

    @given(name=st.sampled_from(DIRECTORY.names()))
    def test_resolve_is_idempotent(self, name: str) -> None:
        assert DIRECTORY.resolve(name) == name
        assert DIRECTORY.resolve(DIRECTORY.resolve(name.lower())) == name


@pytest.mark.property
@pytest.mark.unit
class TestCompositionProperties:
    """Properties of the composed handler over random edit sequences."""

    @given(tags=st.lists(st.sampled_from("ABCDE"), min_size=1, max_size=8))
    @settings(max_examples=50)
    def test_execution_follows_insertion_order(self, tags: list[str]) -> None:
        ctx, slots = _fresh_context()
        recorder = Recorder()
        for tag in tags:
            ctx.add(recorder.command(tag), "USR1")

        slots.fire("SIGUSR1", signal.SIGUSR1, None)

        assert recorder.calls == tags

    @given(
        tags=st.lists(st.sampled_from("ABCDE"), min_size=1, max_size=6),
        name=st.sampled_from(CATCHABLE),
    )
    @settings(max_examples=50)
    def test_pause_restore_reproduces_handler(self, tags: list[str], name: str) -> None:
        ctx, slots = _fresh_context()
        recorder = Recorder()
        for tag in tags:
            ctx.add(recorder.command(tag), name)
        before = slots.handler(name)

        ctx.pause(name)
        ctx.restore(name)

        assert slots.handler(name) == before
        assert slots.handler(name).source == before.source

    @given(
        count=st.integers(min_value=1, max_value=6),
        data=st.data(),
    )
    @settings(max_examples=50)
    def test_removing_every_handle_restores_default(self, count: int, data) -> None:
        ctx, slots = _fresh_context()
        handles = [ctx.add(print, "TERM") for _ in range(count)]

        for handle in data.draw(st.permutations(handles)):
            ctx.remove(handle)

        assert slots.handler("SIGTERM") is None
        assert ctx.signals() == []
