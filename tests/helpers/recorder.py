"""Callables recording their invocations, for handler ordering tests."""

from typing import Any


class Recorder:
    """Shared call log; ``command(tag)`` creates a callable appending tag."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def command(self, tag: str, fail: BaseException | None = None):
        def run(*args: Any) -> None:
            self.calls.append(tag)
            if fail is not None:
                raise fail

        run.__qualname__ = f"cmd_{tag}"
        run.__module__ = "tests"
        return run
