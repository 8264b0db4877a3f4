"""
Paused-signal set.

A paused signal keeps its bindings while its live handler slot sits at
default disposition. The marker is dropped whenever the signal's slot is
rendered again.
"""

from collections.abc import Iterator


class PausedSet:
    """Insertion-ordered set of paused signal names."""

    def __init__(self) -> None:
        self._paused: dict[str, None] = {}

    def mark(self, signal_name: str) -> None:
        self._paused[signal_name] = None

    def discard(self, signal_name: str) -> None:
        self._paused.pop(signal_name, None)

    def __contains__(self, signal_name: object) -> bool:
        return signal_name in self._paused

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paused))

    def __len__(self) -> int:
        return len(self._paused)
