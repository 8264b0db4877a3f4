"""
Signal binding table: which commands fire, in which order, per signal.

A signal with no commands has no entry at all; an entry is never an empty
sequence. The table only edits the in-memory model, re-rendering the live
handler slot is left to the caller.
"""

from __future__ import annotations

from collections.abc import Iterator


class BindingTable:
    """
    Maps signal names to ordered lists of command handles.

    Example:
        >>> table = BindingTable()
        >>> table.append("SIGINT", 0)
        >>> table.append("SIGINT", 3)
        >>> table.sequence("SIGINT")
        (0, 3)
    """

    def __init__(self) -> None:
        self._bindings: dict[str, list[int]] = {}

    def append(self, signal_name: str, handle: int) -> None:
        """Add handle at the tail of the signal's sequence."""
        self._bindings.setdefault(signal_name, []).append(handle)

    def clear(self, signal_name: str) -> None:
        """Remove every handle bound to the signal. No-op if unbound."""
        self._bindings.pop(signal_name, None)

    def replace(self, signal_name: str, handles: tuple[int, ...]) -> None:
        """Set the signal's whole sequence; an empty one unbinds it."""
        if handles:
            self._bindings[signal_name] = list(handles)
        else:
            self._bindings.pop(signal_name, None)

    def discard(self, signal_name: str, handle: int) -> bool:
        """
        Remove the first occurrence of handle from the signal's sequence.

        Returns:
            True if the handle was bound to the signal
        """
        handles = self._bindings.get(signal_name)
        if not handles or handle not in handles:
            return False
        handles.remove(handle)
        if not handles:
            del self._bindings[signal_name]
        return True

    def sequence(self, signal_name: str) -> tuple[int, ...]:
        """Handles bound to the signal, in execution order."""
        return tuple(self._bindings.get(signal_name, ()))

    def signals(self) -> list[str]:
        """Names of every signal with at least one bound command."""
        return list(self._bindings)

    def holding(self, handle: int) -> list[str]:
        """Names of the signals handle is bound to."""
        return [name for name, handles in self._bindings.items() if handle in handles]

    def __contains__(self, signal_name: object) -> bool:
        return signal_name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)
