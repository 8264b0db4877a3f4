"""
Command registry: append-only store of handler commands keyed by handle.

Every store issues a fresh handle, even for a body already stored, so the
same callable added twice can still be removed independently. Handles are
never reused and the registry never compacts; a command unbound from every
signal simply becomes unreachable.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import UnknownHandle


def describe(body: Callable[..., Any]) -> str:
    """One-line description of a callable, used by debug output."""
    if isinstance(body, functools.partial):
        return f"partial({describe(body.func)})"
    name = getattr(body, "__qualname__", None) or getattr(body, "__name__", None)
    if name is None:
        return repr(body)
    module = getattr(body, "__module__", None)
    return f"{module}.{name}" if module else name


@dataclass(frozen=True)
class Command:
    """
    One handler fragment.

    Attributes:
        handle: Unique identifier issued by the registry
        body: Callable run when the signal fires
        isolated: Whether a failure of body is contained (see ComposedHandler)
        label: Description shown by debug output
    """

    handle: int
    body: Callable[..., Any] = field(compare=False)
    isolated: bool = True
    label: str = ""


class CommandRegistry:
    """
    Append-only store of commands.

    Example:
        >>> registry = CommandRegistry()
        >>> handle = registry.store(on_term)
        >>> registry.fetch(handle).body is on_term
        True
    """

    def __init__(self) -> None:
        self._commands: dict[int, Command] = {}
        self._counter = -1

    def store(
        self,
        body: Callable[..., Any],
        isolated: bool = True,
        label: str | None = None,
    ) -> int:
        """Store body under a new handle and return the handle."""
        self._counter += 1
        self._commands[self._counter] = Command(
            handle=self._counter,
            body=body,
            isolated=isolated,
            label=label if label is not None else describe(body),
        )
        return self._counter

    def fetch(self, handle: int) -> Command:
        """
        Get the command stored under handle.

        Raises:
            UnknownHandle: If the handle was never issued
        """
        try:
            return self._commands[handle]
        except (KeyError, TypeError):
            raise UnknownHandle(handle) from None

    def last_handle(self) -> int | None:
        """Most recently issued handle, None before the first store."""
        return self._counter if self._counter >= 0 else None

    def __contains__(self, handle: object) -> bool:
        return handle in self._commands

    def __len__(self) -> int:
        return len(self._commands)
