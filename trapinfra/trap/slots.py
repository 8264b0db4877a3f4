"""
Handler slots: the single runtime-managed handler of each signal.

The runtime offers exactly one handler per signal and the last write wins.
Each slot wraps one such place:

- SignalSlot: an OS signal, through ``signal.signal`` / ``signal.getsignal``
- ExitSlot: the EXIT pseudo-signal, one ``atexit`` callback per process
- ErrorSlot: the ERR pseudo-signal, ``sys.excepthook``; the default
  traceback report still runs ahead of the bound commands

``read()`` returns None while a slot is at its default disposition, so
"nothing registered" looks the same for every kind of slot. For SIGINT the
default disposition is Python's own ``signal.default_int_handler``.
"""

from __future__ import annotations

import atexit
import signal
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from ..exceptions import SlotError
from .directory import ERR, EXIT
from .registry import describe


class HandlerSlot(ABC):
    """Abstract live handler slot for one signal."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def read(self) -> Any:
        """Current handler, or None at default disposition."""

    @abstractmethod
    def install(self, handler: Callable[..., Any]) -> None:
        """Replace the current handler."""

    @abstractmethod
    def reset(self) -> None:
        """Restore default disposition."""

    def raw_text(self) -> str | None:
        """Text of the current handler as the runtime holds it."""
        return raw_text(self.read())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


def raw_text(handler: Any) -> str | None:
    """
    Render a slot's handler as text.

    Composed handlers expose their generated source; anything else is
    described by name.
    """
    if handler is None:
        return None
    source = getattr(handler, "source", None)
    if isinstance(source, str):
        return source
    if isinstance(handler, signal.Handlers):
        return handler.name
    return describe(handler)


class SignalSlot(HandlerSlot):
    """Slot of an OS signal."""

    def __init__(self, name: str, code: int) -> None:
        super().__init__(name)
        self.code = code
        self.default: Any = (
            signal.default_int_handler if code == signal.SIGINT else signal.SIG_DFL
        )

    def read(self) -> Any:
        try:
            current = signal.getsignal(self.code)
        except (OSError, ValueError) as e:
            raise SlotError(self.name, str(e)) from e
        if current is None or current == signal.SIG_DFL or current is self.default:
            return None
        return current

    def install(self, handler: Any) -> None:
        try:
            signal.signal(self.code, handler)
        except (OSError, ValueError, RuntimeError) as e:
            raise SlotError(self.name, str(e)) from e

    def reset(self) -> None:
        self.install(self.default)


class ExitSlot(HandlerSlot):
    """
    Slot of the EXIT pseudo-signal.

    A single dispatcher is registered with ``atexit`` the first time a
    handler is installed; it calls whatever handler the slot holds when the
    interpreter exits.
    """

    def __init__(self) -> None:
        super().__init__(EXIT)
        self._handler: Callable[..., Any] | None = None
        self._registered = False

    def read(self) -> Callable[..., Any] | None:
        return self._handler

    def install(self, handler: Callable[..., Any]) -> None:
        if not self._registered:
            atexit.register(self.dispatch)
            self._registered = True
        self._handler = handler

    def reset(self) -> None:
        self._handler = None

    def dispatch(self) -> None:
        """Run the installed handler, if any."""
        handler = self._handler
        if handler is not None:
            handler()


class ReportingHook:
    """
    ``sys.excepthook`` printing the usual traceback before running handler.

    The handler runs in addition to the interpreter's own error report, the
    way an ERR trap runs after the failing command has printed its error.
    """

    def __init__(self, handler: Callable[..., Any]) -> None:
        self.handler = handler

    def __call__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        sys.__excepthook__(exc_type, exc, tb)
        self.handler(exc_type, exc, tb)

    def __repr__(self) -> str:
        return f"ReportingHook({self.handler!r})"


class ErrorSlot(HandlerSlot):
    """Slot of the ERR pseudo-signal, backed by ``sys.excepthook``."""

    def __init__(self) -> None:
        super().__init__(ERR)

    def read(self) -> Callable[..., Any] | None:
        hook = sys.excepthook
        if hook is sys.__excepthook__:
            return None
        if isinstance(hook, ReportingHook):
            return hook.handler
        return hook

    def install(self, handler: Callable[..., Any]) -> None:
        sys.excepthook = ReportingHook(handler)

    def reset(self) -> None:
        sys.excepthook = sys.__excepthook__


# One EXIT slot per process, shared by every context
_exit_slot = ExitSlot()

SlotFactory = Callable[[str, "int | None"], HandlerSlot]


def default_slot_factory(name: str, code: int | None) -> HandlerSlot:
    """Create the runtime slot for a canonical signal name."""
    if name == EXIT:
        return _exit_slot
    if name == ERR:
        return ErrorSlot()
    if code is None:
        raise SlotError(name, "signal has no numeric code")
    return SignalSlot(name, code)
