"""
State synchronizer.

Handlers installed before the context existed, or installed directly with
``signal.signal`` behind its back, must not be silently clobbered by the
first edit. The synchronizer absorbs each such handler into the model as
one opaque command bound to its signal.

A handler that is itself a composed handler is absorbed whole as well: its
original fragments are never re-split.
"""

from __future__ import annotations

from collections.abc import Callable

from ..exceptions import SlotError
from ..log import Logger
from .bindings import BindingTable
from .directory import SignalDirectory
from .registry import CommandRegistry
from .slots import HandlerSlot


class StateSynchronizer:
    """Reconstructs registry and bindings from the live slots."""

    def __init__(
        self,
        directory: SignalDirectory,
        registry: CommandRegistry,
        bindings: BindingTable,
        slot_for: Callable[[str], HandlerSlot],
        lg: Logger,
    ) -> None:
        self._directory = directory
        self._registry = registry
        self._bindings = bindings
        self._slot_for = slot_for
        self._lg = lg

    def run(self) -> list[str]:
        """
        Absorb every non-default callable handler.

        ``SIG_IGN`` is a disposition rather than code to run, so it is left
        out and the first edit of that signal replaces it.

        Returns:
            Names of the signals whose handler was absorbed
        """
        absorbed: list[str] = []
        for name in self._directory.names():
            try:
                current = self._slot_for(name).read()
            except SlotError as e:
                self._lg.trace("cannot read slot", extra={"signal": name, "exception": e})
                continue
            if current is None or not callable(current):
                continue

            handle = self._registry.store(current, isolated=True)
            self._bindings.clear(name)
            self._bindings.append(name, handle)
            absorbed.append(name)
            self._lg.trace("absorbed handler", extra={"signal": name, "handle": handle})

        self._lg.debug("synchronized", extra={"absorbed": absorbed})
        return absorbed
