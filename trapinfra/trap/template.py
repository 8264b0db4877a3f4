"""
Template compiler and flusher.

The binding model is re-materialized into each signal's single live slot as
a ComposedHandler. Whatever the number of bound commands, the composed
handler has the same shape:

    status = None
    # your code is within this block
    <each command, isolated or raw>
    # your code is within this block
    if status is not None:
        raise status

An isolated command runs in its own ``try``: its failure is recorded as the
status and later commands still run. A raw command is called directly, so
its failure propagates at once. The status finally re-raised is the failure
of the last isolated command that failed.

Installing a rendered handler is the only write to a live slot; every other
operation edits the in-memory model only.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import TrapError, raise_for
from ..log import Logger
from .bindings import BindingTable
from .paused import PausedSet
from .registry import Command, CommandRegistry
from .slots import HandlerSlot

TEMPLATE_WRAPPER = "# your code is within this block"

TEMPLATE = """\
status = None
{wrapper}
{body}
{wrapper}
if status is not None:
    raise status"""


def _render_command(command: Command) -> list[str]:
    call = f"commands[{command.handle}](*args)  # {command.label}"
    if not command.isolated:
        return [call]
    return ["try:", f"    {call}", "except BaseException as exc:", "    status = exc"]


@dataclass(frozen=True)
class ComposedHandler:
    """
    Single handler running a signal's commands in order.

    Instances compare by signal and command handles, so rendering the same
    bindings twice yields equal handlers with identical source.
    """

    signal_name: str
    commands: tuple[Command, ...]
    lg: Logger | None = field(default=None, compare=False, repr=False)

    def __call__(self, *args: Any) -> None:
        status: BaseException | None = None
        for command in self.commands:
            if not command.isolated:
                command.body(*args)
                continue
            try:
                command.body(*args)
            except BaseException as exc:
                status = exc
                if self.lg is not None:
                    self.lg.warning(
                        "command failed",
                        extra={
                            "signal": self.signal_name,
                            "handle": command.handle,
                            "exception": exc,
                        },
                    )
        if status is not None:
            raise status

    @property
    def source(self) -> str:
        """Generated source text of the handler, scaffolding included."""
        body: list[str] = []
        for command in self.commands:
            body.extend(_render_command(command))
        return TEMPLATE.format(wrapper=TEMPLATE_WRAPPER, body="\n".join(body))

    @property
    def handles(self) -> tuple[int, ...]:
        return tuple(command.handle for command in self.commands)


class Flusher:
    """
    Renders bindings into live slots.

    Args:
        registry: Command store
        bindings: Binding model
        paused: Paused-signal set
        slot_for: Returns the live slot of a canonical signal name
        lg: Logger for flush events
    """

    def __init__(
        self,
        registry: CommandRegistry,
        bindings: BindingTable,
        paused: PausedSet,
        slot_for: Callable[[str], HandlerSlot],
        lg: Logger,
    ) -> None:
        self._registry = registry
        self._bindings = bindings
        self._paused = paused
        self._slot_for = slot_for
        self._lg = lg

    def compose(self, signal_name: str) -> ComposedHandler | None:
        """Build the handler for a signal's bindings, None if unbound."""
        handles = self._bindings.sequence(signal_name)
        if not handles:
            return None
        commands = tuple(self._registry.fetch(handle) for handle in handles)
        return ComposedHandler(signal_name, commands, lg=self._lg)

    def render(self, signal_name: str) -> None:
        """
        Install the signal's composed handler, or reset it if unbound.

        Rendering a signal un-pauses it once the slot has been written; a
        refused write leaves the paused marker as it was.

        Raises:
            SlotError: If the runtime refuses the handler
        """
        slot = self._slot_for(signal_name)

        handler = self.compose(signal_name)
        if handler is None:
            slot.reset()
            self._paused.discard(signal_name)
            self._lg.debug("reset signal", extra={"signal": signal_name})
            return

        slot.install(handler)
        self._paused.discard(signal_name)
        self._lg.debug(
            "flushed signal",
            extra={"signal": signal_name, "handles": list(handler.handles)},
        )

    def render_all(self) -> None:
        """
        Render every bound signal, continuing past failures.

        Raises:
            SlotError: If one signal's slot refused its handler
            BatchError: If several did
        """
        errors: list[TrapError] = []
        for name in self._bindings.signals():
            try:
                self.render(name)
            except TrapError as e:
                self._lg.error(e.message, extra={"signal": name})
                errors.append(e)
        raise_for(errors)

    def suspend(self, signal_name: str) -> None:
        """Reset the live slot to default disposition, keeping the bindings."""
        self._slot_for(signal_name).reset()
        self._lg.debug("suspended signal", extra={"signal": signal_name})
