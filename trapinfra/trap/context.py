"""
Trap context: the process-scoped model and its public operations.

TrapContext owns the signal directory, the command registry, the binding
table and the paused set, and exposes the registration surface. On first
use it synchronizes with the live slots and re-renders every absorbed
signal, so handlers installed before it existed keep running and compose
with later additions.

Batch operations over several signals keep going when one signal fails:
each failure is logged, the operation is applied to every signal that
validated, and the failures are raised together at the end.
"""

from __future__ import annotations

import signal
from collections.abc import Callable, Iterable
from typing import Any, TextIO

from ..config import TrapConfig
from ..exceptions import (
    EmptyBody,
    HandleNotBound,
    InvalidCommand,
    MissingArgument,
    NotPaused,
    SignalPaused,
    TrapError,
    UsageError,
    raise_for,
)
from ..log import Logger, create_lg, derive_lg, set_level
from ..ui import Console
from .bindings import BindingTable
from .directory import SignalDirectory
from .paused import PausedSet
from .registry import Command, CommandRegistry
from .slots import HandlerSlot, SlotFactory, default_slot_factory
from .sync import StateSynchronizer
from .template import ComposedHandler, Flusher

# Distinguishes an omitted body from an explicit None
MISSING: Any = object()

_CLEAR_BODIES = ("-",)

# Width of the signal name column in debug output
NAME_WIDTH = 12


def _is_clear_body(body: Any) -> bool:
    if body is None or body is signal.SIG_DFL:
        return True
    return isinstance(body, str) and body in _CLEAR_BODIES


def _prefixed(name: str, text: str) -> list[str]:
    prefix = f"{name:<{NAME_WIDTH}}: "
    return [prefix + line for line in text.splitlines() or [""]]


class TrapContext:
    """
    Composable, pausable signal handler registration.

    Example:
        >>> ctx = TrapContext()
        >>> first = ctx.add(flush_logs, "TERM", "INT")
        >>> ctx.add(close_db, "TERM")
        >>> ctx.pause("INT")
        >>> ctx.restore("INT")
        >>> ctx.remove(first)

    Args:
        config: Registration policies; read from the environment if None
        slot_factory: Creates the live slot of a signal (name, code)
        lg: Logger; a ``/trap`` logger is created if None
    """

    def __init__(
        self,
        config: TrapConfig | None = None,
        slot_factory: SlotFactory | None = None,
        lg: Logger | None = None,
    ) -> None:
        self._config = config if config is not None else TrapConfig.from_env()
        self._slot_factory = slot_factory or default_slot_factory
        if lg is None:
            lg = create_lg("/trap", self._config.log_level)
            set_level(lg, self._config.log_level)
        self._lg = lg

        self._directory: SignalDirectory | None = None
        self._slots: dict[str, HandlerSlot] = {}
        self._registry = CommandRegistry()
        self._bindings = BindingTable()
        self._paused = PausedSet()
        self._flusher = Flusher(
            self._registry,
            self._bindings,
            self._paused,
            self.slot_for,
            derive_lg(lg, "flush"),
        )
        self._initialized = False

    # ------------------------------------------------------------------
    # Construction and lookup
    # ------------------------------------------------------------------

    @property
    def config(self) -> TrapConfig:
        return self._config

    @property
    def directory(self) -> SignalDirectory:
        """Signal directory, built on first access."""
        if self._directory is None:
            self._directory = SignalDirectory.build()
            self._lg.trace("built signal directory", extra={"signals": len(self._directory)})
        return self._directory

    def slot_for(self, signal_name: str) -> HandlerSlot:
        """Live slot of a canonical signal name."""
        slot = self._slots.get(signal_name)
        if slot is None:
            slot = self._slot_factory(signal_name, self.directory.code(signal_name))
            self._slots[signal_name] = slot
        return slot

    def resolve(self, spec: Any) -> str:
        """Canonical name of a signal specification."""
        return self.directory.resolve(spec)

    def configure(self, **changes: Any) -> TrapConfig:
        """
        Change registration policies for subsequent calls.

        Example:
            >>> ctx.configure(append=True, edit_paused=False)
        """
        self._config = self._config.with_changes(**changes)
        if "log_level" in changes:
            set_level(self._lg, self._config.log_level)
        return self._config

    def _ensure_initialized(self) -> None:
        """Synchronize with the live slots once, then re-render them."""
        if self._initialized:
            return

        synchronizer = StateSynchronizer(
            self.directory,
            self._registry,
            self._bindings,
            self.slot_for,
            derive_lg(self._lg, "sync"),
        )
        absorbed = synchronizer.run()
        self._initialized = True
        if absorbed:
            self._flusher.render_all()

    def _report(self, operation: str, error: TrapError) -> None:
        self._lg.error(error.message, extra={"operation": operation})

    def _targets(self, specs: Iterable[Any], operation: str, errors: list[TrapError]):
        """Yield canonical names, recording unresolvable specs as errors."""
        seen: set[str] = set()
        for spec in specs:
            try:
                name = self.resolve(spec)
            except TrapError as e:
                self._report(operation, e)
                errors.append(e)
                continue
            if name not in seen:
                seen.add(name)
                yield name

    def _bound_signals(self) -> list[str]:
        return self.directory.order(self._bindings.signals())

    def _render(self, name: str, previous: tuple[int, ...]) -> None:
        """Render an edited signal, putting back its previous bindings if refused."""
        try:
            self._flusher.render(name)
        except TrapError:
            self._bindings.replace(name, previous)
            raise

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _check_append_args(self, operation: str, body: Any, signals: tuple) -> None:
        if body is MISSING:
            raise MissingArgument(operation, "body")
        if not signals:
            raise MissingArgument(operation, "signal")
        if body is None or (isinstance(body, str) and not body):
            raise EmptyBody(operation)
        if not callable(body):
            raise InvalidCommand(body)

    def _append(
        self,
        operation: str,
        body: Callable[..., Any],
        signals: tuple,
        isolated: bool,
        replace: bool,
        edit_paused: bool | None,
    ) -> int | None:
        """Bind body to every signal; one handle per call."""
        if edit_paused is None:
            edit_paused = self._config.edit_paused

        self._ensure_initialized()

        errors: list[TrapError] = []
        handle: int | None = None
        for name in self._targets(signals, operation, errors):
            try:
                if name in self._paused and not edit_paused:
                    raise SignalPaused(name)
                if handle is None:
                    handle = self._registry.store(body, isolated=isolated)
                previous = self._bindings.sequence(name)
                if replace:
                    self._bindings.clear(name)
                self._bindings.append(name, handle)
                self._render(name, previous)
            except TrapError as e:
                self._report(operation, e)
                errors.append(e)

        raise_for(errors, handle=handle)
        return handle

    def register(
        self,
        body: Any = MISSING,
        *signals: Any,
        append: bool | None = None,
        edit_paused: bool | None = None,
    ) -> int | None:
        """
        Register body for signals, replacing their commands by default.

        A body of None, ``"-"`` or ``signal.SIG_DFL`` clears the signals;
        clearing is permitted even while a signal is paused.

        Args:
            body: Callable to run when a signal fires
            *signals: Signal specifications
            append: Append instead of replacing (default: config.append)
            edit_paused: Allow editing paused signals (default: config.edit_paused)

        Returns:
            Handle of the registered command, None when clearing

        Raises:
            SignalPaused: If a signal is paused and editing it is not allowed
            InvalidSignal: If a signal specification is unknown
            BatchError: If several signals failed
        """
        if body is MISSING:
            raise MissingArgument("register", "body")
        if _is_clear_body(body):
            if not signals:
                raise MissingArgument("register", "signal")
            self.clear(*signals)
            return None

        self._check_append_args("register", body, signals)
        if append is None:
            append = self._config.append
        return self._append(
            "register", body, signals, isolated=True, replace=not append,
            edit_paused=edit_paused,
        )

    def add(
        self, body: Any = MISSING, *signals: Any, edit_paused: bool | None = None
    ) -> int | None:
        """
        Append body to the commands of signals.

        A failure of body when the signal fires does not prevent later
        commands from running.

        Returns:
            Handle of the new command, usable with remove()
        """
        self._check_append_args("add", body, signals)
        return self._append(
            "add", body, signals, isolated=True, replace=False, edit_paused=edit_paused
        )

    def add_raw(
        self, body: Any = MISSING, *signals: Any, edit_paused: bool | None = None
    ) -> int | None:
        """
        Append body without fault isolation.

        If body raises when the signal fires, commands added after it do not
        run and the exception propagates immediately.
        """
        self._check_append_args("add_raw", body, signals)
        return self._append(
            "add_raw", body, signals, isolated=False, replace=False,
            edit_paused=edit_paused,
        )

    def last_handle(self) -> int | None:
        """Handle of the most recently added command, None if none yet."""
        return self._registry.last_handle()

    def remove(self, handle: int, *signals: Any) -> None:
        """
        Remove a command from signals (default: every signal holding it).

        A signal left without commands returns to default disposition.

        Raises:
            UnknownHandle: If handle was never issued (nothing is changed)
            HandleNotBound: If an explicitly named signal does not hold it
        """
        self._ensure_initialized()
        self._registry.fetch(handle)

        targets = signals if signals else tuple(self._bindings.holding(handle))
        errors: list[TrapError] = []
        for name in self._targets(targets, "remove", errors):
            try:
                previous = self._bindings.sequence(name)
                if not self._bindings.discard(name, handle):
                    raise HandleNotBound(handle, name)
                self._render(name, previous)
            except TrapError as e:
                self._report("remove", e)
                errors.append(e)

        raise_for(errors, handle=handle)

    def clear(self, *signals: Any) -> None:
        """
        Remove every command of signals (default: every bound signal).

        Clearing a paused signal also drops its paused marker.
        """
        self._ensure_initialized()

        targets = signals if signals else tuple(self._bound_signals())
        errors: list[TrapError] = []
        for name in self._targets(targets, "clear", errors):
            try:
                previous = self._bindings.sequence(name)
                self._bindings.clear(name)
                self._render(name, previous)
            except TrapError as e:
                self._report("clear", e)
                errors.append(e)

        raise_for(errors)

    # ------------------------------------------------------------------
    # Pause / restore
    # ------------------------------------------------------------------

    def pause(self, *signals: Any) -> None:
        """
        Reset signals to default disposition, keeping their commands.

        With no arguments every bound signal is paused. A paused signal
        refuses edits unless edit_paused is enabled; editing it un-pauses it.
        """
        self._ensure_initialized()

        targets = signals if signals else tuple(self._bound_signals())
        errors: list[TrapError] = []
        for name in self._targets(targets, "pause", errors):
            try:
                self._flusher.suspend(name)
                self._paused.mark(name)
            except TrapError as e:
                self._report("pause", e)
                errors.append(e)

        raise_for(errors)

    def restore(self, *signals: Any) -> None:
        """
        Reinstall the commands of paused signals (default: every paused signal).

        Raises:
            NotPaused: If a signal was not paused
        """
        self._ensure_initialized()

        targets = signals if signals else tuple(self._paused)
        errors: list[TrapError] = []
        for name in self._targets(targets, "restore", errors):
            try:
                if name not in self._paused:
                    raise NotPaused(name)
                self._flusher.render(name)
            except TrapError as e:
                self._report("restore", e)
                errors.append(e)

        raise_for(errors)

    def is_paused(self, spec: Any) -> bool:
        return self.resolve(spec) in self._paused

    def paused(self) -> list[str]:
        """Names of the paused signals, in pause order."""
        return list(self._paused)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def commands(self, spec: Any) -> list[Command]:
        """Commands bound to a signal, in execution order."""
        self._ensure_initialized()
        name = self.resolve(spec)
        return [self._registry.fetch(h) for h in self._bindings.sequence(name)]

    def signals(self) -> list[str]:
        """Names of every signal with bound commands, in directory order."""
        self._ensure_initialized()
        return self._bound_signals()

    def compose(self, spec: Any) -> ComposedHandler | None:
        """Handler the signal's bindings render to, None if unbound."""
        self._ensure_initialized()
        return self._flusher.compose(self.resolve(spec))

    def debug(self, *signals: Any, file: TextIO | None = None) -> None:
        """
        Print each bound command, one line per command, without scaffolding.

        Example output:
            SIGINT      : myapp.cleanup
            SIGINT      : myapp.report
        """
        self._ensure_initialized()

        targets = signals if signals else tuple(self._bound_signals())
        errors: list[TrapError] = []
        console = Console(file)
        for name in self._targets(targets, "debug", errors):
            for handle in self._bindings.sequence(name):
                console.print_lines(_prefixed(name, self._registry.fetch(handle).label))

        raise_for(errors)

    def debug_raw(self, *signals: Any, file: TextIO | None = None) -> None:
        """Print the live handler text of signals, scaffolding included."""
        self._ensure_initialized()

        targets = signals if signals else tuple(self._bound_signals())
        errors: list[TrapError] = []
        console = Console(file)
        for name in self._targets(targets, "debug_raw", errors):
            try:
                text = self.slot_for(name).raw_text()
            except TrapError as e:
                self._report("debug_raw", e)
                errors.append(e)
                continue
            if text is not None:
                console.print_lines(_prefixed(name, text))

        raise_for(errors)

    # ------------------------------------------------------------------
    # Argument-list surface
    # ------------------------------------------------------------------

    def display(self, *signals: Any, file: TextIO | None = None) -> None:
        """
        Print the raw handler of signals as ``trap -- '<text>' NAME``.

        Reads the live slots directly, bypassing the model. With no
        arguments every signal not at default disposition is printed.
        """
        explicit = bool(signals)
        targets = signals if explicit else tuple(self.directory.names())
        errors: list[TrapError] = []
        console = Console(file)
        for name in self._targets(targets, "display", errors):
            try:
                text = self.slot_for(name).raw_text()
            except TrapError as e:
                if explicit:
                    self._report("display", e)
                    errors.append(e)
                continue
            if text is not None:
                console.print(f"trap -- '{text}' {name}")

        raise_for(errors)

    def list_signals(self, file: TextIO | None = None) -> None:
        """Print the signal directory as a ``trap -l`` style table."""
        Console(file).print(self.directory.listing())

    def trap(
        self,
        *args: Any,
        append: bool | None = None,
        edit_paused: bool | None = None,
        file: TextIO | None = None,
    ) -> int | None:
        """
        Argument-list form of the registration surface.

        - ``trap()`` or ``trap("-p", *signals)``: print raw handlers
        - ``trap("-l")``: print the signal listing
        - ``trap(body, *signals)``: register body (see register)
        - ``trap(signal)`` or ``trap("-", *signals)``: clear signals
        - a leading ``"--"`` ends option parsing

        Raises:
            UsageError: On an unknown option
        """
        if not args or args[0] == "-p":
            self.display(*args[1:], file=file)
            return None
        if args[0] == "-l":
            self.list_signals(file=file)
            return None

        if args[0] == "--":
            args = args[1:]
            if not args:
                self.display(file=file)
                return None
        elif isinstance(args[0], str) and args[0].startswith("-") and args[0] != "-":
            raise UsageError(f"{args[0]}: invalid option", usage="trap [-lp] [[arg] sigspec ...]")

        if len(args) > 1:
            body, signals = args[0], args[1:]
        else:
            body, signals = "-", args

        if _is_clear_body(body):
            self.clear(*signals)
            return None
        return self.register(body, *signals, append=append, edit_paused=edit_paused)
