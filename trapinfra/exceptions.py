"""
Unified exception hierarchy for trapinfra.

Every error raised by the library derives from TrapError, which carries a
human-readable message, optional context fields and the exit code the
shell builtin would have returned for the same failure:

- 1 for validation failures (unknown signal, paused signal, not paused, ...)
- 2 for malformed low-level arguments handed to the runtime
"""

from typing import Any


class TrapError(Exception):
    """
    Base exception for all trapinfra errors.

    Example:
        try:
            trapinfra.add(on_term, "TERM")
        except TrapError as e:
            lg.error("trap failed", extra={"exception": e})
            sys.exit(e.exit_code)
    """

    exit_code: int = 1

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(TrapError):
    """Raised when a configuration value is missing or malformed."""

    pass


class DirectoryError(TrapError):
    """Raised when the runtime signal enumeration cannot be queried."""

    pass


class InvalidSignal(TrapError):
    """Raised when a signal specification does not resolve to a known signal."""

    def __init__(self, spec: Any) -> None:
        self.spec = spec
        super().__init__(f"{spec}: invalid signal specification")


class SignalPaused(TrapError):
    """Raised when editing a paused signal without opting in."""

    def __init__(self, signal_name: str) -> None:
        self.signal_name = signal_name
        super().__init__(f"{signal_name}: signal is paused")


class NotPaused(TrapError):
    """Raised when restoring a signal that was not paused."""

    def __init__(self, signal_name: str) -> None:
        self.signal_name = signal_name
        super().__init__(f"{signal_name}: signal was not paused")


class UnknownHandle(TrapError):
    """Raised when a command handle was never issued."""

    def __init__(self, handle: Any) -> None:
        self.handle = handle
        super().__init__(f"{handle}: unknown command handle")


class HandleNotBound(TrapError):
    """Raised when removing a handle from a signal that does not hold it."""

    def __init__(self, handle: int, signal_name: str) -> None:
        self.handle = handle
        self.signal_name = signal_name
        super().__init__(f"{signal_name}: command {handle} is not bound")


class MissingArgument(TrapError):
    """Raised when a required argument was not supplied."""

    def __init__(self, operation: str, argument: str) -> None:
        self.operation = operation
        self.argument = argument
        super().__init__(
            f"{operation}: missing {argument} argument\n"
            f"Usage:\n    {operation}(body, sigspec, [sigspec, ...])"
        )


class EmptyBody(TrapError):
    """Raised when adding an empty command body."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"{operation}: body is empty\n"
            "Use clear() or register(None, ...) to clear a signal"
        )


class UsageError(TrapError):
    """Raised when the runtime call would reject its arguments."""

    exit_code = 2


class InvalidCommand(UsageError):
    """Raised when a command body is not callable."""

    def __init__(self, body: Any) -> None:
        self.body = body
        super().__init__(f"command must be callable, got {type(body).__name__}")


class SlotError(UsageError):
    """Raised when the runtime refuses to change a handler slot."""

    def __init__(self, signal_name: str, reason: str) -> None:
        self.signal_name = signal_name
        self.reason = reason
        super().__init__(f"{signal_name}: {reason}")


class BatchError(TrapError):
    """
    Aggregate of per-signal failures from one batch call.

    Operations over several signals keep going after a failure and apply
    themselves to every signal that validated. When more than one signal
    failed, the failures are reported together through this exception.
    """

    def __init__(self, errors: list[TrapError], **context: Any) -> None:
        self.errors = list(errors)
        lines = "; ".join(e.message for e in self.errors)
        super().__init__(f"{len(self.errors)} signals failed: {lines}", **context)
        self.exit_code = max(e.exit_code for e in self.errors)

    def __iter__(self):
        return iter(self.errors)


def raise_for(errors: list[TrapError], **context: Any) -> None:
    """
    Raise the errors collected by a batch call, if any.

    A single failure is raised as itself so callers can catch the precise
    type; several failures are wrapped into a BatchError.
    """
    if not errors:
        return
    if len(errors) == 1:
        error = errors[0]
        error.context.update(context)
        raise error
    raise BatchError(errors, **context)
