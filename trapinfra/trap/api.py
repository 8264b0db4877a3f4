"""
Module-level registration surface bound to the process context.

The context is created on first use, reading its policies from the
environment, and lives as long as the process. Every function here simply
delegates to it; pass a TrapContext around explicitly when more control is
needed.

Example:
    import trapinfra

    trapinfra.add(flush_logs, "TERM", "INT")
    handle = trapinfra.last_handle()
    trapinfra.remove(handle, "INT")
"""

from __future__ import annotations

from typing import Any, TextIO

from ..config import TrapConfig
from .context import MISSING, TrapContext

_context: TrapContext | None = None


def get_context() -> TrapContext:
    """Return the process context, creating it on first use."""
    global _context
    if _context is None:
        _context = TrapContext()
    return _context


def set_context(context: TrapContext | None) -> None:
    """Replace the process context (None drops it; the next call creates one)."""
    global _context
    _context = context


def reset_context() -> None:
    """Drop the process context. Live handlers are left installed."""
    set_context(None)


def configure(**changes: Any) -> TrapConfig:
    return get_context().configure(**changes)


def resolve(spec: Any) -> str:
    return get_context().resolve(spec)


def trap(
    *args: Any,
    append: bool | None = None,
    edit_paused: bool | None = None,
    file: TextIO | None = None,
) -> int | None:
    return get_context().trap(*args, append=append, edit_paused=edit_paused, file=file)


def register(
    body: Any = MISSING,
    *signals: Any,
    append: bool | None = None,
    edit_paused: bool | None = None,
) -> int | None:
    return get_context().register(
        body, *signals, append=append, edit_paused=edit_paused
    )


def add(body: Any = MISSING, *signals: Any, edit_paused: bool | None = None) -> int | None:
    return get_context().add(body, *signals, edit_paused=edit_paused)


def add_raw(
    body: Any = MISSING, *signals: Any, edit_paused: bool | None = None
) -> int | None:
    return get_context().add_raw(body, *signals, edit_paused=edit_paused)


def last_handle() -> int | None:
    return get_context().last_handle()


def remove(handle: int, *signals: Any) -> None:
    get_context().remove(handle, *signals)


def clear(*signals: Any) -> None:
    get_context().clear(*signals)


def pause(*signals: Any) -> None:
    get_context().pause(*signals)


def restore(*signals: Any) -> None:
    get_context().restore(*signals)


def debug(*signals: Any, file: TextIO | None = None) -> None:
    get_context().debug(*signals, file=file)


def debug_raw(*signals: Any, file: TextIO | None = None) -> None:
    get_context().debug_raw(*signals, file=file)
