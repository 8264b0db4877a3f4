"""
Composable, pausable signal handler registration.

Components, leaves first:

- SignalDirectory: canonical names, codes and alternate spellings
- CommandRegistry: append-only store of commands keyed by handle
- BindingTable: ordered handles per signal
- PausedSet: signals hidden from their live slot
- Flusher / ComposedHandler: renders bindings into the live slot
- StateSynchronizer: absorbs pre-existing handlers once
- TrapContext: the model plus the public operations
"""

from .api import (
    add,
    add_raw,
    clear,
    configure,
    debug,
    debug_raw,
    get_context,
    last_handle,
    pause,
    register,
    remove,
    reset_context,
    resolve,
    restore,
    set_context,
    trap,
)
from .bindings import BindingTable
from .context import TrapContext
from .directory import ERR, EXIT, SignalDirectory
from .paused import PausedSet
from .registry import Command, CommandRegistry, describe
from .slots import (
    ErrorSlot,
    ExitSlot,
    HandlerSlot,
    SignalSlot,
    default_slot_factory,
)
from .sync import StateSynchronizer
from .template import TEMPLATE_WRAPPER, ComposedHandler, Flusher

__all__ = [
    "add",
    "add_raw",
    "clear",
    "configure",
    "debug",
    "debug_raw",
    "get_context",
    "last_handle",
    "pause",
    "register",
    "remove",
    "reset_context",
    "resolve",
    "restore",
    "set_context",
    "trap",
    "BindingTable",
    "Command",
    "CommandRegistry",
    "ComposedHandler",
    "ErrorSlot",
    "ExitSlot",
    "Flusher",
    "HandlerSlot",
    "PausedSet",
    "SignalDirectory",
    "SignalSlot",
    "StateSynchronizer",
    "TrapContext",
    "describe",
    "default_slot_factory",
    "ERR",
    "EXIT",
    "TEMPLATE_WRAPPER",
]
