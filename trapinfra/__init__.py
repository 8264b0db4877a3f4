from importlib.metadata import PackageNotFoundError, version

from .config import TrapConfig
from .exceptions import (
    BatchError,
    ConfigError,
    DirectoryError,
    EmptyBody,
    HandleNotBound,
    InvalidCommand,
    InvalidSignal,
    MissingArgument,
    NotPaused,
    SignalPaused,
    SlotError,
    TrapError,
    UnknownHandle,
    UsageError,
)
from .trap import (
    ERR,
    EXIT,
    Command,
    ComposedHandler,
    TrapContext,
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

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("trapinfra")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Registration surface
    "trap",
    "register",
    "add",
    "add_raw",
    "last_handle",
    "remove",
    "clear",
    "pause",
    "restore",
    "debug",
    "debug_raw",
    "resolve",
    "configure",
    # Context
    "TrapContext",
    "TrapConfig",
    "Command",
    "ComposedHandler",
    "get_context",
    "set_context",
    "reset_context",
    "EXIT",
    "ERR",
    # Exceptions
    "TrapError",
    "ConfigError",
    "DirectoryError",
    "InvalidSignal",
    "SignalPaused",
    "NotPaused",
    "UnknownHandle",
    "HandleNotBound",
    "MissingArgument",
    "EmptyBody",
    "UsageError",
    "InvalidCommand",
    "SlotError",
    "BatchError",
]
