"""
Configuration for trap registration policies.

TrapConfig holds the two behavioral flags of the registration surface and
the log level of the trapinfra loggers:

- append: register() appends to a signal's commands instead of replacing
  them (default False, mimicking the shell builtin)
- edit_paused: registration may edit a paused signal, which un-pauses it
  (default False)

Settings come from keyword arguments, from the environment
(TRAP_APPEND=true) or from a YAML file section, with environment values
taking precedence over the file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from ..exceptions import ConfigError
from ..log import resolve_level
from ..log.exceptions import InvalidLogLevelError
from .constants import (
    DEFAULT_SECTION,
    ENV_APPEND,
    ENV_EDIT_PAUSED,
    ENV_LOG_LEVEL,
    MAX_CONFIG_SIZE_BYTES,
)


def _ensure_boolean(name: str, value: Any) -> bool:
    """Accept real booleans or the strings true/false, case-insensitive."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(
        f"{name} must be set to either true or false. Given: '{value}'",
        setting=name,
    )


def _check_file_size(path: Path) -> None:
    """Refuse configuration files above the size limit."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            f"Configuration file '{path}' is {file_size} bytes, "
            f"exceeding maximum size of {MAX_CONFIG_SIZE_BYTES} bytes"
        )


@dataclass(frozen=True)
class TrapConfig:
    """
    Immutable trap registration settings.

    Example:
        >>> config = TrapConfig.from_env()
        >>> config = config.with_changes(append=True)
    """

    append: bool = False
    edit_paused: bool = False
    log_level: str | int | bool = "warning"

    def __post_init__(self) -> None:
        object.__setattr__(self, "append", _ensure_boolean("append", self.append))
        object.__setattr__(
            self, "edit_paused", _ensure_boolean("edit_paused", self.edit_paused)
        )
        try:
            resolve_level(self.log_level)
        except InvalidLogLevelError as e:
            raise ConfigError(str(e), setting="log_level") from e

    def with_changes(self, **changes: Any) -> TrapConfig:
        """Return a copy with the given fields replaced."""
        unknown = set(changes) - {"append", "edit_paused", "log_level"}
        if unknown:
            raise ConfigError(f"Unknown trap settings: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def with_env(self, environ: Mapping[str, str] | None = None) -> TrapConfig:
        """Return a copy with TRAP_* environment overrides applied."""
        environ = os.environ if environ is None else environ
        changes: dict[str, Any] = {}
        if ENV_APPEND in environ:
            changes["append"] = _ensure_boolean(ENV_APPEND, environ[ENV_APPEND])
        if ENV_EDIT_PAUSED in environ:
            changes["edit_paused"] = _ensure_boolean(
                ENV_EDIT_PAUSED, environ[ENV_EDIT_PAUSED]
            )
        if ENV_LOG_LEVEL in environ:
            changes["log_level"] = environ[ENV_LOG_LEVEL]
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TrapConfig:
        """
        Build settings from TRAP_APPEND, TRAP_EDIT_PAUSED and TRAP_LOG_LEVEL.

        Raises:
            ConfigError: If a boolean variable is neither true nor false
        """
        return cls().with_env(environ)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TrapConfig:
        """Build settings from a mapping, ignoring unrelated keys."""
        data = data or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Trap settings must be a mapping, got {type(data)}")
        fields = {
            key: data[key]
            for key in ("append", "edit_paused", "log_level")
            if key in data
        }
        return cls(**fields)

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        section: str = DEFAULT_SECTION,
        environ: Mapping[str, str] | None = None,
    ) -> TrapConfig:
        """
        Load settings from a section of a YAML file.

        Environment overrides are applied on top of the file values.

        Example YAML:
            trap:
              append: true
              edit_paused: false
              log_level: debug

        Raises:
            ConfigError: If the file is missing, too large or malformed
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        _check_file_size(path)

        with open(path) as f:
            try:
                document = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(document, Mapping):
            raise ConfigError(f"Configuration file {path} must hold a mapping")
        return cls.from_dict(document.get(section)).with_env(environ)
