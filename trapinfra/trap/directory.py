"""
Signal directory: canonical names, numeric codes and alternate spellings.

A signal may be specified in several ways: by number (``2`` or ``"2"``),
by name in any letter case (``"sigint"``), without the ``SIG`` prefix
(``"int"``) or by one of Python's alias names (``"SIGIOT"``). Two
pseudo-signals are recognised besides the OS signals: ``EXIT`` (code 0,
normal interpreter exit) and ``ERR`` (uncaught exception, no code).

The lookup tables are built once from ``signal.valid_signals()`` and never
change afterwards.
"""

from __future__ import annotations

import signal
from collections.abc import Iterator
from typing import Any

from ..exceptions import DirectoryError, InvalidSignal

EXIT = "EXIT"
ERR = "ERR"

PSEUDO_SIGNALS: dict[str, int | None] = {EXIT: 0, ERR: None}

_PREFIX = "SIG"


def _realtime_name(code: int) -> str | None:
    """Name a real-time signal the way ``kill -l`` does (SIGRTMIN+n / SIGRTMAX-n)."""
    rtmin = getattr(signal, "SIGRTMIN", None)
    rtmax = getattr(signal, "SIGRTMAX", None)
    if rtmin is None or rtmax is None or not rtmin <= code <= rtmax:
        return None
    if code == rtmin:
        return "SIGRTMIN"
    if code == rtmax:
        return "SIGRTMAX"
    offset = code - rtmin
    if offset <= (rtmax - rtmin) // 2:
        return f"SIGRTMIN+{offset}"
    return f"SIGRTMAX-{rtmax - code}"


def _canonical_name(code: int) -> str | None:
    try:
        return signal.Signals(code).name
    except ValueError:
        return _realtime_name(code)


class SignalDirectory:
    """
    Bidirectional mapping between signal names, codes and alternate spellings.

    Example:
        >>> directory = SignalDirectory.build()
        >>> directory.resolve("int")
        'SIGINT'
        >>> directory.code("SIGINT")
        2
    """

    def __init__(self, codes: dict[str, int | None], aliases: dict[str, str]) -> None:
        self._codes = dict(codes)
        self._names: dict[int, str] = {
            code: name for name, code in self._codes.items() if code is not None
        }
        self._aliases = dict(aliases)

    @classmethod
    def build(cls) -> SignalDirectory:
        """
        Query the runtime signal enumeration and build the directory.

        Raises:
            DirectoryError: If the runtime cannot enumerate its signals
        """
        try:
            valid = sorted(int(s) for s in signal.valid_signals())
        except (OSError, ValueError) as e:
            raise DirectoryError(f"cannot enumerate signals: {e}") from e

        codes: dict[str, int | None] = dict(PSEUDO_SIGNALS)
        for code in valid:
            name = _canonical_name(code)
            if name is not None and name not in codes:
                codes[name] = code

        aliases: dict[str, str] = {}
        for alias, member in signal.Signals.__members__.items():
            canonical = _canonical_name(int(member))
            if alias != canonical and canonical in codes:
                aliases[alias] = canonical

        return cls(codes, aliases)

    def _lookup_code(self, code: int) -> str | None:
        return self._names.get(code)

    def _lookup_name(self, name: str) -> str | None:
        if name in self._codes:
            return name
        return self._aliases.get(name)

    def resolve(self, spec: Any) -> str:
        """
        Translate a signal specification to its canonical name.

        Args:
            spec: Signal number (int or numeric string), name in any case,
                  name without the SIG prefix, or a signal.Signals member

        Returns:
            Canonical signal name

        Raises:
            InvalidSignal: If spec matches no known signal
        """
        if isinstance(spec, bool):
            raise InvalidSignal(spec)
        if isinstance(spec, int):
            name = self._lookup_code(int(spec))
            if name is None:
                raise InvalidSignal(spec)
            return name
        if not isinstance(spec, str) or not spec.strip():
            raise InvalidSignal(spec)

        raw = spec.strip()
        if raw.isascii() and raw.isdecimal():
            name = self._lookup_code(int(raw))
        else:
            upper = raw.upper()
            name = self._lookup_name(upper) or self._lookup_name(_PREFIX + upper)
        if name is None:
            raise InvalidSignal(spec)
        return name

    def code(self, name: str) -> int | None:
        """Numeric code of a canonical name; None for ERR."""
        if name not in self._codes:
            raise InvalidSignal(name)
        return self._codes[name]

    def is_pseudo(self, name: str) -> bool:
        return name in PSEUDO_SIGNALS

    def names(self) -> list[str]:
        """Canonical names, pseudo-signals first, then by code."""
        pseudo = [n for n in self._codes if n in PSEUDO_SIGNALS]
        real = sorted(
            (n for n in self._codes if n not in PSEUDO_SIGNALS),
            key=lambda n: self._codes[n],  # type: ignore[arg-type,return-value]
        )
        return pseudo + real

    def order(self, names: Iterator[str] | list[str] | set[str]) -> list[str]:
        """Sort canonical names in directory order."""
        position = {name: i for i, name in enumerate(self.names())}
        return sorted(names, key=lambda n: position.get(n, len(position)))

    def listing(self, columns: int = 5) -> str:
        """
        Render the OS signals as a ``trap -l`` style table.

        Example:
             1) SIGHUP       2) SIGINT       3) SIGQUIT ...
        """
        cells = [
            f"{code:2d}) {name:<12}"
            for name, code in sorted(self._names_by_code(), key=lambda item: item[1])
        ]
        rows = [
            "".join(cells[i : i + columns]).rstrip()
            for i in range(0, len(cells), columns)
        ]
        return "\n".join(rows)

    def _names_by_code(self) -> list[tuple[str, int]]:
        return [(name, code) for code, name in self._names.items() if code > 0]

    def __contains__(self, name: object) -> bool:
        return name in self._codes

    def __len__(self) -> int:
        return len(self._codes)
