"""
Runtime-settable system properties.

A mutable string store sitting between the environment and the property files
in the resolution chain. Seeded with host facts; can also be seeded from
`-Dkey=value` arguments at process start and changed programmatically.
"""

from __future__ import annotations

import getpass
import os
import platform
import threading
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional

from config_resolver.utils.logger import get_logger

logger = get_logger("system_properties")

DEFINE_PREFIX = "-D"


def host_properties() -> dict[str, str]:
    """Facts about the running host, keyed the conventional dotted way."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        # no passwd entry and no LOGNAME/USER
        user = ""
    return {
        "os.name": platform.system(),
        "os.arch": platform.machine(),
        "os.version": platform.release(),
        "user.name": user,
        "user.home": str(Path.home()),
        "user.dir": os.getcwd(),
        "python.version": platform.python_version(),
        "file.separator": os.sep,
        "path.separator": os.pathsep,
        "line.separator": os.linesep,
    }


def parse_defines(args: Iterable[str]) -> dict[str, str]:
    """
    Pick `-Dkey=value` entries out of an argument list.
    `-Dkey` alone sets an empty value; other arguments are ignored.
    """
    out: dict[str, str] = {}
    for arg in args:
        if not arg.startswith(DEFINE_PREFIX) or len(arg) <= len(DEFINE_PREFIX):
            continue
        key, _, value = arg[len(DEFINE_PREFIX) :].partition("=")
        key = key.strip()
        if key:
            out[key] = value
    return out


class SystemProperties:
    """Thread-safe string -> string store."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None, include_host: bool = True) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, str] = host_properties() if include_host else {}
        if initial:
            self._values.update({str(k): str(v) for k, v in initial.items()})

    @classmethod
    def from_args(cls, args: Iterable[str], include_host: bool = True) -> "SystemProperties":
        """Build a store seeded from `-Dkey=value` arguments, e.g. sys.argv[1:]."""
        defines = parse_defines(args)
        if defines:
            logger.debug("Seeding %d system properties from arguments", len(defines))
        return cls(defines, include_host=include_host)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> Optional[str]:
        """Set a property and return its previous value."""
        with self._lock:
            previous = self._values.get(key)
            self._values[key] = str(value)
        return previous

    def clear(self, key: str) -> Optional[str]:
        """Remove a property and return its previous value."""
        with self._lock:
            return self._values.pop(key, None)

    def update(self, values: Mapping[str, str]) -> None:
        with self._lock:
            self._values.update({str(k): str(v) for k, v in values.items()})

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._values)


_default_properties: Optional[SystemProperties] = None
_default_lock = threading.Lock()


def default_system_properties() -> SystemProperties:
    """Process-wide store, seeded with host facts on first use."""
    global _default_properties
    if _default_properties is None:
        with _default_lock:
            if _default_properties is None:
                _default_properties = SystemProperties()
    return _default_properties
