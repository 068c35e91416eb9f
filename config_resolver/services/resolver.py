"""
Layered configuration resolution.

Lookup order for every key:
    1. process environment variable (exact, case-sensitive name)
    2. runtime system property
    3. the domain's `<name>.properties` file
The first non-blank value wins and is returned trimmed. Blank values at any
layer fall through to the next. Missing keys never raise.
"""

from __future__ import annotations

import os
import threading
from collections import ChainMap
from pathlib import Path
from typing import Callable, Mapping, Optional, TypeVar, Union

from config_resolver.domains.domain import ConfigDomain
from config_resolver.domains.registry import DomainRegistry, default_registry
from config_resolver.domains.system_properties import SystemProperties, default_system_properties
from config_resolver.services import conversion
from config_resolver.utils import config
from config_resolver.utils.logger import get_logger, setup_logger

logger = get_logger("resolver")

T = TypeVar("T")
DomainRef = Union[str, ConfigDomain]

ENVIRONMENT = "environment"
SYSTEM = "system"
FILE = "file"


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ConfigResolver:
    """
    Resolves keys against environment, system properties and domain files.

    All collaborators are injectable so tests can run against isolated state:
        resolver = ConfigResolver(
            registry=DomainRegistry(ResourceLoader(search_paths=[tmp_path])),
            system_properties=SystemProperties(include_host=False),
            environ={},
        )
    """

    def __init__(
        self,
        registry: Optional[DomainRegistry] = None,
        system_properties: Optional[SystemProperties] = None,
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Union[Path, str]] = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.system_properties = (
            system_properties if system_properties is not None else default_system_properties()
        )
        env: Mapping[str, str] = os.environ if environ is None else environ
        dotenv = config.read_dotenv(dotenv_path)
        if dotenv:
            logger.debug("Environment layer includes %d values from %s", len(dotenv), dotenv_path)
            # real environment variables take precedence over .env values
            env = ChainMap(env, dotenv)  # type: ignore[arg-type]
        self._environ = env

    # --- Domains ---

    def get_domain(self, name: str) -> ConfigDomain:
        return self.registry.get_domain(name)

    def domain(self, name: Optional[str] = None) -> "Configuration":
        """View bound to one domain. Defaults to CONFIG_RESOLVER_DEFAULT_DOMAIN or "souza"."""
        return Configuration(self, self.get_domain(name if name is not None else config.default_domain()))

    def _domain(self, ref: DomainRef) -> ConfigDomain:
        if isinstance(ref, ConfigDomain):
            return ref
        return self.registry.get_domain(ref)

    # --- String resolution ---

    def _lookup(self, ref: DomainRef, key: Optional[str]) -> tuple[Optional[str], Optional[str]]:
        if key is None:
            return None, None
        key = key.strip()
        if not key:
            return None, None

        value = _present(self._environ.get(key))
        if value is not None:
            return value, ENVIRONMENT
        value = _present(self.system_properties.get(key))
        if value is not None:
            return value, SYSTEM
        value = _present(self._domain(ref).get(key))
        if value is not None:
            return value, FILE
        return None, None

    def resolve(self, domain: DomainRef, key: Optional[str]) -> Optional[str]:
        """Trimmed value of `key`, or None when no layer has a non-blank value."""
        return self._lookup(domain, key)[0]

    def get(self, domain: DomainRef, key: Optional[str], default: Optional[str] = None) -> Optional[str]:
        value = self.resolve(domain, key)
        return value if value is not None else default

    def source_of(self, domain: DomainRef, key: Optional[str]) -> Optional[str]:
        """Which layer answers `key`: "environment", "system", "file", or None."""
        return self._lookup(domain, key)[1]

    # --- Typed getters ---

    def _typed(
        self,
        domain: DomainRef,
        key: Optional[str],
        default: T,
        convert: Callable[[str], Optional[T]],
        type_name: str,
    ) -> T:
        raw = self.resolve(domain, key)
        if raw is None:
            return default
        value = convert(raw)
        if value is None:
            logger.debug("Value of %r is not a valid %s: %r; using default", key, type_name, raw)
            return default
        return value

    def get_int(self, domain: DomainRef, key: Optional[str], default: int) -> int:
        """Signed 32-bit base-10 integer."""
        return self._typed(domain, key, default, conversion.to_integer, "int")

    def get_long(self, domain: DomainRef, key: Optional[str], default: int) -> int:
        """Signed 64-bit base-10 integer."""
        return self._typed(domain, key, default, lambda s: conversion.to_integer(s, bits=64), "long")

    def get_float(self, domain: DomainRef, key: Optional[str], default: float) -> float:
        return self._typed(domain, key, default, lambda s: conversion.to_decimal(s, single=True), "float")

    def get_double(self, domain: DomainRef, key: Optional[str], default: float) -> float:
        return self._typed(domain, key, default, conversion.to_decimal, "double")

    def get_bool(self, domain: DomainRef, key: Optional[str], default: bool) -> bool:
        return self._typed(domain, key, default, conversion.to_boolean, "bool")

    def get_char(self, domain: DomainRef, key: Optional[str], default: str) -> str:
        """First character of the resolved value. Only an absent key gives the default."""
        return self._typed(domain, key, default, conversion.to_char, "char")


class Configuration:
    """A ConfigResolver bound to one domain: `config.get_int("pool.size", 4)`."""

    def __init__(self, resolver: ConfigResolver, domain: ConfigDomain) -> None:
        self._resolver = resolver
        self._domain = domain

    @property
    def name(self) -> str:
        return self._domain.name

    @property
    def domain(self) -> ConfigDomain:
        return self._domain

    def resolve(self, key: Optional[str]) -> Optional[str]:
        return self._resolver.resolve(self._domain, key)

    def get(self, key: Optional[str], default: Optional[str] = None) -> Optional[str]:
        return self._resolver.get(self._domain, key, default)

    def source_of(self, key: Optional[str]) -> Optional[str]:
        return self._resolver.source_of(self._domain, key)

    def get_int(self, key: Optional[str], default: int) -> int:
        return self._resolver.get_int(self._domain, key, default)

    def get_long(self, key: Optional[str], default: int) -> int:
        return self._resolver.get_long(self._domain, key, default)

    def get_float(self, key: Optional[str], default: float) -> float:
        return self._resolver.get_float(self._domain, key, default)

    def get_double(self, key: Optional[str], default: float) -> float:
        return self._resolver.get_double(self._domain, key, default)

    def get_bool(self, key: Optional[str], default: bool) -> bool:
        return self._resolver.get_bool(self._domain, key, default)

    def get_char(self, key: Optional[str], default: str) -> str:
        return self._resolver.get_char(self._domain, key, default)

    def __repr__(self) -> str:
        return f"Configuration({self._domain!r})"


_default_resolver: Optional[ConfigResolver] = None
_default_lock = threading.Lock()


def get_configuration(name: Optional[str] = None) -> Configuration:
    """
    Shortcut on process-wide defaults: default registry, default system
    properties, live os.environ.
    """
    global _default_resolver
    if _default_resolver is None:
        with _default_lock:
            if _default_resolver is None:
                setup_logger(level=config.log_level())
                _default_resolver = ConfigResolver()
    return _default_resolver.domain(name)
