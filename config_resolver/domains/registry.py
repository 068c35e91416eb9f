"""
Registry of configuration domains.

One ConfigDomain per distinct name, created on first access and kept for the
registry's lifetime. Never evicted, never reloaded.
"""

from __future__ import annotations

import threading
from typing import Optional

from config_resolver.domains.domain import ConfigDomain
from config_resolver.infrastructure.resources import ResourceLoader
from config_resolver.utils.logger import get_logger

logger = get_logger("registry")


class DomainRegistry:
    """Memoizing name -> ConfigDomain map. Safe for concurrent first access."""

    def __init__(self, loader: Optional[ResourceLoader] = None) -> None:
        self._loader = loader if loader is not None else ResourceLoader()
        self._domains: dict[str, ConfigDomain] = {}
        self._lock = threading.Lock()

    @property
    def loader(self) -> ResourceLoader:
        return self._loader

    def get_domain(self, name: str) -> ConfigDomain:
        """Return the cached domain for `name`, loading its file on first call."""
        domain = self._domains.get(name)
        if domain is not None:
            return domain

        with self._lock:
            domain = self._domains.get(name)
            if domain is None:
                result = self._loader.load(name)
                domain = ConfigDomain(name=name, properties=result.properties, source=result.source)
                self._domains[name] = domain
                logger.debug("Registered %r", domain)
        return domain

    def names(self) -> list[str]:
        return list(self._domains)

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def __len__(self) -> int:
        return len(self._domains)


_default_registry: Optional[DomainRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> DomainRegistry:
    """Process-wide registry, built on first use from CONFIG_RESOLVER_* settings."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = DomainRegistry()
    return _default_registry
