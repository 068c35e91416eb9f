"""A named configuration set backed by one property file."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True, eq=False)
class ConfigDomain:
    """
    Properties loaded from `<name>.properties`. Read-only once built.

    Equality is identity: two domains with the same name are only the same
    domain if they came from the same registry entry.
    """

    name: str
    properties: Mapping[str, str] = field(default_factory=dict)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def get(self, key: str) -> Optional[str]:
        return self.properties.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.properties

    def __len__(self) -> int:
        return len(self.properties)

    @property
    def loaded(self) -> bool:
        """True when a backing file was found and parsed."""
        return self.source is not None

    def __repr__(self) -> str:
        return f"ConfigDomain(name={self.name!r}, keys={len(self)}, source={self.source!r})"
