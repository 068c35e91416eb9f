"""
Locating and loading `<name>.properties` files.

Search order: each configured directory, then the bundled resources of each
anchor package (via importlib.resources). A failure to find or read the file
never propagates: it is logged and turned into an empty LoadResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Iterable, Optional

from config_resolver.infrastructure.properties import PropertiesSyntaxError, parse_properties
from config_resolver.utils import config
from config_resolver.utils.logger import get_logger

logger = get_logger("resources")

SUFFIX = ".properties"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one property file. `error` is set when loading failed."""

    properties: dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resource_name(name: str) -> str:
    return f"{name.strip()}{SUFFIX}"


def decode(data: bytes) -> str:
    """UTF-8 first, ISO-8859-1 when the bytes are not valid UTF-8."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("iso-8859-1")


class ResourceLoader:
    """Finds and parses the backing file of a configuration domain."""

    def __init__(
        self,
        search_paths: Optional[Iterable[Path | str]] = None,
        packages: Optional[Iterable[str]] = None,
    ) -> None:
        if search_paths is None:
            search_paths = config.search_paths()
        if packages is None:
            packages = config.resource_packages()
        self.search_paths: tuple[Path, ...] = tuple(Path(p) for p in search_paths)
        self.packages: tuple[str, ...] = tuple(packages)

    def __repr__(self) -> str:
        return f"ResourceLoader(search_paths={list(self.search_paths)!r}, packages={list(self.packages)!r})"

    def load(self, name: str) -> LoadResult:
        """Load `<name>.properties`. Never raises."""
        if not name or not name.strip():
            return LoadResult()

        filename = resource_name(name)
        try:
            found = self._read(filename)
        except Exception as e:
            logger.warning("Could not read %s: %s", filename, e, exc_info=True)
            return LoadResult(error=e)

        if found is None:
            err = FileNotFoundError(f"{filename} not found in {self._describe()}")
            logger.warning("%s", err)
            return LoadResult(error=err)

        source, data = found
        try:
            props = parse_properties(decode(data))
        except PropertiesSyntaxError as e:
            logger.warning("Could not parse %s: %s", source, e)
            return LoadResult(source=source, error=e)

        logger.debug("Loaded %d properties from %s", len(props), source)
        return LoadResult(properties=props, source=source)

    def _read(self, filename: str) -> tuple[str, bytes] | None:
        for directory in self.search_paths:
            candidate = directory / filename
            if candidate.is_file():
                return str(candidate), candidate.read_bytes()

        for package in self.packages:
            try:
                resource = resources.files(package).joinpath(filename)
            except (ImportError, TypeError) as e:
                logger.warning("Resource package %r is not usable: %s", package, e)
                continue
            if resource.is_file():
                return f"{package}:{filename}", resource.read_bytes()

        return None

    def _describe(self) -> str:
        places = [str(p) for p in self.search_paths] + [f"package {p}" for p in self.packages]
        return ", ".join(places) if places else "no search locations"
