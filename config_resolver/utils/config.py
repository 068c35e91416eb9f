"""Settings for the resolver itself, read from environment variables.

These are not resolved through the layered chain: they decide where that chain
looks for property files, so they come straight from the process environment.
Callers should use the accessor functions below rather than reading
`os.environ` directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

PATH_ENV = "CONFIG_RESOLVER_PATH"
PACKAGES_ENV = "CONFIG_RESOLVER_PACKAGES"
LOG_LEVEL_ENV = "CONFIG_RESOLVER_LOG_LEVEL"
DEFAULT_DOMAIN_ENV = "CONFIG_RESOLVER_DEFAULT_DOMAIN"

DEFAULT_DOMAIN = "souza"


def get_optional(key: str, default: str = "", environ: Optional[Mapping[str, str]] = None) -> str:
    """Get optional env var; return default if missing or blank."""
    env = os.environ if environ is None else environ
    val = (env.get(key) or "").strip()
    return val if val else default


def search_paths(environ: Optional[Mapping[str, str]] = None) -> list[Path]:
    """
    Directories searched for `<name>.properties`, in order.
    Reads CONFIG_RESOLVER_PATH (os.pathsep separated). Default: current directory.
    """
    raw = get_optional(PATH_ENV, "", environ)
    if not raw:
        return [Path.cwd()]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def resource_packages(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Packages whose bundled resources are searched after the directories. Comma separated."""
    raw = get_optional(PACKAGES_ENV, "", environ)
    return [p.strip() for p in raw.split(",") if p.strip()]


def log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    """Optional: log level name. Default WARNING."""
    return get_optional(LOG_LEVEL_ENV, "WARNING", environ).upper()


def default_domain(environ: Optional[Mapping[str, str]] = None) -> str:
    """Optional: domain used when none is named. Default "souza"."""
    return get_optional(DEFAULT_DOMAIN_ENV, DEFAULT_DOMAIN, environ)


def read_dotenv(path: Path | str | None) -> dict[str, str]:
    """
    Read a .env file without touching os.environ.
    Missing file or None path gives an empty dict; keys without a value are dropped.
    """
    if path is None:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    return {k: v for k, v in dotenv_values(p).items() if v is not None}
