"""Layered configuration resolver.

Values are looked up in environment variables, then runtime system properties,
then a per-domain `<name>.properties` file, falling back to a caller default.

Usage:
    from config_resolver import get_configuration

    config = get_configuration("billing")
    timeout = config.get_int("billing.timeout", 30)
"""

from config_resolver.domains.domain import ConfigDomain
from config_resolver.domains.registry import DomainRegistry, default_registry
from config_resolver.domains.system_properties import SystemProperties, default_system_properties
from config_resolver.infrastructure.properties import PropertiesSyntaxError, parse_properties
from config_resolver.infrastructure.resources import LoadResult, ResourceLoader
from config_resolver.services.resolver import Configuration, ConfigResolver, get_configuration
from config_resolver.utils.config import DEFAULT_DOMAIN
from config_resolver.utils.logger import get_logger, setup_logger

__all__ = [
    "ConfigDomain",
    "ConfigResolver",
    "Configuration",
    "DEFAULT_DOMAIN",
    "DomainRegistry",
    "LoadResult",
    "PropertiesSyntaxError",
    "ResourceLoader",
    "SystemProperties",
    "default_registry",
    "default_system_properties",
    "get_configuration",
    "get_logger",
    "parse_properties",
    "setup_logger",
]
