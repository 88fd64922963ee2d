"""Application configuration helpers."""

from __future__ import annotations

from .env import log_level_from_env
from .errors import ConfigurationError, MissingConfigurationError
from .locator import DEFAULT_CONFIG_RESOURCE, ConfigLocator
from .logging import configure_logging
from .placeholders import resolve_placeholders, substitute_placeholders
from .settings import ComponentSettings, ManagerSettings, load_settings, parse_settings

__all__ = [
    "DEFAULT_CONFIG_RESOURCE",
    "ComponentSettings",
    "ConfigLocator",
    "ConfigurationError",
    "ManagerSettings",
    "MissingConfigurationError",
    "configure_logging",
    "load_settings",
    "log_level_from_env",
    "parse_settings",
    "resolve_placeholders",
    "substitute_placeholders",
]
