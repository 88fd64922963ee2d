"""Configuration error definitions."""

from __future__ import annotations

from smatch.domain.errors import SMatchError


class ConfigurationError(SMatchError):
    """Raised when configuration values are invalid or cannot be resolved."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""
