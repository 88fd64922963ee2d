"""Application entry points: resolving a match manager from configuration."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import smatch.adapters  # noqa: F401  registers the built-in components
from smatch.config.locator import ConfigLocator
from smatch.config.settings import load_settings
from smatch.manager import MatchManager
from smatch.registry import ComponentRegistry, registry

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def create_match_manager(
    locator: ConfigLocator | None = None,
    overrides: Mapping[str, str] | None = None,
    *,
    component_registry: ComponentRegistry | None = None,
    environ: Mapping[str, str] | None = None,
) -> MatchManager:
    """Resolve a fully constructed manager or raise ``ConfigurationError``.

    Every configured component is instantiated before the manager is returned.
    """

    effective_locator = locator or ConfigLocator.default()
    effective_registry = component_registry or registry
    settings = load_settings(effective_locator, overrides, environ=environ)

    components = {
        capability: effective_registry.create(capability, component_settings)
        for capability, component_settings in settings.components().items()
    }
    manager = MatchManager(name=settings.manager.name, components=components)
    log.info(
        "Created match manager %s with capabilities: %s",
        manager.name,
        ", ".join(sorted(capability.label for capability in manager.capabilities)) or "none",
    )
    return manager
