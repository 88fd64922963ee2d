"""Typed registry resolving configured component names to stage implementations."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from smatch.config.errors import ConfigurationError
from smatch.domain.capabilities import Capability

if TYPE_CHECKING:
    from smatch.config.settings import ComponentSettings

ComponentFactory = Callable[..., Any]

log = getLogger(__name__)


def resolve_reference(ref: str) -> ComponentFactory:
    """Import and return the callable identified by ``'module:qualname'``."""

    module_path, _, attr_path = ref.partition(":")
    if not module_path or not attr_path:
        raise ValueError(f"Invalid component reference (expected 'module:attr'): {ref!r}")
    obj: Any = importlib.import_module(module_path)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise TypeError(f"{ref!r} resolved to non-callable: {type(obj)}")
    return obj


@dataclass(slots=True)
class ComponentRegistry:
    """Factories per capability, keyed by the short name used in configuration."""

    _factories: dict[Capability, dict[str, ComponentFactory]] = field(
        default_factory=lambda: {capability: {} for capability in Capability}
    )

    def register(
        self,
        capability: Capability,
        name: str,
        factory: ComponentFactory | None = None,
    ) -> Any:
        """Register ``factory`` under ``name``.

        Returns a decorator when ``factory`` is omitted.
        """

        def decorator(target: ComponentFactory) -> ComponentFactory:
            existing = self._factories[capability].get(name)
            if existing is not None and existing is not target:
                raise ValueError(f"Component {name!r} is already registered for {capability}")
            self._factories[capability][name] = target
            return target

        if factory is None:
            return decorator
        return decorator(factory)

    def unregister(self, capability: Capability, name: str) -> None:
        self._factories[capability].pop(name, None)

    def names(self, capability: Capability) -> tuple[str, ...]:
        return tuple(sorted(self._factories[capability]))

    def resolve(self, capability: Capability, reference: str) -> ComponentFactory:
        registered = self._factories[capability].get(reference)
        if registered is not None:
            return registered
        if ":" not in reference:
            available = ", ".join(self.names(capability)) or "none"
            raise ConfigurationError(
                f"Unknown {capability.label} component {reference!r} (available: {available})"
            )
        try:
            return resolve_reference(reference)
        except (ImportError, AttributeError, TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot import {capability.label} component {reference!r}: {exc}"
            ) from exc

    def create(self, capability: Capability, settings: ComponentSettings) -> Any:
        """Instantiate and validate the component described by ``settings``."""

        factory = self.resolve(capability, settings.component)
        try:
            component = factory(**settings.options)
        except Exception as exc:
            raise ConfigurationError(
                f"Cannot create {capability.label} component {settings.component!r}: {exc}"
            ) from exc
        if not isinstance(component, capability.port):
            raise ConfigurationError(
                f"Component {settings.component!r} does not implement {capability.port.__name__}"
            )
        log.debug("Created %s component %s", capability.label, settings.component)
        return component


registry = ComponentRegistry()


def register_component(capability: Capability, name: str) -> Callable[[ComponentFactory], Any]:
    """Decorator registering a factory in the process-wide registry."""

    return registry.register(capability, name)
