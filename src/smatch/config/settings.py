"""Pydantic schema for manager configuration files."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from smatch.domain.capabilities import Capability

from .errors import ConfigurationError
from .placeholders import resolve_placeholders

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .locator import ConfigLocator


class SettingsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ComponentSettings(SettingsModel):
    """Selects one stage component and the keyword arguments for its factory."""

    component: str
    options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("component")
    @classmethod
    def _strip_component(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("component must not be blank")
        return stripped


class ManagerSection(SettingsModel):
    name: str = "default"


class ManagerSettings(SettingsModel):
    manager: ManagerSection = Field(default_factory=ManagerSection)
    context_loader: ComponentSettings | None = None
    context_renderer: ComponentSettings | None = None
    mapping_loader: ComponentSettings | None = None
    mapping_renderer: ComponentSettings | None = None
    preprocessor: ComponentSettings | None = None
    matcher: ComponentSettings | None = None
    mapping_filter: ComponentSettings | None = None

    def components(self) -> dict[Capability, ComponentSettings]:
        """Return the configured components keyed by the capability they provide."""

        configured: dict[Capability, ComponentSettings] = {}
        for capability in Capability:
            settings = getattr(self, capability.value)
            if settings is not None:
                configured[capability] = settings
        return configured


def _read_document(text: str, source: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Malformed configuration {source}: {exc}") from exc


def _validate(document: Mapping[str, Any], source: str) -> ManagerSettings:
    try:
        return ManagerSettings.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration {source}: {exc}") from exc


def parse_settings(text: str, *, source: str = "<string>") -> ManagerSettings:
    """Parse TOML ``text`` into validated settings or raise ``ConfigurationError``."""

    return _validate(_read_document(text, source), source)


def load_settings(
    locator: ConfigLocator,
    overrides: Mapping[str, str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ManagerSettings:
    """Read, parse and validate the configuration named by ``locator``.

    Placeholders are resolved in string values after parsing, so override
    values are taken verbatim.
    """

    source = locator.describe()
    document = _read_document(locator.read_text(), source)
    resolved = resolve_placeholders(document, overrides or {}, environ=environ)
    return _validate(resolved, source)
