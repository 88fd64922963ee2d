"""Capabilities a match manager may expose, one per stage component."""

from __future__ import annotations

from enum import StrEnum

from .ports import (
    ContextLoader,
    ContextMatcher,
    ContextPreprocessor,
    ContextRenderer,
    MappingFilter,
    MappingLoader,
    MappingRenderer,
)


class Capability(StrEnum):
    """Values double as the configuration table naming the component."""

    LOAD_CONTEXT = "context_loader"
    RENDER_CONTEXT = "context_renderer"
    LOAD_MAPPING = "mapping_loader"
    RENDER_MAPPING = "mapping_renderer"
    OFFLINE = "preprocessor"
    ONLINE = "matcher"
    FILTER = "mapping_filter"

    @property
    def port(self) -> type:
        return _PORTS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_PORTS: dict[Capability, type] = {
    Capability.LOAD_CONTEXT: ContextLoader,
    Capability.RENDER_CONTEXT: ContextRenderer,
    Capability.LOAD_MAPPING: MappingLoader,
    Capability.RENDER_MAPPING: MappingRenderer,
    Capability.OFFLINE: ContextPreprocessor,
    Capability.ONLINE: ContextMatcher,
    Capability.FILTER: MappingFilter,
}

_LABELS: dict[Capability, str] = {
    Capability.LOAD_CONTEXT: "context loading",
    Capability.RENDER_CONTEXT: "context rendering",
    Capability.LOAD_MAPPING: "mapping loading",
    Capability.RENDER_MAPPING: "mapping rendering",
    Capability.OFFLINE: "offline preprocessing",
    Capability.ONLINE: "online matching",
    Capability.FILTER: "mapping filtering",
}
