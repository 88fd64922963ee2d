"""Pure domain model for smatch: trees, mappings, errors and stage ports."""

from __future__ import annotations

from .context import Context, Node
from .errors import (
    AmbiguousPathError,
    CapabilityUnavailableError,
    FilterError,
    LoadError,
    MatchingError,
    ProcessingError,
    RenderError,
    SMatchError,
    StageError,
    UsageError,
)
from .mapping import ContextMapping, MappingElement, Relation

__all__ = [
    "AmbiguousPathError",
    "CapabilityUnavailableError",
    "Context",
    "ContextMapping",
    "FilterError",
    "LoadError",
    "MappingElement",
    "MatchingError",
    "Node",
    "ProcessingError",
    "Relation",
    "RenderError",
    "SMatchError",
    "StageError",
    "UsageError",
]
