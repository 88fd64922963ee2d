"""Domain port definitions for stage components."""

from __future__ import annotations

from .stages import (
    ContextLoader,
    ContextMatcher,
    ContextPreprocessor,
    ContextRenderer,
    MappingFilter,
    MappingLoader,
    MappingRenderer,
)

__all__ = [
    "ContextLoader",
    "ContextMatcher",
    "ContextPreprocessor",
    "ContextRenderer",
    "MappingFilter",
    "MappingLoader",
    "MappingRenderer",
]
