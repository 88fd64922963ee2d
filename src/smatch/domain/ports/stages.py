"""Ports implemented by pipeline stage components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smatch.domain.context import Context
    from smatch.domain.mapping import ContextMapping


@runtime_checkable
class ContextLoader(Protocol):
    """Reads a context from a resource.

    ``structured`` loaders produce full trees suitable for multi-context
    recipes; unstructured ones only support single-context conversion.
    """

    structured: bool

    def load_context(self, locator: str) -> Context: ...


@runtime_checkable
class ContextRenderer(Protocol):
    def render_context(self, context: Context, locator: str) -> None: ...


@runtime_checkable
class MappingLoader(Protocol):
    def load_mapping(self, source: Context, target: Context, locator: str) -> ContextMapping: ...


@runtime_checkable
class MappingRenderer(Protocol):
    def render_mapping(self, mapping: ContextMapping, locator: str) -> None: ...


@runtime_checkable
class ContextPreprocessor(Protocol):
    """Enriches a context in place with derived annotations."""

    def preprocess(self, context: Context) -> None: ...


@runtime_checkable
class ContextMatcher(Protocol):
    def match(self, source: Context, target: Context) -> ContextMapping: ...


@runtime_checkable
class MappingFilter(Protocol):
    def filter(self, mapping: ContextMapping) -> ContextMapping: ...


__all__ = [
    "ContextLoader",
    "ContextMatcher",
    "ContextPreprocessor",
    "ContextRenderer",
    "MappingFilter",
    "MappingLoader",
    "MappingRenderer",
]
