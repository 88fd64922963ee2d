"""The match manager: a set of optional stage components behind one facade."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, TypeVar, cast

from smatch.domain.capabilities import Capability
from smatch.domain.context import Context
from smatch.domain.errors import (
    CapabilityUnavailableError,
    FilterError,
    LoadError,
    MatchingError,
    ProcessingError,
    RenderError,
    StageError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from smatch.domain.mapping import ContextMapping
    from smatch.domain.ports import (
        ContextLoader,
        ContextMatcher,
        ContextPreprocessor,
        ContextRenderer,
        MappingFilter,
        MappingLoader,
        MappingRenderer,
    )

log = getLogger(__name__)

T = TypeVar("T")


def _run_stage(error_type: type[StageError], description: str, call: Callable[[], T]) -> T:
    """Run ``call`` and translate foreign failures into ``error_type``."""

    try:
        return call()
    except StageError:
        raise
    except Exception as exc:
        raise error_type(f"{description} failed: {exc}") from exc


@dataclass(slots=True)
class MatchManager:
    """Exposes each configured stage as an independently optional capability.

    Callers query ``supports`` (and ``supports_structured_loading``) before
    invoking a stage; invoking an absent capability raises
    ``CapabilityUnavailableError``.
    """

    name: str = "default"
    components: Mapping[Capability, Any] = field(default_factory=dict)

    @property
    def capabilities(self) -> frozenset[Capability]:
        return frozenset(self.components)

    def supports(self, capability: Capability) -> bool:
        return capability in self.components

    @property
    def supports_structured_loading(self) -> bool:
        loader = self.components.get(Capability.LOAD_CONTEXT)
        return loader is not None and bool(getattr(loader, "structured", False))

    def missing(
        self, required: Iterable[Capability], *, structured_loading: bool = False
    ) -> tuple[str, ...]:
        """Return labels of the required capabilities this manager lacks."""

        labels = [capability.label for capability in required if not self.supports(capability)]
        if structured_loading and self.supports(Capability.LOAD_CONTEXT):
            if not self.supports_structured_loading:
                labels.append("structured context loading")
        return tuple(labels)

    def _component(self, capability: Capability) -> Any:
        component = self.components.get(capability)
        if component is None:
            raise CapabilityUnavailableError(
                f"Manager {self.name!r} has no {capability.label} component configured",
                missing=(capability.label,),
            )
        return component

    def create_context(self) -> Context:
        return Context()

    def load_context(self, locator: str) -> Context:
        loader = cast("ContextLoader", self._component(Capability.LOAD_CONTEXT))
        log.info("Loading context from %s", locator)
        context = _run_stage(LoadError, f"Loading {locator}", lambda: loader.load_context(locator))
        log.info("Loaded context %s with %d nodes", locator, len(context))
        return context

    def render_context(self, context: Context, locator: str) -> None:
        renderer = cast("ContextRenderer", self._component(Capability.RENDER_CONTEXT))
        log.info("Rendering context to %s", locator)
        _run_stage(
            RenderError,
            f"Rendering context to {locator}",
            lambda: renderer.render_context(context, locator),
        )

    def load_mapping(self, source: Context, target: Context, locator: str) -> ContextMapping:
        loader = cast("MappingLoader", self._component(Capability.LOAD_MAPPING))
        log.info("Loading mapping from %s", locator)
        mapping = _run_stage(
            LoadError,
            f"Loading mapping {locator}",
            lambda: loader.load_mapping(source, target, locator),
        )
        log.info("Loaded mapping %s with %d elements", locator, len(mapping))
        return mapping

    def render_mapping(self, mapping: ContextMapping, locator: str) -> None:
        renderer = cast("MappingRenderer", self._component(Capability.RENDER_MAPPING))
        log.info("Rendering mapping with %d elements to %s", len(mapping), locator)
        _run_stage(
            RenderError,
            f"Rendering mapping to {locator}",
            lambda: renderer.render_mapping(mapping, locator),
        )

    def offline(self, context: Context) -> None:
        """Preprocess ``context`` in place. Not guarded against repeated calls."""

        preprocessor = cast("ContextPreprocessor", self._component(Capability.OFFLINE))
        log.info("Preprocessing context with %d nodes", len(context))
        _run_stage(ProcessingError, "Preprocessing", lambda: preprocessor.preprocess(context))

    def online(self, source: Context, target: Context) -> ContextMapping:
        matcher = cast("ContextMatcher", self._component(Capability.ONLINE))
        log.info("Matching contexts: source=%d nodes, target=%d nodes", len(source), len(target))
        mapping = _run_stage(MatchingError, "Matching", lambda: matcher.match(source, target))
        log.info("Matching produced %d elements", len(mapping))
        return mapping

    def filter_mapping(self, mapping: ContextMapping) -> ContextMapping:
        """Filter ``mapping``. Any stage failure inside the filter is raised as ``FilterError``."""

        mapping_filter = cast("MappingFilter", self._component(Capability.FILTER))
        log.info("Filtering mapping with %d elements", len(mapping))
        try:
            filtered = _run_stage(
                FilterError, "Filtering", lambda: mapping_filter.filter(mapping)
            )
        except FilterError:
            raise
        except StageError as exc:
            raise FilterError(f"Filtering failed: {exc}") from exc
        log.info("Filtering kept %d of %d elements", len(filtered), len(mapping))
        return filtered


    def match(self, source: Context, target: Context) -> ContextMapping:
        """Preprocess contexts that need it, then match them."""

        for context in (source, target):
            if not context.preprocessed:
                self.offline(context)
        return self.online(source, target)
