"""Tab-separated mapping format: ``source-path<TAB>relation<TAB>target-path``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from smatch.domain.capabilities import Capability
from smatch.domain.errors import AmbiguousPathError, LoadError
from smatch.domain.mapping import ContextMapping, Relation
from smatch.registry import register_component

from ._files import read_lines, write_lines

if TYPE_CHECKING:
    from smatch.domain.context import Context

SEPARATOR = "\t"
COMMENT_PREFIX = "#"


@register_component(Capability.LOAD_MAPPING, "tab")
@dataclass(slots=True)
class TabMappingLoader:
    encoding: str = "utf-8"

    def load_mapping(self, source: Context, target: Context, locator: str) -> ContextMapping:
        mapping = ContextMapping(source_context=source, target_context=target)
        for number, line in read_lines(locator, encoding=self.encoding):
            if not line.strip() or line.startswith(COMMENT_PREFIX):
                continue
            parts = line.split(SEPARATOR)
            if len(parts) != 3:
                raise LoadError(f"{locator}:{number}: expected 3 tab-separated fields")
            source_path, symbol, target_path = (part.strip() for part in parts)
            try:
                source_node = source.find(source_path)
                target_node = target.find(target_path)
            except AmbiguousPathError as exc:
                raise LoadError(f"{locator}:{number}: {exc}") from exc
            if source_node is None:
                raise LoadError(f"{locator}:{number}: unknown source node {source_path!r}")
            if target_node is None:
                raise LoadError(f"{locator}:{number}: unknown target node {target_path!r}")
            try:
                relation = Relation.from_symbol(symbol)
            except ValueError as exc:
                raise LoadError(f"{locator}:{number}: {exc}") from exc
            mapping.set_relation(source_node, target_node, relation)
        return mapping


@register_component(Capability.RENDER_MAPPING, "tab")
@dataclass(slots=True)
class TabMappingRenderer:
    encoding: str = "utf-8"

    def render_mapping(self, mapping: ContextMapping, locator: str) -> None:
        lines = sorted(element.describe() for element in mapping)
        write_lines(locator, lines, encoding=self.encoding)
