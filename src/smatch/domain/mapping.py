"""Correspondence mappings between two contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .context import Context, Node


class Relation(StrEnum):
    EQUIVALENCE = "="
    LESS_GENERAL = "<"
    MORE_GENERAL = ">"
    DISJOINT = "!"
    UNKNOWN = "?"

    @classmethod
    def from_symbol(cls, symbol: str) -> Relation:
        try:
            return cls(symbol.strip())
        except ValueError as exc:
            raise ValueError(f"Unknown relation symbol: {symbol!r}") from exc


@dataclass(frozen=True, slots=True)
class MappingElement:
    source: Node
    target: Node
    relation: Relation

    def describe(self) -> str:
        return f"{self.source.path_string()}\t{self.relation}\t{self.target.path_string()}"


@dataclass(eq=False)
class ContextMapping:
    """Set of mapping elements keyed by ``(source, target)`` node pair.

    A node pair holds at most one relation; ``add`` replaces an existing one.
    Contexts are optional so that loaders can build mappings before the
    contexts are known, but filters that walk the trees require both.
    """

    source_context: Context | None = None
    target_context: Context | None = None
    _elements: dict[tuple[int, int], MappingElement] = field(default_factory=dict, repr=False)

    @classmethod
    def from_elements(
        cls,
        elements: Iterable[MappingElement],
        *,
        source_context: Context | None = None,
        target_context: Context | None = None,
    ) -> ContextMapping:
        mapping = cls(source_context=source_context, target_context=target_context)
        for element in elements:
            mapping.add(element)
        return mapping

    def add(self, element: MappingElement) -> None:
        self._elements[(id(element.source), id(element.target))] = element

    def set_relation(self, source: Node, target: Node, relation: Relation) -> MappingElement:
        element = MappingElement(source=source, target=target, relation=relation)
        self.add(element)
        return element

    def relation_of(self, source: Node, target: Node) -> Relation | None:
        element = self._elements.get((id(source), id(target)))
        return element.relation if element is not None else None

    def discard(self, element: MappingElement) -> None:
        self._elements.pop((id(element.source), id(element.target)), None)

    def copy(self) -> ContextMapping:
        return ContextMapping.from_elements(
            self,
            source_context=self.source_context,
            target_context=self.target_context,
        )

    def __iter__(self) -> Iterator[MappingElement]:
        return iter(self._elements.values())

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element: object) -> bool:
        if not isinstance(element, MappingElement):
            return False
        return self._elements.get((id(element.source), id(element.target))) == element

    def issubset(self, other: ContextMapping) -> bool:
        return all(element in other for element in self)
