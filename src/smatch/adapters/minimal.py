"""Minimal mapping filter: drops subsumption elements implied by the tree structure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from smatch.domain.capabilities import Capability
from smatch.domain.errors import FilterError
from smatch.domain.mapping import ContextMapping, MappingElement, Relation
from smatch.registry import register_component

if TYPE_CHECKING:
    from smatch.domain.context import Node

_NARROWING = frozenset({Relation.LESS_GENERAL, Relation.EQUIVALENCE})
_WIDENING = frozenset({Relation.MORE_GENERAL, Relation.EQUIVALENCE})


def _ancestor_or_self(candidate: Node, node: Node) -> bool:
    return candidate is node or candidate.is_ancestor_of(node)


def _implies(other: MappingElement, element: MappingElement) -> bool:
    """Whether ``other`` together with the trees entails ``element``.

    Children are more specific than their parents, so ``a <= a'``, ``a' <= b'``
    and ``b' <= b`` give ``a <= b`` when ``a'`` is above ``a`` and ``b'`` below ``b``.
    """

    if other.source is element.source and other.target is element.target:
        return False
    if element.relation is Relation.LESS_GENERAL:
        return (
            other.relation in _NARROWING
            and _ancestor_or_self(other.source, element.source)
            and _ancestor_or_self(element.target, other.target)
        )
    if element.relation is Relation.MORE_GENERAL:
        return (
            other.relation in _WIDENING
            and _ancestor_or_self(element.source, other.source)
            and _ancestor_or_self(other.target, element.target)
        )
    return False


@register_component(Capability.FILTER, "minimal")
@dataclass(slots=True)
class MinimalMappingFilter:
    def filter(self, mapping: ContextMapping) -> ContextMapping:
        if mapping.source_context is None or mapping.target_context is None:
            raise FilterError("Minimal filtering needs a mapping bound to both contexts")
        elements = list(mapping)
        kept = [
            element
            for element in elements
            if not any(_implies(other, element) for other in elements)
        ]
        return ContextMapping.from_elements(
            kept,
            source_context=mapping.source_context,
            target_context=mapping.target_context,
        )
