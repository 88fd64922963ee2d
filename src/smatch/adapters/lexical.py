"""Lexical preprocessing and matching based on normalized label tokens.

Each node receives two annotations during preprocessing:

``label_tokens``
    normalized tokens of the node's own label
``concept``
    the union of the label tokens of the node and all its ancestors, which
    stands for the concept at the node

Matching compares concepts by set inclusion. A node whose concept strictly
contains another's is more specific, hence *less general*.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from smatch.domain.capabilities import Capability
from smatch.domain.errors import MatchingError, ProcessingError
from smatch.domain.mapping import ContextMapping, Relation
from smatch.registry import register_component

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smatch.domain.context import Context, Node

log = getLogger(__name__)

LABEL_TOKENS: Final[str] = "label_tokens"
CONCEPT: Final[str] = "concept"

DEFAULT_STOP_WORDS: Final[frozenset[str]] = frozenset(
    {"a", "an", "and", "at", "for", "in", "of", "on", "or", "the", "to", "with"}
)
_TOKEN = re.compile(r"[a-z0-9]+")


def singularize(token: str) -> str:
    if len(token) > 4 and token.endswith("ies"):
        return token[:-3] + "y"
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def read_synonyms(path: str | Path, *, encoding: str = "utf-8") -> dict[str, str]:
    """Read ``canonical<TAB>synonym...`` lines into a synonym → canonical map."""

    table: dict[str, str] = {}
    with Path(path).open(encoding=encoding) as handle:
        for line in handle:
            if not line.strip() or line.startswith("#"):
                continue
            words = [singularize(word.strip().lower()) for word in line.split("\t") if word.strip()]
            canonical, *synonyms = words
            for synonym in synonyms:
                table[synonym] = canonical
    return table


@register_component(Capability.OFFLINE, "lexical")
class LexicalPreprocessor:
    """Annotates nodes with normalized tokens; optionally folds synonyms."""

    def __init__(
        self,
        *,
        stop_words: Iterable[str] | None = None,
        synonyms_file: str | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.stop_words = (
            DEFAULT_STOP_WORDS if stop_words is None else frozenset(w.lower() for w in stop_words)
        )
        self.synonyms = read_synonyms(synonyms_file, encoding=encoding) if synonyms_file else {}

    def tokens(self, label: str) -> frozenset[str]:
        tokens: set[str] = set()
        for raw in _TOKEN.findall(label.lower()):
            if raw in self.stop_words:
                continue
            token = singularize(raw)
            tokens.add(self.synonyms.get(token, token))
        return frozenset(tokens)

    def preprocess(self, context: Context) -> None:
        if context.root is None:
            raise ProcessingError("Cannot preprocess an empty context")
        for node in context.nodes():
            label_tokens = self.tokens(node.name)
            parent_concept: frozenset[str] = (
                node.parent.annotations[CONCEPT] if node.parent is not None else frozenset()
            )
            node.annotations[LABEL_TOKENS] = label_tokens
            node.annotations[CONCEPT] = parent_concept | label_tokens
        context.preprocessed = True
        log.debug("Preprocessed context %s", context.name)


def _relation(source: frozenset[str], target: frozenset[str]) -> Relation | None:
    if not source or not target:
        return None
    if source == target:
        return Relation.EQUIVALENCE
    if source > target:
        return Relation.LESS_GENERAL
    if source < target:
        return Relation.MORE_GENERAL
    return None


def _concept(node: Node) -> frozenset[str]:
    return node.annotations.get(CONCEPT, frozenset())


@register_component(Capability.ONLINE, "lexical")
@dataclass(slots=True)
class LexicalMatcher:
    def match(self, source: Context, target: Context) -> ContextMapping:
        for context in (source, target):
            if not context.preprocessed:
                raise MatchingError(
                    f"Context {context.name or '<unnamed>'} has not been preprocessed"
                )
        mapping = ContextMapping(source_context=source, target_context=target)
        target_nodes = list(target.nodes())
        for source_node in source.nodes():
            source_concept = _concept(source_node)
            for target_node in target_nodes:
                relation = _relation(source_concept, _concept(target_node))
                if relation is not None:
                    mapping.set_relation(source_node, target_node, relation)
        return mapping
