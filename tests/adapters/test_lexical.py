from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from smatch.adapters.lexical import (
    CONCEPT,
    LABEL_TOKENS,
    LexicalMatcher,
    LexicalPreprocessor,
    singularize,
)
from smatch.domain.context import Context
from smatch.domain.errors import MatchingError, ProcessingError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _vehicles(*labels: str) -> Context:
    context = Context(name="vehicles")
    node = context.create_root("Vehicles")
    for label in labels:
        node = node.create_child(label)
    return context


@pytest.mark.parametrize(
    ("word", "expected"),
    [("cars", "car"), ("categories", "category"), ("class", "class"), ("bus", "bus")],
)
def test_singularize(word: str, expected: str) -> None:
    assert singularize(word) == expected


def test_tokens_drop_stop_words_and_plurals() -> None:
    preprocessor = LexicalPreprocessor()

    assert preprocessor.tokens("Used Cars and Trucks") == frozenset({"used", "car", "truck"})
    assert LexicalPreprocessor(stop_words=["used"]).tokens("Used Cars and Trucks") == frozenset(
        {"car", "and", "truck"}
    )


def test_synonym_table_folds_tokens(write_text: Callable[[str, str], Path]) -> None:
    path = write_text("synonyms.txt", "# canonical then synonyms\ncar\tautomobile\tauto\n")

    preprocessor = LexicalPreprocessor(synonyms_file=str(path))

    assert preprocessor.tokens("Automobiles") == frozenset({"car"})


def test_preprocess_annotates_path_concepts() -> None:
    context = _vehicles("Cars", "Used")

    LexicalPreprocessor().preprocess(context)

    used = context.find("Vehicles/Cars/Used")
    assert used is not None
    assert context.preprocessed
    assert used.annotations[LABEL_TOKENS] == frozenset({"used"})
    assert used.annotations[CONCEPT] == frozenset({"vehicle", "car", "used"})


def test_preprocess_rejects_empty_context() -> None:
    with pytest.raises(ProcessingError):
        LexicalPreprocessor().preprocess(Context())


def test_matcher_relates_concepts_by_inclusion(write_text: Callable[[str, str], Path]) -> None:
    preprocessor = LexicalPreprocessor(
        synonyms_file=str(write_text("synonyms.txt", "car\tautomobile\n"))
    )
    source = _vehicles("Cars")
    target = _vehicles("Automobiles", "Used")
    preprocessor.preprocess(source)
    preprocessor.preprocess(target)

    mapping = LexicalMatcher().match(source, target)

    relations = {element.describe() for element in mapping}
    assert relations == {
        "Vehicles\t=\tVehicles",
        "Vehicles\t>\tVehicles/Automobiles",
        "Vehicles\t>\tVehicles/Automobiles/Used",
        "Vehicles/Cars\t<\tVehicles",
        "Vehicles/Cars\t=\tVehicles/Automobiles",
        "Vehicles/Cars\t>\tVehicles/Automobiles/Used",
    }
    assert mapping.source_context is source
    assert mapping.target_context is target


def test_matcher_requires_preprocessed_contexts() -> None:
    source = _vehicles("Cars")
    LexicalPreprocessor().preprocess(source)

    with pytest.raises(MatchingError, match="has not been preprocessed"):
        LexicalMatcher().match(source, _vehicles("Cars"))


def test_unrelated_concepts_produce_no_element() -> None:
    preprocessor = LexicalPreprocessor()
    source = Context(name="a")
    source.create_root("Cats")
    target = Context(name="b")
    target.create_root("Fish")
    preprocessor.preprocess(source)
    preprocessor.preprocess(target)

    assert len(LexicalMatcher().match(source, target)) == 0
