from __future__ import annotations

import pytest

from smatch.config.errors import MissingConfigurationError
from smatch.config.placeholders import resolve_placeholders, substitute_placeholders


def test_overrides_take_precedence_over_environment() -> None:
    text = 'encoding = "${encoding}"\npath = "${home}/words"'

    result = substitute_placeholders(
        text,
        {"encoding": "latin-1"},
        environ={"encoding": "utf-8", "home": "/data"},
    )

    assert result == 'encoding = "latin-1"\npath = "/data/words"'


def test_escaped_placeholder_is_kept_literally() -> None:
    assert substitute_placeholders("a = '$${key}'", {}, environ={}) == "a = '${key}'"


def test_unresolved_placeholders_are_reported_together() -> None:
    with pytest.raises(MissingConfigurationError, match="alpha, beta"):
        substitute_placeholders("${beta} ${alpha} ${beta}", {}, environ={})


def test_resolve_placeholders_walks_nested_values() -> None:
    document = {
        "manager": {"name": "${name}"},
        "matcher": {"component": "lexical", "options": {"weights": [1, "${w}"], "strict": True}},
    }

    resolved = resolve_placeholders(document, {"name": "n", "w": "2"}, environ={})

    assert resolved == {
        "manager": {"name": "n"},
        "matcher": {"component": "lexical", "options": {"weights": [1, "2"], "strict": True}},
    }
    assert document["manager"] == {"name": "${name}"}


def test_resolve_placeholders_reports_every_missing_key() -> None:
    document = {"a": "${beta}", "b": ["${alpha}"], "c": {"d": "$${gamma}"}}

    with pytest.raises(MissingConfigurationError, match=r"placeholders: alpha, beta$"):
        resolve_placeholders(document, {}, environ={})
