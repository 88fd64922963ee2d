from __future__ import annotations

import logging

import pytest

from smatch.domain.capabilities import Capability
from smatch.domain.errors import FilterError
from smatch.pipeline import filter_with_fallback
from tests.support.pipeline import StageRecorder, build_manager, make_context


def _matched(recorder: StageRecorder):
    manager = build_manager(recorder)
    return manager, manager.online(make_context("a", "cat"), make_context("b", "cat"))


def test_filter_applied(recorder: StageRecorder) -> None:
    manager, mapping = _matched(recorder)

    outcome = filter_with_fallback(manager, mapping)

    assert outcome.applied
    assert outcome.error is None
    assert outcome.mapping is recorder.filtered
    assert len(outcome.mapping) == 1


def test_filter_error_keeps_input(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    recorder = StageRecorder()
    manager = build_manager(recorder, failing_filter=True)
    mapping = manager.online(make_context("a", "cat"), make_context("b", "cat"))

    outcome = filter_with_fallback(manager, mapping)

    assert not outcome.applied
    assert outcome.mapping is mapping
    assert isinstance(outcome.error, FilterError)
    assert "No filtering was performed (to see why, set logging at DEBUG level)" in caplog.messages


def test_missing_filter_is_skipped(recorder: StageRecorder) -> None:
    manager = build_manager(recorder, capabilities=(Capability.ONLINE,))
    mapping = manager.online(make_context("a"), make_context("b"))

    outcome = filter_with_fallback(manager, mapping)

    assert not outcome.applied
    assert outcome.error is None
    assert outcome.mapping is mapping
    assert recorder.names() == ["online"]
