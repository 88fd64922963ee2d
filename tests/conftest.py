from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from smatch.domain.capabilities import Capability
from smatch.registry import ComponentRegistry
from tests.support.pipeline import (
    FakeContextLoader,
    FakeContextRenderer,
    FakeFilter,
    FakeMappingLoader,
    FakeMappingRenderer,
    FakeMatcher,
    FakePreprocessor,
    StageRecorder,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def recorder() -> StageRecorder:
    return StageRecorder()


@pytest.fixture
def fake_registry(recorder: StageRecorder) -> ComponentRegistry:
    """Registry whose ``fake`` components all report into ``recorder``."""

    registry = ComponentRegistry()
    registry.register(
        Capability.LOAD_CONTEXT,
        "fake",
        lambda structured=True: FakeContextLoader(recorder, structured=structured),
    )
    registry.register(Capability.RENDER_CONTEXT, "fake", lambda: FakeContextRenderer(recorder))
    registry.register(Capability.LOAD_MAPPING, "fake", lambda: FakeMappingLoader(recorder))
    registry.register(Capability.RENDER_MAPPING, "fake", lambda: FakeMappingRenderer(recorder))
    registry.register(Capability.OFFLINE, "fake", lambda: FakePreprocessor(recorder))
    registry.register(Capability.ONLINE, "fake", lambda: FakeMatcher(recorder))
    registry.register(Capability.FILTER, "fake", lambda fail=False: FakeFilter(recorder, fail=fail))
    return registry


@pytest.fixture
def write_text(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
