"""Flat label lists: every line becomes a child of a root named after the file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from smatch.domain.capabilities import Capability
from smatch.domain.context import Context
from smatch.registry import register_component

from ._files import read_lines


@register_component(Capability.LOAD_CONTEXT, "list")
@dataclass(slots=True)
class ListContextLoader:
    """Unstructured loader, only usable for single-context conversion."""

    encoding: str = "utf-8"
    structured: bool = False

    def load_context(self, locator: str) -> Context:
        name = Path(locator).stem
        context = Context(name=name)
        root = context.create_root(name)
        for _, line in read_lines(locator, encoding=self.encoding):
            label = line.strip()
            if label:
                root.create_child(label)
        return context
