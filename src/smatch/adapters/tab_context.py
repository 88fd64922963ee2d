"""Tab-indented context format: one node per line, depth given by leading tabs."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from smatch.domain.capabilities import Capability
from smatch.domain.context import Context, Node
from smatch.domain.errors import LoadError
from smatch.registry import register_component

from ._files import read_lines, write_lines

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

INDENT = "\t"


def _depth(line: str) -> int:
    return len(line) - len(line.lstrip(INDENT))


@register_component(Capability.LOAD_CONTEXT, "tab")
@dataclass(slots=True)
class TabContextLoader:
    encoding: str = "utf-8"
    structured: bool = True

    def load_context(self, locator: str) -> Context:
        context = Context(name=Path(locator).stem)
        stack: list[Node] = []
        for number, line in read_lines(locator, encoding=self.encoding):
            label = line.strip()
            if not label:
                continue
            depth = _depth(line)
            if depth == 0:
                if context.root is not None:
                    raise LoadError(f"{locator}:{number}: second root {label!r}")
                stack = [context.create_root(label)]
                continue
            if not stack:
                raise LoadError(f"{locator}:{number}: indented node {label!r} before root")
            if depth > len(stack):
                raise LoadError(f"{locator}:{number}: indentation skips a level at {label!r}")
            child = stack[depth - 1].create_child(label)
            stack = [*stack[:depth], child]
        if context.root is None:
            log.warning("Context file %s contains no nodes", locator)
        return context


def _render_lines(node: Node, depth: int = 0) -> Iterator[str]:
    yield INDENT * depth + node.name
    for child in node.children:
        yield from _render_lines(child, depth + 1)


@register_component(Capability.RENDER_CONTEXT, "tab")
@dataclass(slots=True)
class TabContextRenderer:
    encoding: str = "utf-8"

    def render_context(self, context: Context, locator: str) -> None:
        lines = list(_render_lines(context.root)) if context.root is not None else []
        write_lines(locator, lines, encoding=self.encoding)
