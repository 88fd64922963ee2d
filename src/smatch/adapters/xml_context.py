"""XML context format: nested ``<node name="...">`` elements under ``<context>``."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from smatch.domain.capabilities import Capability
from smatch.domain.context import Context, Node
from smatch.domain.errors import LoadError, RenderError
from smatch.registry import register_component

CONTEXT_TAG = "context"
NODE_TAG = "node"


def _attach_children(element: ET.Element, node: Node, locator: str) -> None:
    for child_element in element.findall(NODE_TAG):
        child = node.create_child(_node_name(child_element, locator))
        _attach_children(child_element, child, locator)


def _node_name(element: ET.Element, locator: str) -> str:
    name = (element.get("name") or "").strip()
    if not name:
        raise LoadError(f"{locator}: <{NODE_TAG}> element without a name")
    return name


@register_component(Capability.LOAD_CONTEXT, "xml")
@dataclass(slots=True)
class XmlContextLoader:
    structured: bool = True

    def load_context(self, locator: str) -> Context:
        try:
            document = ET.parse(locator)
        except FileNotFoundError as exc:
            raise LoadError(f"Input file not found: {locator}") from exc
        except ET.ParseError as exc:
            raise LoadError(f"Malformed XML in {locator}: {exc}") from exc

        element = document.getroot()
        if element.tag != CONTEXT_TAG:
            raise LoadError(f"{locator}: expected <{CONTEXT_TAG}> root, found <{element.tag}>")
        context = Context(name=element.get("name") or Path(locator).stem)
        top_level = element.findall(NODE_TAG)
        if len(top_level) > 1:
            raise LoadError(f"{locator}: a context has at most one root node")
        if top_level:
            root = context.create_root(_node_name(top_level[0], locator))
            _attach_children(top_level[0], root, locator)
        return context


def _build_element(parent: ET.Element, node: Node) -> None:
    element = ET.SubElement(parent, NODE_TAG, name=node.name)
    for child in node.children:
        _build_element(element, child)


@register_component(Capability.RENDER_CONTEXT, "xml")
@dataclass(slots=True)
class XmlContextRenderer:
    encoding: str = "utf-8"

    def render_context(self, context: Context, locator: str) -> None:
        element = ET.Element(CONTEXT_TAG)
        if context.name:
            element.set("name", context.name)
        if context.root is not None:
            _build_element(element, context.root)
        tree = ET.ElementTree(element)
        ET.indent(tree)
        try:
            tree.write(locator, encoding=self.encoding, xml_declaration=True)
        except OSError as exc:
            raise RenderError(f"Cannot write {locator}: {exc}") from exc
