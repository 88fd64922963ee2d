"""Labeled concept trees consumed and produced by the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .errors import AmbiguousPathError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

PATH_SEPARATOR = "/"
PATH_ESCAPE = "\\"


def escape_name(name: str) -> str:
    return name.replace(PATH_ESCAPE, PATH_ESCAPE * 2).replace(
        PATH_SEPARATOR, PATH_ESCAPE + PATH_SEPARATOR
    )


def join_path(names: Iterable[str]) -> str:
    """Join node names with ``/``, escaping ``/`` and ``\\`` inside names."""

    return PATH_SEPARATOR.join(escape_name(name) for name in names)


def split_path(text: str) -> tuple[str, ...]:
    """Inverse of ``join_path``."""

    parts: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for char in chars:
        if char == PATH_ESCAPE:
            current.append(next(chars, PATH_ESCAPE))
        elif char == PATH_SEPARATOR:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return tuple(parts)


@dataclass(eq=False, kw_only=True)
class Node:
    """One labeled node. Nodes compare by identity."""

    name: str
    parent: Node | None = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)
    annotations: dict[str, Any] = field(default_factory=dict, repr=False)

    def create_child(self, name: str) -> Node:
        child = Node(name=name, parent=self)
        self.children.append(child)
        return child

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def ancestors(self) -> Iterator[Node]:
        """Yield the ancestors of this node, nearest first."""

        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator[Node]:
        """Yield all descendants in pre-order."""

        for child in self.children:
            yield child
            yield from child.descendants()

    def is_ancestor_of(self, other: Node) -> bool:
        return any(ancestor is self for ancestor in other.ancestors())

    @property
    def path(self) -> tuple[str, ...]:
        names = [self.name, *(ancestor.name for ancestor in self.ancestors())]
        return tuple(reversed(names))

    def path_string(self) -> str:
        return join_path(self.path)


@dataclass(eq=False, kw_only=True)
class Context:
    """A tree with at most one root.

    ``preprocessed`` is set by offline preprocessing; matchers that rely on
    derived annotations check it instead of probing individual nodes.
    """

    name: str | None = None
    root: Node | None = None
    preprocessed: bool = False

    def create_root(self, name: str) -> Node:
        if self.root is not None:
            raise ValueError("context already has a root")
        self.root = Node(name=name)
        return self.root

    def nodes(self) -> Iterator[Node]:
        """Yield every node in pre-order, root first."""

        if self.root is None:
            return
        yield self.root
        yield from self.root.descendants()

    def __len__(self) -> int:
        return sum(1 for _ in self.nodes())

    def find(self, path: str | tuple[str, ...]) -> Node | None:
        """Return the node at ``path`` (``a/b/c`` or a tuple of names) if present.

        Raises ``AmbiguousPathError`` when siblings on the path share a name.
        """

        parts = split_path(path) if isinstance(path, str) else path
        if self.root is None or not parts or parts[0] != self.root.name:
            return None
        node = self.root
        for part in parts[1:]:
            matches = [child for child in node.children if child.name == part]
            if not matches:
                return None
            if len(matches) > 1:
                raise AmbiguousPathError(f"Path {join_path(parts)!r} matches several nodes")
            node = matches[0]
        return node

