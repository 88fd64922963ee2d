from __future__ import annotations

from typing import TYPE_CHECKING

from smatch.adapters.list_context import ListContextLoader

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def test_list_loader_attaches_labels_to_a_file_root(
    write_text: Callable[[str, str], Path],
) -> None:
    path = write_text("colours.txt", "red\n\n  green \nblue\n")
    loader = ListContextLoader()

    context = loader.load_context(str(path))

    assert not loader.structured
    assert context.root is not None
    assert context.root.name == "colours"
    assert [child.name for child in context.root.children] == ["red", "green", "blue"]
