"""File helpers shared by the file-based loaders and renderers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from smatch.domain.errors import LoadError, RenderError

if TYPE_CHECKING:
    from collections.abc import Iterator


def read_lines(locator: str, *, encoding: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs without trailing newlines."""

    path = Path(locator)
    try:
        with path.open(encoding=encoding) as handle:
            for number, line in enumerate(handle, start=1):
                yield number, line.rstrip("\r\n")
    except FileNotFoundError as exc:
        raise LoadError(f"Input file not found: {locator}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Cannot read {locator}: {exc}") from exc


def write_lines(locator: str, lines: list[str], *, encoding: str) -> None:
    path = Path(locator)
    try:
        if path.parent != Path():
            path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding=encoding) as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
    except OSError as exc:
        raise RenderError(f"Cannot write {locator}: {exc}") from exc
