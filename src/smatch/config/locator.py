"""Configuration locators: the embedded default, a file or a remote URL."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from logging import getLogger
from pathlib import Path
from typing import Final

import httpx

from .errors import ConfigurationError

log = getLogger(__name__)

RESOURCE_DIR: Final[str] = "resources"
DEFAULT_CONFIG_RESOURCE: Final[str] = f"{RESOURCE_DIR}/s-match.toml"
RESOURCE_SCHEME: Final[str] = "resource:"
_REMOTE_SCHEMES: Final[tuple[str, ...]] = ("http://", "https://")
_DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ConfigLocator:
    """Where to read the manager configuration from.

    ``name`` of ``None`` selects the configuration embedded in the package;
    ``resource:<file>`` selects another bundled configuration, ``http(s)://``
    URLs are fetched and anything else is a filesystem path.
    """

    name: str | None = None

    @classmethod
    def default(cls) -> ConfigLocator:
        return cls()

    @property
    def is_default(self) -> bool:
        return self.name is None

    @property
    def is_resource(self) -> bool:
        return self.name is not None and self.name.startswith(RESOURCE_SCHEME)

    @property
    def is_remote(self) -> bool:
        return self.name is not None and self.name.startswith(_REMOTE_SCHEMES)

    def describe(self) -> str:
        return DEFAULT_CONFIG_RESOURCE if self.name is None else self.name

    def read_text(self) -> str:
        if self.name is None:
            log.info("Using resource config file: %s", DEFAULT_CONFIG_RESOURCE)
            return _read_resource(DEFAULT_CONFIG_RESOURCE)
        log.info("Using config file: %s", self.name)
        if self.is_resource:
            return _read_resource(f"{RESOURCE_DIR}/{self.name.removeprefix(RESOURCE_SCHEME)}")
        if self.is_remote:
            return _read_remote(self.name)
        return _read_file(Path(self.name))


def _read_resource(name: str) -> str:
    try:
        return resources.files("smatch").joinpath(name).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Embedded configuration {name} is unavailable") from exc


def _read_file(path: Path) -> str:
    try:
        return path.expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc


def _read_remote(url: str) -> str:
    try:
        response = httpx.get(url, timeout=_DEFAULT_TIMEOUT_SECONDS, follow_redirects=True)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise ConfigurationError(f"Cannot fetch configuration from {url}: {exc}") from exc
    return response.text
