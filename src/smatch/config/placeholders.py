"""``${key}`` placeholder substitution for configuration values."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Any

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

_PLACEHOLDER = re.compile(r"\$(\$)?\{([^}]+)\}")


def _substitute(
    text: str,
    overrides: Mapping[str, str],
    env: Mapping[str, str],
    missing: list[str],
) -> str:
    def _replace(match: re.Match[str]) -> str:
        escaped, key = match.group(1), match.group(2).strip()
        if escaped:
            return "${" + match.group(2) + "}"
        if key in overrides:
            return overrides[key]
        if key in env:
            return env[key]
        missing.append(key)
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, text)


def _raise_missing(missing: list[str]) -> None:
    if missing:
        missing_list = ", ".join(sorted(set(missing)))
        raise MissingConfigurationError(f"Unresolved configuration placeholders: {missing_list}")


def substitute_placeholders(
    text: str,
    overrides: Mapping[str, str],
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Replace ``${key}`` with the override value, falling back to the environment.

    ``$${key}`` yields the literal ``${key}``. All unresolved keys are reported
    together in a single error.
    """

    missing: list[str] = []
    result = _substitute(text, overrides, os.environ if environ is None else environ, missing)
    _raise_missing(missing)
    return result


def resolve_placeholders(
    document: Mapping[str, Any],
    overrides: Mapping[str, str],
    *,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Substitute placeholders in every string value of a parsed document.

    Keys and non-string values are left alone, and substituted text is never
    parsed again.
    """

    env = os.environ if environ is None else environ
    missing: list[str] = []

    def _walk(value: Any) -> Any:
        if isinstance(value, str):
            return _substitute(value, overrides, env, missing)
        if isinstance(value, dict):
            return {key: _walk(item) for key, item in value.items()}
        if isinstance(value, list):
            return [_walk(item) for item in value]
        return value

    resolved = {key: _walk(value) for key, value in document.items()}
    _raise_missing(missing)
    return resolved
