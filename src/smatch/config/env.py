"""Environment-driven settings that apply before any configuration file is read."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "SMATCH_LOG_LEVEL"


def log_level_from_env(default: int = logging.INFO) -> int:
    """Return the logging level named by ``SMATCH_LOG_LEVEL`` or ``default``.

    Accepts level names in any case or a numeric level; anything else falls
    back to ``default``.
    """

    raw = os.getenv(LOG_LEVEL_ENV_VAR)
    if raw is None or not raw.strip():
        return default
    candidate = raw.strip()
    if candidate.isdigit():
        return int(candidate)
    level = logging.getLevelName(candidate.upper())
    return level if isinstance(level, int) else default
