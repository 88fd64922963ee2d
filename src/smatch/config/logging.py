"""Root logger setup for the command line."""

from __future__ import annotations

import logging

from .env import log_level_from_env


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    ``level`` defaults to ``SMATCH_LOG_LEVEL`` (INFO when unset). A second call
    is a no-op unless ``force`` is set.
    """

    logging.basicConfig(
        level=level if level is not None else log_level_from_env(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
