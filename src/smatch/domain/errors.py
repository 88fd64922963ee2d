"""Error taxonomy shared by the dispatcher, the manager and stage components."""

from __future__ import annotations


class SMatchError(RuntimeError):
    """Base class for every error raised by smatch."""


class UsageError(SMatchError):
    """Raised for unknown commands or too few positional arguments."""


class CapabilityUnavailableError(SMatchError):
    """Raised when the resolved manager lacks a capability a recipe needs."""

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


class StageError(SMatchError):
    """Failure inside one pipeline stage."""

    stage: str = "stage"


class LoadError(StageError):
    stage = "load"


class ProcessingError(StageError):
    stage = "offline"


class MatchingError(StageError):
    stage = "online"


class FilterError(StageError):
    stage = "filter"


class RenderError(StageError):
    stage = "render"


class AmbiguousPathError(SMatchError, LookupError):
    """Raised when a node path matches more than one node."""
