"""Result types produced by the dispatcher and the recoverable filter stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from smatch.domain.errors import FilterError
    from smatch.domain.mapping import ContextMapping


class CommandOutcome(StrEnum):
    COMPLETED = "completed"
    USAGE_ERROR = "usage-error"
    CONFIGURATION_ERROR = "configuration-error"
    CAPABILITY_UNAVAILABLE = "capability-unavailable"
    STAGE_FAILED = "stage-failed"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES: dict[CommandOutcome, int] = {
    CommandOutcome.COMPLETED: 0,
    # a missing capability skips the command, it does not fail the process
    CommandOutcome.CAPABILITY_UNAVAILABLE: 0,
    CommandOutcome.USAGE_ERROR: 2,
    CommandOutcome.CONFIGURATION_ERROR: 1,
    CommandOutcome.STAGE_FAILED: 1,
}


@dataclass(frozen=True, slots=True)
class FilterOutcome:
    """Mapping to continue with after the filter stage.

    ``applied`` is false when filtering was skipped; ``error`` then holds the
    failure that caused the skip, if any.
    """

    mapping: ContextMapping
    applied: bool
    error: FilterError | None = None

    @classmethod
    def filtered(cls, mapping: ContextMapping) -> FilterOutcome:
        return cls(mapping=mapping, applied=True)

    @classmethod
    def skipped(cls, mapping: ContextMapping, error: FilterError | None = None) -> FilterOutcome:
        return cls(mapping=mapping, applied=False, error=error)
