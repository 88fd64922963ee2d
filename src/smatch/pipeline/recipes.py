"""Stage sequences run by each command once arguments and capabilities are checked."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from smatch.domain.capabilities import Capability
from smatch.domain.errors import FilterError

from .outcome import FilterOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence

    from smatch.domain.mapping import ContextMapping
    from smatch.manager import MatchManager

log = getLogger(__name__)


def convert_context(manager: MatchManager, arguments: Sequence[str]) -> None:
    input_file, output_file = arguments[:2]
    context = manager.load_context(input_file)
    manager.render_context(context, output_file)


def convert_mapping(manager: MatchManager, arguments: Sequence[str]) -> None:
    source_file, target_file, input_file, output_file = arguments[:4]
    source = manager.load_context(source_file)
    target = manager.load_context(target_file)
    mapping = manager.load_mapping(source, target, input_file)
    manager.render_mapping(mapping, output_file)


def preprocess_context(manager: MatchManager, arguments: Sequence[str]) -> None:
    input_file, output_file = arguments[:2]
    context = manager.load_context(input_file)
    manager.offline(context)
    manager.render_context(context, output_file)


def match_contexts(manager: MatchManager, arguments: Sequence[str]) -> None:
    source_file, target_file, output_file = arguments[:3]
    source = manager.load_context(source_file)
    target = manager.load_context(target_file)
    mapping = manager.online(source, target)
    manager.render_mapping(mapping, output_file)


def filter_mapping(manager: MatchManager, arguments: Sequence[str]) -> None:
    source_file, target_file, input_file, output_file = arguments[:4]
    source = manager.load_context(source_file)
    target = manager.load_context(target_file)
    mapping = manager.load_mapping(source, target, input_file)
    filtered = manager.filter_mapping(mapping)
    manager.render_mapping(filtered, output_file)


def filter_with_fallback(manager: MatchManager, mapping: ContextMapping) -> FilterOutcome:
    """Filter ``mapping``; on ``FilterError`` continue with it unfiltered.

    This is the only stage whose failure does not end the command.
    """

    if not manager.supports(Capability.FILTER):
        log.info("No mapping filter configured, keeping the unfiltered mapping")
        return FilterOutcome.skipped(mapping)
    try:
        return FilterOutcome.filtered(manager.filter_mapping(mapping))
    except FilterError as exc:
        log.info("No filtering was performed (to see why, set logging at DEBUG level)")
        log.debug("Reason:", exc_info=exc)
        return FilterOutcome.skipped(mapping, error=exc)


def run_all_steps(manager: MatchManager, arguments: Sequence[str]) -> None:
    source_file, target_file, output_file = arguments[:3]
    source = manager.load_context(source_file)
    manager.offline(source)
    target = manager.load_context(target_file)
    manager.offline(target)
    mapping = manager.online(source, target)
    outcome = filter_with_fallback(manager, mapping)
    manager.render_mapping(outcome.mapping, output_file)
