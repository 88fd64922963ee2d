"""Command dispatch table: argument validation, manager resolution and recipe execution."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import Final

from smatch.app import create_match_manager
from smatch.config.errors import ConfigurationError
from smatch.config.locator import ConfigLocator
from smatch.domain.capabilities import Capability
from smatch.domain.errors import CapabilityUnavailableError, StageError, UsageError
from smatch.manager import MatchManager
from smatch.wordnet.cache import WordNetCacheError, create_wordnet_caches

from . import recipes
from .outcome import CommandOutcome

log = getLogger(__name__)

Recipe = Callable[[MatchManager, Sequence[str]], None]
ManagerFactory = Callable[[ConfigLocator, Mapping[str, str]], MatchManager]
CacheBuilder = Callable[..., None]

WORDNET_CACHE_ARGUMENTS: Final[int] = 9


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """One command with its positional arguments and configuration options."""

    command: str | None
    arguments: tuple[str, ...] = ()
    locator: ConfigLocator = field(default_factory=ConfigLocator.default)
    overrides: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RecipeSpec:
    run: Recipe
    requires: frozenset[Capability]
    structured_loading: bool = False
    unavailable_hint: str = ""


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Arity rules and recipes for one command.

    ``recipes`` is keyed by positional argument count. Without ``exact_arity``
    the single recipe registered at ``min_arguments`` also accepts surplus
    arguments, which are ignored.
    """

    name: str
    min_arguments: int
    synopsis: tuple[tuple[str, str], ...]
    recipes: Mapping[int, RecipeSpec] = field(default_factory=dict)
    exact_arity: bool = False
    uses_manager: bool = True

    def select(self, count: int) -> RecipeSpec | None:
        """Validate ``count`` and return the recipe to run (``None`` for standalone commands)."""

        if count < self.min_arguments:
            raise UsageError(f"Not enough arguments for {self.name} command.")
        if not self.uses_manager:
            return None
        if self.exact_arity:
            recipe = self.recipes.get(count)
            if recipe is None:
                accepted = " or ".join(str(arity) for arity in sorted(self.recipes))
                raise UsageError(
                    f"The {self.name} command takes {accepted} arguments, got {count}."
                )
            return recipe
        return self.recipes[self.min_arguments]


_STRUCTURED_HINT = "use context loaders supporting structured loading"

COMMANDS: Final[dict[str, CommandSpec]] = {
    command.name: command
    for command in (
        CommandSpec(
            name="wntoflat",
            min_arguments=WORDNET_CACHE_ARGUMENTS,
            synopsis=(
                (
                    "wntoflat <properties> <files...>",
                    "create cached WordNet files for fast matching",
                ),
            ),
            uses_manager=False,
        ),
        CommandSpec(
            name="convert",
            min_arguments=2,
            synopsis=(
                ("convert <input> <output>", "read input file and write it into output file"),
                (
                    "convert <source> <target> <input> <output>",
                    "read source, target and input mapping, and write the output mapping",
                ),
            ),
            recipes={
                2: RecipeSpec(
                    run=recipes.convert_context,
                    requires=frozenset({Capability.LOAD_CONTEXT, Capability.RENDER_CONTEXT}),
                    unavailable_hint=(
                        "To convert a context, configure a context loader and renderer."
                    ),
                ),
                4: RecipeSpec(
                    run=recipes.convert_mapping,
                    requires=frozenset(
                        {
                            Capability.LOAD_CONTEXT,
                            Capability.LOAD_MAPPING,
                            Capability.RENDER_MAPPING,
                        }
                    ),
                    structured_loading=True,
                    unavailable_hint=f"To convert a mapping, {_STRUCTURED_HINT}.",
                ),
            },
            exact_arity=True,
        ),
        CommandSpec(
            name="offline",
            min_arguments=2,
            synopsis=(
                (
                    "offline <input> <output>",
                    "read input file, preprocess it and write it into output file",
                ),
            ),
            recipes={
                2: RecipeSpec(
                    run=recipes.preprocess_context,
                    requires=frozenset(
                        {Capability.LOAD_CONTEXT, Capability.OFFLINE, Capability.RENDER_CONTEXT}
                    ),
                    structured_loading=True,
                    unavailable_hint=(
                        "To preprocess a context, use context loaders and renderers "
                        "supporting structured contexts."
                    ),
                ),
            },
        ),
        CommandSpec(
            name="online",
            min_arguments=3,
            synopsis=(
                (
                    "online <source> <target> <output>",
                    "read source and target files, run matching and write the output file",
                ),
            ),
            recipes={
                3: RecipeSpec(
                    run=recipes.match_contexts,
                    requires=frozenset(
                        {Capability.LOAD_CONTEXT, Capability.ONLINE, Capability.RENDER_MAPPING}
                    ),
                    structured_loading=True,
                    unavailable_hint=f"To match contexts, {_STRUCTURED_HINT}.",
                ),
            },
        ),
        CommandSpec(
            name="filter",
            min_arguments=4,
            synopsis=(
                (
                    "filter <source> <target> <input> <output>",
                    "read source and target files, input mapping, run filtering "
                    "and write the output mapping",
                ),
            ),
            recipes={
                4: RecipeSpec(
                    run=recipes.filter_mapping,
                    requires=frozenset(
                        {
                            Capability.LOAD_CONTEXT,
                            Capability.LOAD_MAPPING,
                            Capability.FILTER,
                            Capability.RENDER_MAPPING,
                        }
                    ),
                    structured_loading=True,
                    unavailable_hint=f"To filter a mapping, {_STRUCTURED_HINT}.",
                ),
            },
        ),
        CommandSpec(
            name="allsteps",
            min_arguments=3,
            synopsis=(
                (
                    "allsteps <source> <target> <output>",
                    "read source and target files, preprocess, match, filter "
                    "and write the output mapping",
                ),
            ),
            recipes={
                3: RecipeSpec(
                    run=recipes.run_all_steps,
                    requires=frozenset(
                        {
                            Capability.LOAD_CONTEXT,
                            Capability.OFFLINE,
                            Capability.ONLINE,
                            Capability.RENDER_MAPPING,
                        }
                    ),
                    structured_loading=True,
                    unavailable_hint=f"To run all steps, {_STRUCTURED_HINT}.",
                ),
            },
        ),
    )
}


def _usage_text() -> str:
    lines = ["Usage: smatch <command> <arguments> [options]", " Commands:"]
    entries = [entry for command in COMMANDS.values() for entry in command.synopsis]
    width = max(len(form) for form, _ in entries) + 1
    lines.extend(f" {form.ljust(width)} {description}" for form, description in entries)
    lines.extend(
        [
            "",
            " Options:",
            f" {'-config=file.toml'.ljust(width)} read configuration from file.toml "
            "(or resource:<name>, or an http(s) URL) instead of the embedded default",
            f" {'-Dkey=value'.ljust(width)} supply values to ${{key}} placeholders "
            "in the configuration",
        ]
    )
    return "\n".join(lines) + "\n"


USAGE: Final[str] = _usage_text()


def _default_manager_factory(locator: ConfigLocator, overrides: Mapping[str, str]) -> MatchManager:
    return create_match_manager(locator, overrides)


def dispatch(
    invocation: CommandInvocation,
    *,
    manager_factory: ManagerFactory = _default_manager_factory,
    cache_builder: CacheBuilder = create_wordnet_caches,
) -> CommandOutcome:
    """Run one command. Every failure category is logged and reported as an outcome."""

    if invocation.command is None:
        log.info(USAGE)
        return CommandOutcome.COMPLETED

    command = COMMANDS.get(invocation.command)
    if command is None:
        log.error("Unrecognized command: %s", invocation.command)
        log.info(USAGE)
        return CommandOutcome.USAGE_ERROR

    arguments = invocation.arguments
    try:
        recipe = command.select(len(arguments))
    except UsageError as exc:
        log.error("%s", exc)
        log.info(USAGE)
        return CommandOutcome.USAGE_ERROR

    if not command.exact_arity and len(arguments) > command.min_arguments:
        log.warning(
            "Ignoring surplus arguments for %s command: %s",
            command.name,
            " ".join(arguments[command.min_arguments :]),
        )

    if recipe is None:
        return _build_wordnet_caches(arguments[:WORDNET_CACHE_ARGUMENTS], cache_builder)

    try:
        manager = manager_factory(invocation.locator, invocation.overrides)
    except ConfigurationError as exc:
        log.error("Cannot create match manager: %s", exc)
        return CommandOutcome.CONFIGURATION_ERROR

    missing = manager.missing(recipe.requires, structured_loading=recipe.structured_loading)
    if missing:
        log.warning("%s Missing: %s", recipe.unavailable_hint, ", ".join(missing))
        return CommandOutcome.CAPABILITY_UNAVAILABLE

    try:
        recipe.run(manager, arguments)
    except CapabilityUnavailableError as exc:
        log.warning("%s", exc)
        return CommandOutcome.CAPABILITY_UNAVAILABLE
    except StageError as exc:
        log.error("The %s command failed in the %s stage: %s", command.name, exc.stage, exc)
        log.debug("Stage failure details", exc_info=exc)
        return CommandOutcome.STAGE_FAILED

    log.info("The %s command completed", command.name)
    return CommandOutcome.COMPLETED


def _build_wordnet_caches(arguments: Sequence[str], cache_builder: CacheBuilder) -> CommandOutcome:
    try:
        cache_builder(*arguments)
    except (WordNetCacheError, OSError) as exc:
        log.error("Cannot create WordNet caches: %s", exc)
        return CommandOutcome.STAGE_FAILED
    log.info("WordNet caches created")
    return CommandOutcome.COMPLETED
