"""Command-driven pipeline: dispatch table, stage recipes and outcomes."""

from __future__ import annotations

from .commands import COMMANDS, USAGE, CommandInvocation, CommandSpec, RecipeSpec, dispatch
from .outcome import CommandOutcome, FilterOutcome
from .recipes import filter_with_fallback

__all__ = [
    "COMMANDS",
    "USAGE",
    "CommandInvocation",
    "CommandOutcome",
    "CommandSpec",
    "FilterOutcome",
    "RecipeSpec",
    "dispatch",
    "filter_with_fallback",
]
