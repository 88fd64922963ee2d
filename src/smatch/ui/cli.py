from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from smatch.config import ConfigLocator, configure_logging
from smatch.domain.errors import UsageError
from smatch.pipeline import USAGE, CommandInvocation, CommandOutcome, dispatch

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

HELP_COMMAND: Final[str] = "help"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smatch",
        description="Run the semantic matching pipeline",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show usage and exit")
    parser.add_argument(
        "-config",
        dest="config",
        metavar="FILE",
        help="Configuration file, resource:<name> or http(s) URL (default: embedded)",
    )
    parser.add_argument(
        "-D",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Value for a ${KEY} placeholder in the configuration",
    )
    parser.add_argument("positional", nargs="*", metavar="ARG", help="Command and its arguments")
    return parser


def _parse_overrides(pairs: Sequence[str]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key.strip():
            raise UsageError(f"Expected -Dkey=value, got -D{pair}")
        overrides[key.strip()] = value
    return overrides


def _parse_args(argv: Sequence[str]) -> CommandInvocation:
    """Parse ``-config=`` and ``-Dkey=value`` wherever they appear; the rest is positional."""

    args, unknown = _build_parser().parse_known_intermixed_args(list(argv))
    for option in unknown:
        log.warning("Ignoring unknown option %s", option)

    if args.config is not None and not args.config.strip():
        raise UsageError("The -config= option needs a file name")

    positional = list(args.positional)
    if args.help:
        positional = [HELP_COMMAND]
    command, *arguments = positional or [None]
    return CommandInvocation(
        command=command,
        arguments=tuple(arguments),
        locator=ConfigLocator(name=args.config.strip() if args.config else None),
        overrides=_parse_overrides(args.overrides),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        invocation = _parse_args(args_list)
    except UsageError:
        log.exception("CLI validation error")
        sys.exit(CommandOutcome.USAGE_ERROR.exit_code)

    if invocation.command == HELP_COMMAND:
        log.info(USAGE)
        return

    outcome = dispatch(invocation)
    if outcome.exit_code:
        sys.exit(outcome.exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
