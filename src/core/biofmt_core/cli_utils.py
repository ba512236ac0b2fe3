from __future__ import annotations

import argparse
import signal
import sys
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version

from biofmt_core.logger import VERBOSITY_LEVELS, logger, set_verbosity

DISTRIBUTION_NAME = "biofmt-utils"
ARGUMENT_ERROR_EXIT_CODE = -1
RUNTIME_ERROR_EXIT_CODE = 1


def about() -> str:
    """About banner, the distribution name and version."""
    try:
        return f"{DISTRIBUTION_NAME} {version(DISTRIBUTION_NAME)}"
    except PackageNotFoundError:
        return f"{DISTRIBUTION_NAME} (not installed)"


class ToolArgumentParser(argparse.ArgumentParser):
    """Argument parser shared by all tools.

    Adds ``-a/--about`` and ``--verbosity``, applies the verbosity to the tool logger
    and exits with code -1 on argument errors.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_argument("-a", "--about", action="version", version=about(), help="display about message and exit")
        self.add_argument(
            "--verbosity",
            choices=VERBOSITY_LEVELS,
            default="INFO",
            help="Verbosity: ERROR, WARNING, INFO, DEBUG",
        )

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ARGUMENT_ERROR_EXIT_CODE, f"{self.prog}: error: {message}\n")

    def parse_args(self, args=None, namespace=None):
        parsed = super().parse_args(args, namespace)
        set_verbosity(parsed.verbosity)
        return parsed


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def probability(value: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"must be in [0.0, 1.0], got {value}")
    return number


def string_list(value: str) -> list[str]:
    """Comma-separated list argument, e.g. ``rs1,rs2``; empty items are dropped."""
    return [item.strip() for item in value.split(",") if item.strip()]


def add_input_argument(parser: argparse.ArgumentParser, description: str) -> None:
    parser.add_argument("-i", "--input-file", type=str, default=None, help=f"input {description}, default stdin")


def add_output_argument(parser: argparse.ArgumentParser, description: str) -> None:
    parser.add_argument(
        "-o",
        "--output-file",
        type=str,
        default=None,
        help=f"output {description}, default stdout; compressed by .bgz, .gz or .bz2 suffix",
    )


def run_tool(run: Callable[[list[str]], None], argv: list[str]) -> None:
    """Run a tool, exiting with code 1 and a stack trace on any unhandled error.

    Parameters
    ----------
    run : Callable[[list[str]], None]
        Tool entry point taking the full argument vector, program name first.
    argv : list[str]
        Argument vector.
    """
    if hasattr(signal, "SIGPIPE"):
        # exit quietly when a downstream consumer such as head closes the pipe
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    try:
        run(argv)
    except Exception:
        logger.exception(f"{argv[0]} failed")
        sys.exit(RUNTIME_ERROR_EXIT_CODE)
