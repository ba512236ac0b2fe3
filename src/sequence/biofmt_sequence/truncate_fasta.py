from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import (
    ToolArgumentParser,
    add_input_argument,
    add_output_argument,
    non_negative_int,
    run_tool,
)
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, add_line_width_argument, format_fasta, read_fasta

DEFAULT_LENGTH = 10000


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="truncate-fasta", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "FASTA file")
    parser.add_argument(
        "-l", "--length", type=non_negative_int, default=DEFAULT_LENGTH, help=f"length, default {DEFAULT_LENGTH}"
    )
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def truncate_fasta(
    input_file: str | None,
    output_file: str | None,
    length: int = DEFAULT_LENGTH,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> None:
    """
    Truncate every sequence to at most length characters.

    Parameters
    ----------
    input_file : str
        Input FASTA file, default stdin.
    output_file : str
        Output FASTA file, default stdout.
    length : int
        Maximum sequence length.
    line_width : int
        Sequence line width.
    """
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            writer.write(format_fasta(fasta.description, fasta.sequence[:length], line_width))


def run(argv):
    """Truncate sequences in FASTA format."""
    args = parse_args(argv)
    truncate_fasta(args.input_file, args.output_file, args.length, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
