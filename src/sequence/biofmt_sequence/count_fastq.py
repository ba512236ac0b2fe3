from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import STDIO, open_input, open_output
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="count-fastq", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "count file")
    return parser.parse_args(argv[1:])


def count_fastq(input_file: str | None, output_file: str | None) -> int:
    """
    Count FASTQ records and write ``<input path or ->\\t<count>``.

    Returns
    -------
    int
        Number of records.
    """
    with open_input(input_file) as handle:
        count = sum(1 for _ in read_fastq(handle))
    with open_output(output_file) as writer:
        writer.write(f"{input_file or STDIO}\t{count}\n")
    return count


def run(argv):
    """Count DNA sequences in FASTQ format."""
    args = parse_args(argv)
    count_fastq(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
