from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="fastq-to-text", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "tab-delimited text file")
    return parser.parse_args(argv[1:])


def fastq_to_text(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            writer.write(f"{fastq.description}\t{fastq.sequence}\t{fastq.quality}\n")


def run(argv):
    """Convert DNA sequences in FASTQ format to tab-separated values (tsv) text format."""
    args = parse_args(argv)
    fastq_to_text(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
