from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-fastq", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "FASTQ file")
    return parser.parse_args(argv[1:])


def compress_fastq(input_file: str | None, output_file: str | None) -> int:
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            writer.write(fastq.format())
            count += 1
    return count


def run(argv):
    """Compress sequences in FASTQ format."""
    args = parse_args(argv)
    compress_fastq(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
