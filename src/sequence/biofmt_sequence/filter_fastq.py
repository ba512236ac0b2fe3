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
from biofmt_core.filter_utils import FilterChain, add_expression_argument
from biofmt_core.logger import logger
from biofmt_sequence.filter_fasta import build_filters
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-fastq", description=run.__doc__)
    parser.add_argument("-n", "--length", type=non_negative_int, default=None, help="filter by length")
    add_expression_argument(parser)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "FASTQ file")
    return parser.parse_args(argv[1:])


def filter_fastq(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """Write the FASTQ records accepted by every filter; returns the number written."""
    count = total = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            total += 1
            if filters.accept(fastq):
                writer.write(fastq.format())
                count += 1
    logger.info(f"Kept {count} of {total} FASTQ records")
    return count


def run(argv):
    """Filter sequences in FASTQ format."""
    args = parse_args(argv)
    filter_fastq(args.input_file, args.output_file, build_filters(args.length, args.expression))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
