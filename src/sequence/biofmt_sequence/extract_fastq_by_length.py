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
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-fastq-by-length", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "FASTQ file")
    parser.add_argument(
        "-m", "--minimum-length", type=non_negative_int, default=0, help="minimum sequence length, inclusive, default 0"
    )
    parser.add_argument(
        "-x",
        "--maximum-length",
        type=non_negative_int,
        default=None,
        help="maximum sequence length, exclusive, default unbounded",
    )
    args = parser.parse_args(argv[1:])
    if args.maximum_length is not None and args.maximum_length < args.minimum_length:
        parser.error("maximum length must be greater than or equal to minimum length")
    return args


def extract_fastq_by_length(
    input_file: str | None,
    output_file: str | None,
    minimum_length: int = 0,
    maximum_length: int | None = None,
) -> int:
    """
    Extract FASTQ records with minimum_length <= length < maximum_length.

    Returns
    -------
    int
        Number of records extracted.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            if fastq.length < minimum_length:
                continue
            if maximum_length is not None and fastq.length >= maximum_length:
                continue
            writer.write(fastq.format())
            count += 1
    return count


def run(argv):
    """Extract DNA sequences in FASTQ format with a range of lengths."""
    args = parse_args(argv)
    extract_fastq_by_length(args.input_file, args.output_file, args.minimum_length, args.maximum_length)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
