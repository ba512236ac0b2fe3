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
from biofmt_core.filter_utils import ExpressionFilter, FilterChain, add_expression_argument
from biofmt_core.logger import logger
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, Fasta, add_line_width_argument, read_fasta


class LengthFilter:
    """Accept sequences longer than length"""

    def __init__(self, length: int):
        self.length = length

    def __call__(self, fasta: Fasta) -> bool:
        return fasta.length > self.length


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-fasta", description=run.__doc__)
    parser.add_argument("-n", "--length", type=non_negative_int, default=None, help="filter by length")
    add_expression_argument(parser)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "FASTA file")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def build_filters(length: int | None = None, expressions: list[ExpressionFilter] | None = None) -> FilterChain:
    chain = FilterChain()
    if length is not None:
        chain.add(LengthFilter(length))
    for expression in expressions or []:
        chain.add(expression)
    return chain


def filter_fasta(
    input_file: str | None,
    output_file: str | None,
    filters: FilterChain,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> int:
    """
    Write the FASTA records accepted by every filter.

    Expression filters see the record fields description, name, sequence and length.

    Returns
    -------
    int
        Number of records written.
    """
    count = total = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            total += 1
            if filters.accept(fasta):
                writer.write(fasta.format(line_width))
                count += 1
    logger.info(f"Kept {count} of {total} FASTA records")
    return count


def run(argv):
    """Filter sequences in FASTA format."""
    args = parse_args(argv)
    filter_fasta(args.input_file, args.output_file, build_filters(args.length, args.expression), args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
