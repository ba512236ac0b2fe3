from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.filter_utils import FilterChain, Range, add_expression_argument, parse_range
from biofmt_core.logger import logger
from biofmt_feature.filter_bed import ScoreFilter
from biofmt_feature.gff3 import GFF3_HEADER, Gff3Record, read_gff3


class Gff3RangeFilter:
    """Accept records on the range's sequence that overlap it, comparing in 0-based half-open coordinates"""

    def __init__(self, gff3_range: Range):
        self.range = gff3_range

    def __call__(self, record: Gff3Record) -> bool:
        return self.range.intersects(record.seqid, record.start - 1, record.end)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-gff3", description=run.__doc__)
    parser.add_argument("-r", "--range", type=parse_range, default=None, help="filter by range, seqid:start-end")
    parser.add_argument("-s", "--score", type=float, default=None, help="filter by score")
    add_expression_argument(parser)
    add_input_argument(parser, "GFF3 file")
    add_output_argument(parser, "GFF3 file")
    return parser.parse_args(argv[1:])


def filter_gff3(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the GFF3 records accepted by every filter.

    Expression filters see the fields seqid, source, type, start, end, score, strand, phase and
    attributes (a mapping of attribute name to list of values).

    Returns
    -------
    int
        Number of records written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        writer.write(GFF3_HEADER)
        for record in read_gff3(handle):
            if filters.accept(record):
                writer.write(f"{record}\n")
                count += 1
    logger.debug(f"Kept {count} GFF3 records")
    return count


def run(argv):
    """Filter features in GFF3 format."""
    args = parse_args(argv)
    filters = FilterChain()
    if args.range is not None:
        filters.add(Gff3RangeFilter(args.range))
    if args.score is not None:
        filters.add(ScoreFilter(args.score))
    for expression in args.expression:
        filters.add(expression)
    filter_gff3(args.input_file, args.output_file, filters)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
