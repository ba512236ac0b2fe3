from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.filter_utils import FilterChain, Range, add_expression_argument, parse_range
from biofmt_core.logger import logger
from biofmt_feature.bed import BedRecord, BedWriter, read_bed


class BedRangeFilter:
    """Accept records on the range's chromosome that overlap it"""

    def __init__(self, bed_range: Range):
        self.range = bed_range

    def __call__(self, record: BedRecord) -> bool:
        return self.range.intersects(record.chrom, record.start, record.end)


class ScoreFilter:
    """Accept records with a score greater than score; records without a score are rejected"""

    def __init__(self, score: float):
        self.score = score

    def __call__(self, record) -> bool:
        return record.score is not None and record.score > self.score


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-bed", description=run.__doc__)
    parser.add_argument("-r", "--range", type=parse_range, default=None, help="filter by range, chrom:start-end")
    parser.add_argument("-s", "--score", type=float, default=None, help="filter by score")
    add_expression_argument(parser)
    add_input_argument(parser, "BED file")
    add_output_argument(parser, "BED file")
    return parser.parse_args(argv[1:])


def filter_bed(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the BED records accepted by every filter.

    Expression filters see the fields chrom, start, end, name, score, strand and length.

    Returns
    -------
    int
        Number of records written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as output:
        writer = BedWriter(output)
        for record in read_bed(handle):
            if filters.accept(record):
                writer.write(record)
                count += 1
    logger.debug(f"Kept {count} BED records")
    return count


def run(argv):
    """Filter features in BED format."""
    args = parse_args(argv)
    filters = FilterChain()
    if args.range is not None:
        filters.add(BedRangeFilter(args.range))
    if args.score is not None:
        filters.add(ScoreFilter(args.score))
    for expression in args.expression:
        filters.add(expression)
    filter_bed(args.input_file, args.output_file, filters)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
