from __future__ import annotations

import argparse
import sys

import pysam
from biofmt_alignment.sam_utils import open_alignments, sam_header, sam_line
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_output
from biofmt_core.filter_utils import FilterChain, Range, add_expression_argument, parse_range
from biofmt_core.logger import logger


class SamRangeFilter:
    """Accept alignments whose 0-based start position is in the range; unmapped reads are rejected"""

    def __init__(self, sam_range: Range):
        self.range = sam_range

    def __call__(self, record: pysam.AlignedSegment) -> bool:
        if record.reference_name is None:
            return False
        return self.range.contains(record.reference_name, record.reference_start)


class MapqFilter:
    def __init__(self, mapq: int):
        self.mapq = mapq

    def __call__(self, record: pysam.AlignedSegment) -> bool:
        return record.mapping_quality >= self.mapq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-sam", description=run.__doc__)
    parser.add_argument("-r", "--range", type=parse_range, default=None, help="filter by range, reference:start-end")
    parser.add_argument("-q", "--mapq", type=int, default=None, help="filter by mapping quality")
    add_expression_argument(parser)
    add_input_argument(parser, "SAM or BAM file")
    add_output_argument(parser, "SAM file")
    return parser.parse_args(argv[1:])


def filter_sam(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the SAM header and the alignments accepted by every filter, as SAM text.

    Expression filters see pysam.AlignedSegment attributes, e.g. ``flag:eq:0`` or ``query_name:eq:read1``.

    Returns
    -------
    int
        Number of alignments written.
    """
    count = 0
    with open_alignments(input_file) as alignments, open_output(output_file) as writer:
        writer.write(sam_header(alignments))
        for record in alignments:
            if filters.accept(record):
                writer.write(sam_line(record))
                count += 1
    logger.info(f"Kept {count} alignments")
    return count


def run(argv):
    """Filter alignments in SAM format."""
    args = parse_args(argv)
    filters = FilterChain()
    if args.range is not None:
        filters.add(SamRangeFilter(args.range))
    if args.mapq is not None:
        filters.add(MapqFilter(args.mapq))
    for expression in args.expression:
        filters.add(expression)
    filter_sam(args.input_file, args.output_file, filters)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
