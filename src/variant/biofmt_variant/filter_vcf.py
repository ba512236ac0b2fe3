from __future__ import annotations

import argparse
import sys

import pysam
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool, string_list
from biofmt_core.compress import open_output, pysam_input
from biofmt_core.filter_utils import FilterChain, Range, add_expression_argument, parse_range
from biofmt_core.logger import logger


class IdFilter:
    """Accept records with any of the given ids; a record may carry several ids separated by ;"""

    def __init__(self, ids: list[str]):
        self.ids = set(ids)

    def __call__(self, record: pysam.VariantRecord) -> bool:
        if record.id is None:
            return False
        return any(record_id in self.ids for record_id in record.id.split(";"))


class QualFilter:
    """Accept records with QUAL at least qual; records with missing QUAL are rejected"""

    def __init__(self, qual: float):
        self.qual = qual

    def __call__(self, record: pysam.VariantRecord) -> bool:
        return record.qual is not None and record.qual >= self.qual


class VcfRangeFilter:
    """Accept records whose 0-based position is in the range"""

    def __init__(self, vcf_range: Range):
        self.range = vcf_range

    def __call__(self, record: pysam.VariantRecord) -> bool:
        return self.range.contains(record.chrom, record.pos - 1)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-vcf", description=run.__doc__)
    parser.add_argument("-s", "--snp-ids", type=string_list, default=None, help="filter by snp id, comma separated")
    parser.add_argument("-q", "--qual", type=float, default=None, help="filter by quality score")
    parser.add_argument("-r", "--range", type=parse_range, default=None, help="filter by range, chrom:start-end")
    add_expression_argument(parser)
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "VCF file")
    return parser.parse_args(argv[1:])


def filter_vcf(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the VCF header and the records accepted by every filter.

    Records are read with pysam, so expression filters see pysam.VariantRecord attributes,
    e.g. ``pos:ge:1000`` or ``info.DP:gt:10``.

    Parameters
    ----------
    input_file : str | None
        Input VCF file, stdin when None.
    output_file : str | None
        Output VCF file, stdout when None.
    filters : FilterChain
        Record filters.

    Returns
    -------
    int
        Number of records written.
    """
    count = 0
    total = 0
    with pysam_input(input_file) as vcf_path, pysam.VariantFile(vcf_path) as vcf, open_output(output_file) as writer:
        writer.write(str(vcf.header))
        for record in vcf:
            total += 1
            if filters.accept(record):
                writer.write(str(record))
                count += 1
    logger.info(f"Kept {count} of {total} VCF records")
    return count


def run(argv):
    """Filter variants in VCF format."""
    args = parse_args(argv)
    filters = FilterChain()
    if args.snp_ids is not None:
        filters.add(IdFilter(args.snp_ids))
    if args.qual is not None:
        filters.add(QualFilter(args.qual))
    if args.range is not None:
        filters.add(VcfRangeFilter(args.range))
    for expression in args.expression:
        filters.add(expression)
    filter_vcf(args.input_file, args.output_file, filters)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
