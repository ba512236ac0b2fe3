from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa1 import Containment, Gfa1Record, Link, Path, Segment, Traversal, read_gfa1
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.filter_utils import FilterChain, add_expression_argument
from biofmt_core.logger import logger


class SegmentReferenceFilter:
    """Reject containments, links, paths and traversals that reference a segment not seen earlier in the stream.

    Segments are always accepted and remembered, so the filter is stateful and must see records in input order.
    """

    def __init__(self):
        self.segment_names: set[str] = set()

    def __call__(self, record: Gfa1Record) -> bool:
        if isinstance(record, Segment):
            self.segment_names.add(record.name)
            return True
        if isinstance(record, Containment):
            references = [record.container, record.contained]
        elif isinstance(record, (Link, Traversal)):
            references = [record.source, record.target]
        elif isinstance(record, Path):
            references = record.segments
        else:
            return True
        return all(reference.name in self.segment_names for reference in references)


class LengthFilter:
    """Accept segments of at least length; segments of unknown length are rejected"""

    def __init__(self, length: int):
        self.length = length

    def __call__(self, record: Gfa1Record) -> bool:
        if not isinstance(record, Segment):
            return True
        length = record.length
        return length is not None and length >= self.length


class TagFilter:
    """Compare an integer tag of some record types against a threshold.

    Records of other types, and records without the tag, are accepted.

    Parameters
    ----------
    tag : str
        Tag name, e.g. "RC".
    threshold : int
        Threshold value.
    record_types : tuple[type, ...]
        Record types the filter applies to.
    below : bool
        Accept values less than threshold instead of values at least threshold.
    """

    def __init__(self, tag: str, threshold: int, record_types: tuple[type, ...], below: bool = False):
        self.tag = tag
        self.threshold = threshold
        self.record_types = record_types
        self.below = below

    def __call__(self, record: Gfa1Record) -> bool:
        if not isinstance(record, self.record_types) or self.tag not in record.tag_fields:
            return True
        value = record.tag_fields[self.tag].value
        return value < self.threshold if self.below else value >= self.threshold


def fragment_count_filter(fragment_count: int) -> TagFilter:
    return TagFilter("FC", fragment_count, (Segment, Link))


def kmer_count_filter(kmer_count: int) -> TagFilter:
    return TagFilter("KC", kmer_count, (Segment, Link))


def read_count_filter(read_count: int) -> TagFilter:
    return TagFilter("RC", read_count, (Segment, Link))


def mapping_quality_filter(mapping_quality: int) -> TagFilter:
    return TagFilter("MQ", mapping_quality, (Link,))


def mismatch_count_filter(mismatch_count: int) -> TagFilter:
    return TagFilter("NM", mismatch_count, (Link,), below=True)


def add_gfa1_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-g",
        "--invalid-segment-references",
        action="store_true",
        help="filter containments, links, paths and traversals that reference missing segments",
    )
    parser.add_argument("-n", "--length", type=int, default=None, help="filter segments by length")
    parser.add_argument(
        "-f", "--fragment-count", type=int, default=None, help="filter segments and links by fragment count"
    )
    parser.add_argument("-k", "--kmer-count", type=int, default=None, help="filter segments and links by k-mer count")
    parser.add_argument("-m", "--mapping-quality", type=int, default=None, help="filter links by mapping quality")
    parser.add_argument("-s", "--mismatch-count", type=int, default=None, help="filter links by mismatch count")
    parser.add_argument("-r", "--read-count", type=int, default=None, help="filter segments and links by read count")
    add_expression_argument(parser)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-gfa1", description=run.__doc__)
    add_gfa1_filter_arguments(parser)
    add_input_argument(parser, "GFA 1.0 file")
    add_output_argument(parser, "GFA 1.0 file")
    return parser.parse_args(argv[1:])


def build_filters(args: argparse.Namespace) -> FilterChain:
    filters = FilterChain()
    if args.invalid_segment_references:
        filters.add(SegmentReferenceFilter())
    if args.length is not None:
        filters.add(LengthFilter(args.length))
    if args.fragment_count is not None:
        filters.add(fragment_count_filter(args.fragment_count))
    if args.kmer_count is not None:
        filters.add(kmer_count_filter(args.kmer_count))
    if args.mapping_quality is not None:
        filters.add(mapping_quality_filter(args.mapping_quality))
    if args.mismatch_count is not None:
        filters.add(mismatch_count_filter(args.mismatch_count))
    if args.read_count is not None:
        filters.add(read_count_filter(args.read_count))
    for expression in args.expression:
        filters.add(expression)
    return filters


def filter_gfa1(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the GFA 1.0 records accepted by every filter.

    Expression filters see the record attributes, e.g. ``record_type:eq:S``, ``name:eq:s1``
    or ``tags.RC:ge:10``.

    Returns
    -------
    int
        Number of records written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa1(handle):
            if filters.accept(record):
                writer.write(f"{record}\n")
                count += 1
    logger.debug(f"Kept {count} GFA 1.0 records")
    return count


def run(argv):
    """Filter assembly graphs in GFA 1.0 format."""
    args = parse_args(argv)
    filter_gfa1(args.input_file, args.output_file, build_filters(args))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
