"""Filters shared by filter-gaf and filter-paf."""

from __future__ import annotations

from biofmt_core.filter_utils import FilterChain, Range, add_expression_argument, parse_range


class QueryRangeFilter:
    """Accept alignments of the range's query that overlap it"""

    def __init__(self, query_range: Range):
        self.range = query_range

    def __call__(self, record) -> bool:
        if record.query_start is None or record.query_end is None:
            return False
        return self.range.intersects(record.query_name, record.query_start, record.query_end)


class MappingQualityFilter:
    """Accept alignments with mapping quality at least mapping_quality"""

    def __init__(self, mapping_quality: int):
        self.mapping_quality = mapping_quality

    def __call__(self, record) -> bool:
        return record.mapping_quality is not None and record.mapping_quality >= self.mapping_quality


def add_alignment_filter_arguments(parser) -> None:
    parser.add_argument("-r", "--query", type=parse_range, default=None, help="filter by query range, name:start-end")
    parser.add_argument("-q", "--mapping-quality", type=int, default=None, help="filter by mapping quality")
    add_expression_argument(parser)


def build_filters(args) -> FilterChain:
    filters = FilterChain()
    if args.query is not None:
        filters.add(QueryRangeFilter(args.query))
    if args.mapping_quality is not None:
        filters.add(MappingQualityFilter(args.mapping_quality))
    for expression in args.expression:
        filters.add(expression)
    return filters
