from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa2 import read_gfa2
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.filter_utils import FilterChain, add_expression_argument


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-gfa2", description=run.__doc__)
    add_expression_argument(parser)
    add_input_argument(parser, "GFA 2.0 file")
    add_output_argument(parser, "GFA 2.0 file")
    return parser.parse_args(argv[1:])


def filter_gfa2(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    """
    Write the GFA 2.0 records accepted by every filter.

    Expression filters see record_type, the named mandatory columns (e.g. ``columns.length``)
    and typed tag values (e.g. ``tags.RC``).
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa2(handle):
            if filters.accept(record):
                writer.write(f"{record}\n")
                count += 1
    return count


def run(argv):
    """Filter assembly graphs in GFA 2.0 format."""
    args = parse_args(argv)
    filter_gfa2(args.input_file, args.output_file, FilterChain(args.expression))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
