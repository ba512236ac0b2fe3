from __future__ import annotations

import argparse
import sys

from biofmt_assembly.filter_gfa1 import add_gfa1_filter_arguments, build_filters, filter_gfa1
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-rgfa", description=run.__doc__)
    add_gfa1_filter_arguments(parser)
    add_input_argument(parser, "rGFA file")
    add_output_argument(parser, "rGFA file")
    return parser.parse_args(argv[1:])


def run(argv):
    """Filter assembly graphs in rGFA format."""
    args = parse_args(argv)
    filter_gfa1(args.input_file, args.output_file, build_filters(args))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
