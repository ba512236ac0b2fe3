from __future__ import annotations

import argparse
import sys

from biofmt_alignment.alignment_filters import add_alignment_filter_arguments, build_filters
from biofmt_alignment.paf import read_paf
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.filter_utils import FilterChain
from biofmt_core.logger import logger


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="filter-paf", description=run.__doc__)
    add_alignment_filter_arguments(parser)
    add_input_argument(parser, "PAF file")
    add_output_argument(parser, "PAF file")
    return parser.parse_args(argv[1:])


def filter_paf(input_file: str | None, output_file: str | None, filters: FilterChain) -> int:
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_paf(handle):
            if filters.accept(record):
                writer.write(f"{record}\n")
                count += 1
    logger.debug(f"Kept {count} PAF records")
    return count


def run(argv):
    """Filter alignments in PAF format."""
    args = parse_args(argv)
    filter_paf(args.input_file, args.output_file, build_filters(args))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
