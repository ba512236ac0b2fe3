from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.split_utils import RecordSplitter, SplitConfig, add_split_arguments
from biofmt_feature.bed import BED_EXTENSIONS, read_bed


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="split-bed", description=run.__doc__)
    add_input_argument(parser, "BED file")
    add_split_arguments(parser, "output file suffix, e.g. .bed.gz")
    return parser.parse_args(argv[1:])


def split_bed(input_file: str | None, config: SplitConfig) -> list[str]:
    with open_input(input_file) as handle, RecordSplitter(config) as splitter:
        for record in read_bed(handle):
            splitter.write(f"{record}\n")
    return splitter.file_names


def run(argv):
    """Split files in BED format."""
    args = parse_args(argv)
    split_bed(args.input_file, SplitConfig.from_args(args, BED_EXTENSIONS, ".bed"))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
