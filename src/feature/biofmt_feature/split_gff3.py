from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.split_utils import RecordSplitter, SplitConfig, add_split_arguments
from biofmt_feature.gff3 import GFF3_EXTENSIONS, GFF3_HEADER, read_gff3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="split-gff3", description=run.__doc__)
    add_input_argument(parser, "GFF3 file")
    add_split_arguments(parser, "output file suffix, e.g. .gff3.gz")
    return parser.parse_args(argv[1:])


def split_gff3(input_file: str | None, config: SplitConfig) -> list[str]:
    """Split GFF3 records across files, each starting with a ``##gff-version 3`` header."""
    with open_input(input_file) as handle, RecordSplitter(config, header=GFF3_HEADER) as splitter:
        for record in read_gff3(handle):
            splitter.write(f"{record}\n")
    return splitter.file_names


def run(argv):
    """Split files in GFF3 format."""
    args = parse_args(argv)
    split_gff3(args.input_file, SplitConfig.from_args(args, GFF3_EXTENSIONS, ".gff3"))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
