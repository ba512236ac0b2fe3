from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_feature.bed import BedWriter, read_bed


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-bed", description=run.__doc__)
    add_input_argument(parser, "BED file")
    add_output_argument(parser, "BED file")
    return parser.parse_args(argv[1:])


def compress_bed(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as output:
        writer = BedWriter(output)
        for record in read_bed(handle):
            writer.write(record)


def run(argv):
    """Compress features in BED format."""
    args = parse_args(argv)
    compress_bed(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
