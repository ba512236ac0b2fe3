from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa1 import read_gfa1
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-gfa1", description=run.__doc__)
    add_input_argument(parser, "GFA 1.0 file")
    add_output_argument(parser, "GFA 1.0 file")
    return parser.parse_args(argv[1:])


def compress_gfa1(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa1(handle):
            writer.write(f"{record}\n")


def run(argv):
    """Compress assembly graphs in GFA 1.0 format."""
    args = parse_args(argv)
    compress_gfa1(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
