from __future__ import annotations

import argparse
import sys

from biofmt_alignment.gaf import read_gaf
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-gaf", description=run.__doc__)
    add_input_argument(parser, "GAF file")
    add_output_argument(parser, "GAF file")
    return parser.parse_args(argv[1:])


def compress_gaf(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gaf(handle):
            writer.write(f"{record}\n")


def run(argv):
    """Compress alignments in GAF format."""
    args = parse_args(argv)
    compress_gaf(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
