from __future__ import annotations

import argparse
import sys

from biofmt_alignment.paf import read_paf
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-paf", description=run.__doc__)
    add_input_argument(parser, "PAF file")
    add_output_argument(parser, "PAF file")
    return parser.parse_args(argv[1:])


def compress_paf(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_paf(handle):
            writer.write(f"{record}\n")


def run(argv):
    """Compress alignments in PAF format."""
    args = parse_args(argv)
    compress_paf(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
