from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_feature.gff3 import GFF3_HEADER, read_gff3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-gff3", description=run.__doc__)
    add_input_argument(parser, "GFF3 file")
    add_output_argument(parser, "GFF3 file")
    return parser.parse_args(argv[1:])


def compress_gff3(input_file: str | None, output_file: str | None) -> None:
    """Rewrite GFF3 feature records under a ``##gff-version 3`` header, dropping other directives and comments."""
    with open_input(input_file) as handle, open_output(output_file) as writer:
        writer.write(GFF3_HEADER)
        for record in read_gff3(handle):
            writer.write(f"{record}\n")


def run(argv):
    """Compress features in GFF3 format."""
    args = parse_args(argv)
    compress_gff3(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
