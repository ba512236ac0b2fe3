from __future__ import annotations

import argparse
import sys

from biofmt_alignment.sam_utils import open_alignments, sam_header, sam_line
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_output


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-sam", description=run.__doc__)
    add_input_argument(parser, "SAM or BAM file")
    add_output_argument(parser, "SAM file")
    return parser.parse_args(argv[1:])


def compress_sam(input_file: str | None, output_file: str | None) -> None:
    """Write SAM or BAM alignments as SAM text, compressed according to the output file suffix."""
    with open_alignments(input_file) as alignments, open_output(output_file) as writer:
        writer.write(sam_header(alignments))
        for record in alignments:
            writer.write(sam_line(record))


def run(argv):
    """Compress alignments in SAM format."""
    args = parse_args(argv)
    compress_sam(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
