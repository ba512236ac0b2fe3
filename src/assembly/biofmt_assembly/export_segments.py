from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa1 import Segment, read_gfa1
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.record_utils import format_tags
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, add_line_width_argument, format_fasta


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="export-segments", description=run.__doc__)
    add_input_argument(parser, "GFA 1.0 file")
    add_output_argument(parser, "FASTA file")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def describe_segment(segment: Segment) -> str:
    """FASTA description of a segment, its name followed by its tags, if any."""
    if not segment.tag_fields:
        return segment.name
    return f"{segment.name} " + "\t".join(format_tags(segment.tag_fields))


def export_segments(input_file: str | None, output_file: str | None, line_width: int = DEFAULT_LINE_WIDTH) -> int:
    """
    Write the GFA 1.0 segments that have a sequence as FASTA records.

    Returns
    -------
    int
        Number of segments written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa1(handle):
            if isinstance(record, Segment) and record.sequence is not None:
                writer.write(format_fasta(describe_segment(record), record.sequence, line_width))
                count += 1
    return count


def run(argv):
    """Export assembly segment sequences in GFA 1.0 format to FASTA format."""
    args = parse_args(argv)
    export_segments(args.input_file, args.output_file, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
