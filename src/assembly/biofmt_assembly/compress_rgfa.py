from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa1 import Segment, read_gfa1
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.record_utils import RecordFormatError

# stable sequence name, offset and rank
STABLE_TAGS = ("SN", "SO", "SR")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-rgfa", description=run.__doc__)
    add_input_argument(parser, "rGFA file")
    add_output_argument(parser, "rGFA file")
    return parser.parse_args(argv[1:])


def check_stable_tags(segment: Segment) -> None:
    """
    Raises
    ------
    RecordFormatError
        If the segment is missing one of the SN, SO or SR tags an rGFA segment must have.
    """
    for tag in STABLE_TAGS:
        if tag not in segment.tag_fields:
            raise RecordFormatError(f"rGFA segment {segment.name} must contain {tag} tag")


def compress_rgfa(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa1(handle):
            if isinstance(record, Segment):
                check_stable_tags(record)
            writer.write(f"{record}\n")


def run(argv):
    """Compress assembly graphs in rGFA format."""
    args = parse_args(argv)
    compress_rgfa(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
