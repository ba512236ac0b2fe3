from __future__ import annotations

import argparse
import re
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-fastq", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "FASTQ file")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-n", "--name", type=str, help="exact sequence name to match")
    group.add_argument("-d", "--description", type=re.compile, help="FASTQ description regex pattern to match")
    return parser.parse_args(argv[1:])


def extract_fastq(
    input_file: str | None,
    output_file: str | None,
    name: str | None = None,
    description: re.Pattern | None = None,
) -> int:
    """Extract FASTQ records by exact sequence name or by a regex matching the whole description."""
    if (name is None) == (description is None):
        raise ValueError("exactly one of name and description must be given")
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            if name is not None and fastq.name != name:
                continue
            if description is not None and description.fullmatch(fastq.description) is None:
                continue
            writer.write(fastq.format())
            count += 1
    return count


def run(argv):
    """Extract matching DNA sequences in FASTQ format."""
    args = parse_args(argv)
    extract_fastq(args.input_file, args.output_file, args.name, args.description)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
