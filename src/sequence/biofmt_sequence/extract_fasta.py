from __future__ import annotations

import argparse
import re
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, add_line_width_argument, read_fasta


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-fasta", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "FASTA file")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-n", "--name", type=str, help="exact sequence name to match")
    group.add_argument("-d", "--description", type=re.compile, help="FASTA description line regex pattern to match")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def extract_fasta(
    input_file: str | None,
    output_file: str | None,
    name: str | None = None,
    description: re.Pattern | None = None,
    line_width: int = DEFAULT_LINE_WIDTH,
) -> int:
    """
    Extract FASTA records by exact sequence name or by a regex matching the whole description line.

    Parameters
    ----------
    input_file : str
        Input FASTA file, default stdin.
    output_file : str
        Output FASTA file, default stdout.
    name : str, optional
        Exact sequence name, the first token of the description line.
    description : re.Pattern, optional
        Pattern that must match the whole description line.
    line_width : int
        Sequence line width.

    Returns
    -------
    int
        Number of records extracted.
    """
    if (name is None) == (description is None):
        raise ValueError("exactly one of name and description must be given")
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            if name is not None and fasta.name != name:
                continue
            if description is not None and description.fullmatch(fasta.description) is None:
                continue
            writer.write(fasta.format(line_width))
            count += 1
    return count


def run(argv):
    """Extract matching DNA or protein sequences in FASTA format."""
    args = parse_args(argv)
    extract_fasta(args.input_file, args.output_file, args.name, args.description, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
