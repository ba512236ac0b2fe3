from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.record_utils import RecordFormatError
from biofmt_sequence.sequence_utils import add_line_width_argument, format_fasta

TEXT_FIELDS = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="text-to-fasta", description=run.__doc__)
    add_input_argument(parser, "tab-delimited text file")
    add_output_argument(parser, "FASTA file")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def text_to_fasta(input_file: str | None, output_file: str | None, line_width: int) -> None:
    """
    Convert ``description<TAB>sequence`` lines to FASTA records.

    Raises
    ------
    RecordFormatError
        If a line does not have exactly two tab-delimited fields.
    """
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for line_number, line in enumerate(handle, start=1):
            tokens = line.rstrip("\r\n").split("\t")
            if len(tokens) != TEXT_FIELDS:
                raise RecordFormatError(
                    f"expected {TEXT_FIELDS} tokens, found {len(tokens)} at line number {line_number}"
                )
            writer.write(format_fasta(tokens[0], tokens[1], line_width))


def run(argv):
    """Convert sequences in tab-separated values (tsv) text format to FASTA format."""
    args = parse_args(argv)
    text_to_fasta(args.input_file, args.output_file, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
