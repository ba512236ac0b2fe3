from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.record_utils import RecordFormatError
from biofmt_sequence.sequence_utils import format_fastq

TEXT_FIELDS = 3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="text-to-fastq", description=run.__doc__)
    add_input_argument(parser, "tab-delimited text file")
    add_output_argument(parser, "FASTQ file")
    return parser.parse_args(argv[1:])


def text_to_fastq(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for line_number, line in enumerate(handle, start=1):
            tokens = line.rstrip("\r\n").split("\t")
            if len(tokens) != TEXT_FIELDS:
                raise RecordFormatError(
                    f"expected {TEXT_FIELDS} tokens, found {len(tokens)} at line number {line_number}"
                )
            description, sequence, quality = tokens
            if len(sequence) != len(quality):
                raise RecordFormatError(f"sequence and quality lengths differ at line number {line_number}")
            writer.write(format_fastq(description, sequence, quality))


def run(argv):
    """Convert DNA sequences in tab-separated values (tsv) text format to FASTQ format."""
    args = parse_args(argv)
    text_to_fastq(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
