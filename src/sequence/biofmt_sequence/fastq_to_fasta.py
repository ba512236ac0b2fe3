from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import add_line_width_argument, format_fasta, read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="fastq-to-fasta", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    add_output_argument(parser, "FASTA file")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def fastq_to_fasta(input_file: str | None, output_file: str | None, line_width: int) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fastq in read_fastq(handle):
            writer.write(format_fasta(fastq.description, fastq.sequence, line_width))


def run(argv):
    """Convert DNA sequences in FASTQ format to FASTA format."""
    args = parse_args(argv)
    fastq_to_fasta(args.input_file, args.output_file, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
