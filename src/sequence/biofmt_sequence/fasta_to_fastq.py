from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.sequence_utils import format_fastq, read_fasta, sanger_quality

DEFAULT_QUALITY = 40


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="fasta-to-fastq", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "FASTQ file")
    parser.add_argument(
        "-q",
        "--quality",
        type=int,
        default=DEFAULT_QUALITY,
        help=f"phred quality score assigned to every base, default {DEFAULT_QUALITY}",
    )
    args = parser.parse_args(argv[1:])
    try:
        sanger_quality(args.quality)
    except ValueError as e:
        parser.error(str(e))
    return args


def fasta_to_fastq(input_file: str | None, output_file: str | None, quality: int = DEFAULT_QUALITY) -> None:
    """
    Convert FASTA records to Sanger FASTQ records with a constant quality score.

    Parameters
    ----------
    input_file : str
        Input FASTA file, default stdin.
    output_file : str
        Output FASTQ file, default stdout.
    quality : int
        Phred quality score for every base.
    """
    quality_char = sanger_quality(quality)
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            writer.write(format_fastq(fasta.description, fasta.sequence, quality_char * fasta.length))


def run(argv):
    """Convert DNA sequences in FASTA format to FASTQ format."""
    args = parse_args(argv)
    fasta_to_fastq(args.input_file, args.output_file, args.quality)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
