from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_sequence.paired_reads import PairingError, interleaved_pairs, is_left, is_right
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="disinterleave-fastq", description=run.__doc__)
    parser.add_argument("-p", "--paired-file", type=str, default=None, help="interleaved paired FASTQ input file")
    parser.add_argument("-u", "--unpaired-file", type=str, default=None, help="unpaired FASTQ input file")
    parser.add_argument("-1", "--first-fastq-file", type=str, required=True, help="first FASTQ output file")
    parser.add_argument("-2", "--second-fastq-file", type=str, required=True, help="second FASTQ output file")
    return parser.parse_args(argv[1:])


def disinterleave_fastq(
    paired_file: str | None,
    first_fastq_file: str,
    second_fastq_file: str,
    unpaired_file: str | None = None,
) -> None:
    """
    Split interleaved paired-end reads into first and second FASTQ files.

    Reads from the optional unpaired file are routed to the first or second output by their
    pair marker.

    Raises
    ------
    PairingError
        If the interleaved input is not in left, right order or an unpaired read has no pair marker.
    """
    with open_output(first_fastq_file) as first, open_output(second_fastq_file) as second:
        with open_input(paired_file) as handle:
            for left, right in interleaved_pairs(read_fastq(handle)):
                first.write(left.format())
                second.write(right.format())
        if unpaired_file is not None:
            with open_input(unpaired_file) as handle:
                for fastq in read_fastq(handle):
                    if is_left(fastq):
                        first.write(fastq.format())
                    elif is_right(fastq):
                        second.write(fastq.format())
                    else:
                        raise PairingError(f"unpaired file contained read without pair marker {fastq.description}")


def run(argv):
    """Convert interleaved FASTQ format into first and second DNA sequence reads in FASTQ format."""
    args = parse_args(argv)
    disinterleave_fastq(args.paired_file, args.first_fastq_file, args.second_fastq_file, args.unpaired_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
