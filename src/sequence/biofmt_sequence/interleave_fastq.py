from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_sequence.paired_reads import pair_reads
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="interleave-fastq", description=run.__doc__)
    parser.add_argument("-1", "--first-fastq-file", type=str, required=True, help="first FASTQ input file")
    parser.add_argument("-2", "--second-fastq-file", type=str, required=True, help="second FASTQ input file")
    parser.add_argument("-p", "--paired-file", type=str, required=True, help="output interleaved paired FASTQ file")
    parser.add_argument("-u", "--unpaired-file", type=str, required=True, help="output unpaired FASTQ file")
    return parser.parse_args(argv[1:])


def interleave_fastq(first_fastq_file: str, second_fastq_file: str, paired_file: str, unpaired_file: str) -> int:
    """
    Interleave paired-end reads from two FASTQ files, matched by read name.

    Parameters
    ----------
    first_fastq_file : str
        FASTQ file of left reads.
    second_fastq_file : str
        FASTQ file of right reads.
    paired_file : str
        Output interleaved FASTQ file, each left read followed by its right read.
    unpaired_file : str
        Output FASTQ file of reads without a mate.

    Returns
    -------
    int
        Number of pairs written.
    """
    pairs = unpaired = 0
    with open_input(first_fastq_file) as first, open_input(second_fastq_file) as second:
        with open_output(paired_file) as paired_writer, open_output(unpaired_file) as unpaired_writer:
            for left, right in pair_reads(read_fastq(first), read_fastq(second)):
                if left is not None and right is not None:
                    paired_writer.write(left.format())
                    paired_writer.write(right.format())
                    pairs += 1
                else:
                    unpaired_writer.write((left or right).format())
                    unpaired += 1
    logger.info(f"Wrote {pairs} pairs and {unpaired} unpaired reads")
    return pairs


def run(argv):
    """Convert first and second DNA sequence reads in FASTQ format to interleaved FASTQ format."""
    args = parse_args(argv)
    interleave_fastq(args.first_fastq_file, args.second_fastq_file, args.paired_file, args.unpaired_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
