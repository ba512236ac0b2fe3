from __future__ import annotations

import argparse
import sys

import numpy as np
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, probability, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_sequence.paired_reads import interleaved_pairs
from biofmt_sequence.sequence_utils import read_fastq


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="downsample-interleaved-fastq", description=run.__doc__)
    add_input_argument(parser, "interleaved FASTQ file")
    add_output_argument(parser, "interleaved FASTQ file")
    parser.add_argument(
        "-p",
        "--probability",
        type=probability,
        required=True,
        help="probability a FASTQ record will be removed, [0.0-1.0]",
    )
    parser.add_argument("-z", "--seed", type=int, default=None, help="random number seed, default unseeded")
    return parser.parse_args(argv[1:])


def downsample_interleaved_fastq(
    input_file: str | None,
    output_file: str | None,
    removal_probability: float,
    seed: int | None = None,
) -> int:
    """
    Randomly remove read pairs from interleaved FASTQ, keeping both reads of a pair or neither.

    Parameters
    ----------
    input_file : str
        Input interleaved FASTQ file, default stdin.
    output_file : str
        Output interleaved FASTQ file, default stdout.
    removal_probability : float
        Probability that a pair is removed.
    seed : int, optional
        Random number generator seed.

    Returns
    -------
    int
        Number of pairs kept.
    """
    rng = np.random.default_rng(seed)
    kept = total = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for left, right in interleaved_pairs(read_fastq(handle)):
            total += 1
            if rng.random() >= removal_probability:
                writer.write(left.format())
                writer.write(right.format())
                kept += 1
    logger.info(f"Kept {kept} of {total} pairs")
    return kept


def run(argv):
    """Downsample DNA sequences from files in interleaved FASTQ format."""
    args = parse_args(argv)
    downsample_interleaved_fastq(args.input_file, args.output_file, args.probability, args.seed)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
