from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.logger import logger
from biofmt_core.split_utils import RecordSplitter, SplitConfig, add_split_arguments
from biofmt_sequence.paired_reads import interleaved_pairs
from biofmt_sequence.sequence_utils import FASTQ_EXTENSIONS, read_fastq

RECORDS_PER_PAIR = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="split-interleaved-fastq", description=run.__doc__)
    add_input_argument(parser, "interleaved FASTQ file")
    add_split_arguments(parser, "output file suffix, e.g. .fq.gz")
    return parser.parse_args(argv[1:])


def split_interleaved_fastq(input_file: str | None, config: SplitConfig) -> list[str]:
    """
    Split interleaved FASTQ across files without separating the reads of a pair.

    Each pair counts as two records toward config.records.

    Returns
    -------
    list[str]
        Names of the files written, in order.
    """
    with open_input(input_file) as handle, RecordSplitter(config) as splitter:
        for left, right in interleaved_pairs(read_fastq(handle)):
            splitter.write(left.format() + right.format(), weight=RECORDS_PER_PAIR)
    logger.info(f"Split interleaved FASTQ into {len(splitter.file_names)} files")
    return splitter.file_names


def run(argv):
    """Split files in interleaved FASTQ format."""
    args = parse_args(argv)
    config = SplitConfig.from_args(args, FASTQ_EXTENSIONS, ".fq")
    split_interleaved_fastq(args.input_file, config)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
