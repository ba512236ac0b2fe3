from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.logger import logger
from biofmt_core.split_utils import RecordSplitter, SplitConfig, add_split_arguments
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, FASTA_EXTENSIONS, add_line_width_argument, read_fasta


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="split-fasta", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_split_arguments(parser, "output file suffix, e.g. .fa.gz")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def split_fasta(input_file: str | None, config: SplitConfig, line_width: int = DEFAULT_LINE_WIDTH) -> list[str]:
    """
    Split FASTA records across files of at most config.records records or about config.bytes bytes.

    Parameters
    ----------
    input_file : str
        Input FASTA file, default stdin.
    config : SplitConfig
        Output naming and rollover thresholds.
    line_width : int
        Sequence line width.

    Returns
    -------
    list[str]
        Names of the files written, in order.
    """
    with open_input(input_file) as handle, RecordSplitter(config) as splitter:
        for fasta in read_fasta(handle):
            splitter.write(fasta.format(line_width))
    logger.info(f"Split FASTA into {len(splitter.file_names)} files")
    return splitter.file_names


def run(argv):
    """Split files in FASTA format."""
    args = parse_args(argv)
    config = SplitConfig.from_args(args, FASTA_EXTENSIONS, ".fa")
    split_fasta(args.input_file, config, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
