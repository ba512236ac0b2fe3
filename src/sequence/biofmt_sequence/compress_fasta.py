from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_sequence.sequence_utils import DEFAULT_LINE_WIDTH, add_line_width_argument, read_fasta


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-fasta", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    add_output_argument(parser, "FASTA file")
    add_line_width_argument(parser)
    return parser.parse_args(argv[1:])


def compress_fasta(input_file: str | None, output_file: str | None, line_width: int = DEFAULT_LINE_WIDTH) -> int:
    """
    Rewrite FASTA records, compressed according to the output file suffix.

    Parameters
    ----------
    input_file : str
        Input FASTA file, possibly compressed, default stdin.
    output_file : str
        Output FASTA file, default stdout.
    line_width : int
        Sequence line width.

    Returns
    -------
    int
        Number of records written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for fasta in read_fasta(handle):
            writer.write(fasta.format(line_width))
            count += 1
    logger.debug(f"Wrote {count} FASTA records")
    return count


def run(argv):
    """Compress sequences in FASTA format."""
    args = parse_args(argv)
    compress_fasta(args.input_file, args.output_file, args.line_width)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
