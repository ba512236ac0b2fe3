from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator

import polars as pl
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.logger import logger
from biofmt_core.parquet_utils import DEFAULT_ROW_GROUP_SIZE, add_parquet_arguments, export_parquet
from biofmt_sequence.sequence_utils import Alphabet, add_alphabet_argument, read_fasta

FASTA_SCHEMA = {
    "name": pl.Utf8,
    "sequence": pl.Utf8,
    "length": pl.Int64,
    "alphabet": pl.Utf8,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="fasta-to-parquet", description=run.__doc__)
    add_input_argument(parser, "FASTA file")
    parser.add_argument(
        "-o",
        "--output-path",
        type=str,
        required=True,
        help="output Parquet file, or output directory when a partition size is given",
    )
    add_alphabet_argument(parser)
    add_parquet_arguments(parser)
    return parser.parse_args(argv[1:])


def fasta_rows(handle, alphabet: Alphabet) -> Iterator[dict]:
    for fasta in read_fasta(handle):
        yield {
            "name": fasta.description,
            "sequence": fasta.sequence.upper(),
            "length": fasta.length,
            "alphabet": alphabet.value,
        }


def fasta_to_parquet(
    input_file: str | None,
    output_path: str,
    alphabet: Alphabet = Alphabet.DNA,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    partition_size: int | None = None,
) -> int:
    """
    Export FASTA records to Parquet with columns name, sequence, length and alphabet.

    Parameters
    ----------
    input_file : str
        Input FASTA file, default stdin.
    output_path : str
        Output Parquet file, or directory of ``part-<start>-<end>.parquet`` files when
        partition_size is given.
    alphabet : Alphabet
        Alphabet recorded for every sequence.
    row_group_size : int
        Parquet row group size.
    partition_size : int, optional
        Maximum rows per partition file.

    Returns
    -------
    int
        Number of rows written.
    """
    with open_input(input_file) as handle:
        count = export_parquet(fasta_rows(handle, alphabet), FASTA_SCHEMA, output_path, row_group_size, partition_size)
    logger.info(f"Exported {count} FASTA records to {output_path}")
    return count


def run(argv):
    """Convert DNA or protein sequences in FASTA format to Parquet format."""
    args = parse_args(argv)
    fasta_to_parquet(args.input_file, args.output_path, args.alphabet, args.row_group_size, args.partition_size)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
