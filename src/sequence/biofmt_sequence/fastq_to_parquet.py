from __future__ import annotations

import argparse
import sys

import polars as pl
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.parquet_utils import DEFAULT_ROW_GROUP_SIZE, add_parquet_arguments, export_parquet
from biofmt_sequence.sequence_utils import read_fastq

FASTQ_SCHEMA = {
    "name": pl.Utf8,
    "sequence": pl.Utf8,
    "quality": pl.Utf8,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="fastq-to-parquet", description=run.__doc__)
    add_input_argument(parser, "FASTQ file")
    parser.add_argument(
        "-o",
        "--output-path",
        type=str,
        required=True,
        help="output Parquet file, or output directory when a partition size is given",
    )
    add_parquet_arguments(parser)
    return parser.parse_args(argv[1:])


def fastq_to_parquet(
    input_file: str | None,
    output_path: str,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    partition_size: int | None = None,
) -> int:
    """Export FASTQ records to Parquet with columns name (the description line), sequence and quality."""
    with open_input(input_file) as handle:
        rows = (
            {"name": fastq.description, "sequence": fastq.sequence, "quality": fastq.quality}
            for fastq in read_fastq(handle)
        )
        return export_parquet(rows, FASTQ_SCHEMA, output_path, row_group_size, partition_size)


def run(argv):
    """Convert DNA sequences in FASTQ format to Parquet format."""
    args = parse_args(argv)
    fastq_to_parquet(args.input_file, args.output_path, args.row_group_size, args.partition_size)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
