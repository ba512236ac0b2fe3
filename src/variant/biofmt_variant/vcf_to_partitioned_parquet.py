from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator

import polars as pl
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.parquet_utils import DEFAULT_ROW_GROUP_SIZE, add_parquet_arguments, export_parquet
from biofmt_core.record_utils import RecordFormatError
from biofmt_variant.vcf_utils import VcfTextReader

DEFAULT_PARTITION_SIZE = 10 * DEFAULT_ROW_GROUP_SIZE
MISSING = "."
SCHEMA = {
    "chrom": pl.Utf8,
    "pos": pl.Int64,
    "ref": pl.Utf8,
    "alt": pl.Utf8,
    "qual": pl.Float64,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="vcf-to-partitioned-parquet", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    parser.add_argument("-o", "--output-dir", type=str, required=True, help="output directory of Parquet files")
    add_parquet_arguments(parser, partitioned=False)
    parser.add_argument(
        "-p",
        "--partition-size",
        type=int,
        default=DEFAULT_PARTITION_SIZE,
        help=f"rows per Parquet file, default {DEFAULT_PARTITION_SIZE}",
    )
    return parser.parse_args(argv[1:])


def site_rows(reader: VcfTextReader) -> Iterator[dict]:
    """chrom, pos, ref, alt and qual of each VCF record; alt keeps its comma separated alleles."""
    for columns in reader.records():
        try:
            pos = int(columns[1])
            qual = None if columns[5] == MISSING else float(columns[5])
        except ValueError as e:
            line = "\t".join(columns)
            raise RecordFormatError(f"invalid POS or QUAL in VCF line: {line}") from e
        yield {
            "chrom": columns[0],
            "pos": pos,
            "ref": columns[3],
            "alt": "" if columns[4] == MISSING else columns[4],
            "qual": qual,
        }


def vcf_to_partitioned_parquet(
    input_file: str | None,
    output_dir: str,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    partition_size: int = DEFAULT_PARTITION_SIZE,
) -> int:
    """
    Export VCF sites to a directory of Parquet files.

    Parameters
    ----------
    input_file : str | None
        VCF file, or None for stdin.
    output_dir : str
        Output directory, created if missing. Files are named ``part-<start>-<end>.parquet``.
    row_group_size : int
        Rows per Parquet row group.
    partition_size : int
        Rows per Parquet file.

    Returns
    -------
    int
        Number of rows written.
    """
    with open_input(input_file) as handle:
        return export_parquet(site_rows(VcfTextReader(handle)), SCHEMA, output_dir, row_group_size, partition_size)


def run(argv):
    """Convert variants in VCF format to partitioned Parquet format."""
    args = parse_args(argv)
    vcf_to_partitioned_parquet(
        args.input_file, args.output_dir, row_group_size=args.row_group_size, partition_size=args.partition_size
    )


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
