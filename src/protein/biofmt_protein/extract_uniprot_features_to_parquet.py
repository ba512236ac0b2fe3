from __future__ import annotations

import argparse
import sys

import polars as pl
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.parquet_utils import DEFAULT_ROW_GROUP_SIZE, add_parquet_arguments, export_parquet
from biofmt_protein.uniprot import read_entry_features

FEATURE_SCHEMA = {
    "accession": pl.Utf8,
    "description": pl.Utf8,
    "evidence": pl.Utf8,
    "ref": pl.Utf8,
    "type": pl.Utf8,
    "original": pl.Utf8,
    "variations": pl.Utf8,
    "begin_status": pl.Utf8,
    "begin": pl.Int32,
    "end_status": pl.Utf8,
    "end": pl.Int32,
    "position_status": pl.Utf8,
    "position": pl.Int32,
    "location_sequence": pl.Utf8,
    "ligand": pl.Utf8,
    "ligand_part": pl.Utf8,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-uniprot-features-to-parquet", description=run.__doc__)
    add_input_argument(parser, "UniProt XML file")
    parser.add_argument(
        "-o", "--output-path", type=str, required=True, help="output Parquet file, or directory when partitioned"
    )
    add_parquet_arguments(parser)
    return parser.parse_args(argv[1:])


def extract_uniprot_features_to_parquet(
    input_file: str | None,
    output_path: str,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    partition_size: int | None = None,
) -> int:
    """
    Export the features of UniProt entries to Parquet, one row per ``feature`` element.

    Position status columns hold ``=``, ``~``, ``<``, ``>`` or ``?``; begin and end are set for
    range locations and position for single position locations.

    Parameters
    ----------
    input_file : str | None
        UniProt XML file, or None for stdin.
    output_path : str
        Output Parquet file, or output directory when partition_size is given.
    row_group_size : int
        Rows per Parquet row group.
    partition_size : int | None
        Rows per partition file.

    Returns
    -------
    int
        Number of features written.
    """
    with open_input(input_file) as handle:
        rows = (feature.row() for feature in read_entry_features(handle))
        return export_parquet(rows, FEATURE_SCHEMA, output_path, row_group_size, partition_size)


def run(argv):
    """Extract entry features from UniProt XML format to Parquet format."""
    args = parse_args(argv)
    extract_uniprot_features_to_parquet(
        args.input_file, args.output_path, row_group_size=args.row_group_size, partition_size=args.partition_size
    )


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
