from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import polars as pl

from biofmt_core.logger import logger

DEFAULT_ROW_GROUP_SIZE = 122880
PARQUET_COMPRESSION = "zstd"


def write_parquet(
    rows: Iterable[dict],
    schema: dict[str, pl.DataType],
    output_path: str,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
) -> int:
    """Write rows to a single zstd compressed Parquet file.

    Parameters
    ----------
    rows : Iterable[dict]
        Rows keyed by column name.
    schema : dict[str, pl.DataType]
        Column names and types, in output order.
    output_path : str
        Output Parquet file.
    row_group_size : int
        Rows per Parquet row group.

    Returns
    -------
    int
        Number of rows written.
    """
    frame = pl.DataFrame(list(rows), schema=schema)
    frame.write_parquet(output_path, compression=PARQUET_COMPRESSION, row_group_size=row_group_size)
    logger.info(f"Wrote {frame.height} rows to {output_path}")
    return frame.height


class PartitionedParquetWriter:
    """Write rows to a directory of Parquet files of at most partition_size rows each.

    Files are named ``part-<start>-<end>.parquet`` with ``start`` the 0-based index of the
    partition's first row and ``end`` exclusive.
    """

    def __init__(
        self,
        output_dir: str,
        schema: dict[str, pl.DataType],
        partition_size: int,
        row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    ):
        if partition_size <= 0:
            raise ValueError(f"partition size must be positive, got {partition_size}")
        self.output_dir = Path(output_dir)
        self.schema = schema
        self.partition_size = partition_size
        self.row_group_size = row_group_size
        self.start = 0
        self.file_names: list[str] = []
        self._rows: list[dict] = []
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, row: dict) -> None:
        self._rows.append(row)
        if len(self._rows) >= self.partition_size:
            self.flush()

    def flush(self) -> None:
        if not self._rows:
            return
        end = self.start + len(self._rows)
        output_path = self.output_dir / f"part-{self.start}-{end}.parquet"
        write_parquet(self._rows, self.schema, str(output_path), self.row_group_size)
        self.file_names.append(str(output_path))
        self.start = end
        self._rows = []

    def close(self) -> None:
        self.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def export_parquet(
    rows: Iterable[dict],
    schema: dict[str, pl.DataType],
    output_path: str,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
    partition_size: int | None = None,
) -> int:
    """Write rows to a Parquet file, or to a directory of partitions when partition_size is given."""
    if partition_size is None:
        return write_parquet(rows, schema, output_path, row_group_size)
    count = 0
    with PartitionedParquetWriter(output_path, schema, partition_size, row_group_size) as writer:
        for row in rows:
            writer.write(row)
            count += 1
    return count


def add_parquet_arguments(parser, *, partitioned: bool = True) -> None:
    parser.add_argument(
        "-g",
        "--row-group-size",
        type=int,
        default=DEFAULT_ROW_GROUP_SIZE,
        help=f"Parquet row group size, default {DEFAULT_ROW_GROUP_SIZE}",
    )
    if partitioned:
        parser.add_argument(
            "-p",
            "--partition-size",
            type=int,
            default=None,
            help="write a directory of Parquet files of at most this many rows each instead of a single file",
        )
