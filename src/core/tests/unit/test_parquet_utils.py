import polars as pl
from biofmt_core.parquet_utils import PartitionedParquetWriter, export_parquet, write_parquet

SCHEMA = {"name": pl.Utf8, "length": pl.Int64}


def _rows(n):
    return [{"name": f"seq{i}", "length": i} for i in range(n)]


def test_write_parquet(tmp_path):
    output = tmp_path / "out.parquet"
    assert write_parquet(_rows(5), SCHEMA, str(output), row_group_size=2) == 5
    frame = pl.read_parquet(output)
    assert frame.columns == ["name", "length"]
    assert frame["length"].to_list() == [0, 1, 2, 3, 4]


def test_write_empty_parquet(tmp_path):
    output = tmp_path / "empty.parquet"
    assert write_parquet([], SCHEMA, str(output)) == 0
    frame = pl.read_parquet(output)
    assert frame.height == 0
    assert dict(frame.schema) == SCHEMA


def test_partitioned_writer(tmp_path):
    output_dir = tmp_path / "parts"
    with PartitionedParquetWriter(str(output_dir), SCHEMA, partition_size=4) as writer:
        for row in _rows(10):
            writer.write(row)
    names = sorted(p.name for p in output_dir.iterdir())
    assert names == ["part-0-4.parquet", "part-4-8.parquet", "part-8-10.parquet"]
    frame = pl.read_parquet(output_dir / "part-8-10.parquet")
    assert frame["name"].to_list() == ["seq8", "seq9"]


def test_export_parquet_partitioned(tmp_path):
    output_dir = tmp_path / "parts"
    assert export_parquet(iter(_rows(3)), SCHEMA, str(output_dir), partition_size=3) == 3
    assert [p.name for p in output_dir.iterdir()] == ["part-0-3.parquet"]
