from pathlib import Path

import pytest
from biofmt_core.compress import open_input
from biofmt_core.split_utils import SplitConfig
from biofmt_feature import (
    compress_bed,
    compress_gff3,
    filter_bed,
    filter_gff3,
    gff3_to_bed,
    rename_bed_references,
    rename_gff3_references,
    split_bed,
    split_gff3,
)


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


@pytest.fixture
def bed_file(resources_dir):
    return str(resources_dir / "features.bed")


@pytest.fixture
def gff3_file(resources_dir):
    return str(resources_dir / "features.gff3")


def _names(path):
    return [line.split("\t")[3] for line in Path(path).read_text().splitlines()]


class TestFilterBed:
    def test_range(self, tmp_path, bed_file):
        output_file = tmp_path / "out.bed"
        filter_bed.run(["filter-bed", "-i", bed_file, "-o", str(output_file), "-r", "1:120-160"])
        assert _names(output_file) == ["feature1", "feature2"]

    def test_score_rejects_missing_score(self, tmp_path, bed_file):
        output_file = tmp_path / "out.bed"
        filter_bed.run(["filter-bed", "-i", bed_file, "-o", str(output_file), "-s", "100"])
        assert _names(output_file) == ["feature1", "feature4"]

    def test_filters_combined(self, tmp_path, bed_file):
        output_file = tmp_path / "out.bed"
        filter_bed.run(["filter-bed", "-i", bed_file, "-o", str(output_file), "-r", "1:0-1000", "-s", "100"])
        assert _names(output_file) == ["feature1"]

    def test_expression(self, tmp_path, bed_file):
        output_file = tmp_path / "out.bed"
        filter_bed.run(["filter-bed", "-i", bed_file, "-o", str(output_file), "-e", "strand:eq:+"])
        assert _names(output_file) == ["feature1", "feature3"]

    def test_no_filters(self, tmp_path, bed_file):
        output_file = tmp_path / "out.bed"
        filter_bed.run(["filter-bed", "-i", bed_file, "-o", str(output_file)])
        assert len(_names(output_file)) == 4

    def test_malformed_range(self, bed_file):
        with pytest.raises(SystemExit) as e:
            filter_bed.run(["filter-bed", "-i", bed_file, "-r", "1:100"])
        assert e.value.code == -1


class TestFilterGff3:
    def test_range(self, tmp_path, gff3_file):
        output_file = tmp_path / "out.gff3"
        filter_gff3.run(["filter-gff3", "-i", gff3_file, "-o", str(output_file), "-r", "1:150-151"])
        lines = output_file.read_text().splitlines()
        assert lines[0] == "##gff-version 3"
        assert [line.split("\t")[2] for line in lines[1:]] == ["gene", "transcript"]

    def test_score(self, tmp_path, gff3_file):
        output_file = tmp_path / "out.gff3"
        filter_gff3.run(["filter-gff3", "-i", gff3_file, "-o", str(output_file), "-s", "1000"])
        lines = output_file.read_text().splitlines()
        assert [line.split("\t")[2] for line in lines[1:]] == ["exon"]

    def test_expression(self, tmp_path, gff3_file):
        output_file = tmp_path / "out.gff3"
        filter_gff3.run(["filter-gff3", "-i", gff3_file, "-o", str(output_file), "-e", "type:eq:transcript"])
        assert len(output_file.read_text().splitlines()) == 3


def test_gff3_to_bed(tmp_path, gff3_file):
    output_file = tmp_path / "out.bed"
    gff3_to_bed.run(["gff3-to-bed", "-i", gff3_file, "-o", str(output_file)])
    assert output_file.read_text().splitlines() == [
        "1\t100\t200\tENST0001\t513\t+\t100\t200\t0\t1\t100\t0",
        "1\t100\t150\tENST0001\t1000\t-\t100\t150\t0\t1\t50\t0",
        "chr2\t0\t50\tENST0002\t0\t.\t0\t50\t0\t1\t50\t0",
    ]


def test_rename_bed_references_add_chr(tmp_path, bed_file):
    output_file = tmp_path / "out.bed"
    rename_bed_references.run(["rename-bed-references", "-i", bed_file, "-o", str(output_file), "--chr"])
    chroms = [line.split("\t")[0] for line in output_file.read_text().splitlines()]
    assert chroms == ["chr1", "chr1", "chr2", "chrX"]


def test_rename_gff3_references_remove_chr(tmp_path, gff3_file):
    output_file = tmp_path / "out.gff3"
    rename_gff3_references.run(["rename-gff3-references", "-i", gff3_file, "-o", str(output_file)])
    seqids = [line.split("\t")[0] for line in output_file.read_text().splitlines()[1:]]
    assert seqids == ["1", "1", "1", "2"]


def test_compress_bed(tmp_path, bed_file):
    output_file = tmp_path / "out.bed.bgz"
    compress_bed.run(["compress-bed", "-i", bed_file, "-o", str(output_file)])
    with open_input(str(output_file)) as f:
        assert len(f.read().splitlines()) == 4


def test_compress_gff3(tmp_path, gff3_file):
    output_file = tmp_path / "out.gff3.gz"
    compress_gff3.run(["compress-gff3", "-i", gff3_file, "-o", str(output_file)])
    with open_input(str(output_file)) as f:
        lines = f.read().splitlines()
    assert lines[0] == "##gff-version 3"
    assert len(lines) == 5


def test_split_bed(tmp_path, bed_file):
    file_names = split_bed.split_bed(
        bed_file, SplitConfig(prefix=str(tmp_path / "x"), suffix=".bed", records=3)
    )
    assert [Path(f).name for f in file_names] == ["x0.bed", "x1.bed"]
    assert _names(file_names[1]) == ["feature4"]


def test_split_gff3_writes_header_to_every_file(tmp_path, gff3_file):
    split_gff3.run(["split-gff3", "-i", gff3_file, "-r", "2", "-p", str(tmp_path / "x")])
    files = sorted(tmp_path.iterdir())
    assert [f.name for f in files] == ["x0.gff3", "x1.gff3"]
    for f in files:
        lines = f.read_text().splitlines()
        assert lines[0] == "##gff-version 3"
        assert len(lines) == 3
