from pathlib import Path

import pysam
import pytest
from biofmt_alignment import (
    compress_gaf,
    compress_paf,
    compress_sam,
    filter_gaf,
    filter_paf,
    filter_sam,
    split_gaf,
)
from biofmt_core.compress import open_input
from biofmt_core.filter_utils import FilterEvaluationError
from biofmt_core.split_utils import SplitConfig


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


@pytest.fixture
def gaf_file(resources_dir):
    return str(resources_dir / "alignments.gaf")


@pytest.fixture
def paf_file(resources_dir):
    return str(resources_dir / "alignments.paf")


@pytest.fixture
def bam_file(tmp_path):
    bam_path = tmp_path / "alignments.bam"
    header = {
        "HD": {"VN": "1.6"},
        "SQ": [{"SN": "chr1", "LN": 1000}, {"SN": "chr2", "LN": 1000}],
    }
    with pysam.AlignmentFile(str(bam_path), "wb", header=header) as bam:
        for name, reference_id, start, mapq, flag in [
            ("r1", 0, 99, 60, 0),
            ("r2", 0, 299, 20, 16),
            ("r3", 1, 9, 40, 0),
        ]:
            read = pysam.AlignedSegment()
            read.query_name = name
            read.flag = flag
            read.reference_id = reference_id
            read.reference_start = start
            read.mapping_quality = mapq
            read.query_sequence = "ACGTACGTAC"
            read.query_qualities = pysam.qualitystring_to_array("IIIIIIIIII")
            read.cigarstring = "10M"
            bam.write(read)
        unmapped = pysam.AlignedSegment()
        unmapped.query_name = "r4"
        unmapped.flag = 4
        unmapped.reference_id = -1
        unmapped.reference_start = -1
        unmapped.mapping_quality = 0
        unmapped.query_sequence = "ACGTACGTAC"
        unmapped.query_qualities = pysam.qualitystring_to_array("IIIIIIIIII")
        bam.write(unmapped)
    return str(bam_path)


@pytest.fixture
def bzip2_sam_file(tmp_path, bam_file):
    sam_path = tmp_path / "alignments.sam.bz2"
    compress_sam.compress_sam(bam_file, str(sam_path))
    return str(sam_path)


def _column(path, index=0):
    with open_input(str(path)) as handle:
        return [line.split("\t")[index] for line in handle.read().splitlines() if not line.startswith("@")]


class TestFilterGaf:
    def test_query_range(self, tmp_path, gaf_file):
        output_file = tmp_path / "out.gaf"
        filter_gaf.run(["filter-gaf", "-i", gaf_file, "-o", str(output_file), "-r", "read1:0-50"])
        assert _column(output_file, 2) == ["0"]

    def test_mapping_quality(self, tmp_path, gaf_file):
        output_file = tmp_path / "out.gaf"
        filter_gaf.run(["filter-gaf", "-i", gaf_file, "-o", str(output_file), "-q", "30"])
        assert _column(output_file) == ["read1", "read3", "read1"]

    def test_expression_on_tags(self, tmp_path, gaf_file):
        output_file = tmp_path / "out.gaf"
        filter_gaf.run(
            ["filter-gaf", "-i", gaf_file, "-o", str(output_file), "-r", "read1:0-100", "-e", "tags.NM:ge:2"]
        )
        assert _column(output_file) == ["read1"]

    def test_expression_on_missing_tag(self, tmp_path, gaf_file):
        with pytest.raises(FilterEvaluationError):
            filter_gaf.run(["filter-gaf", "-i", gaf_file, "-o", str(tmp_path / "out.gaf"), "-e", "tags.NM:lt:2"])


class TestFilterPaf:
    def test_query_range(self, tmp_path, paf_file):
        output_file = tmp_path / "out.paf"
        filter_paf.run(["filter-paf", "-i", paf_file, "-o", str(output_file), "-r", "q2:45-46"])
        assert _column(output_file) == ["q2"]

    def test_mapping_quality_and_expression(self, tmp_path, paf_file):
        output_file = tmp_path / "out.paf"
        filter_paf.run(
            ["filter-paf", "-i", paf_file, "-o", str(output_file), "-q", "20", "-e", "target_name:eq:t2"]
        )
        assert _column(output_file) == ["q3"]


def test_compress_gaf(tmp_path, gaf_file):
    output_file = tmp_path / "out.gaf.bz2"
    compress_gaf.run(["compress-gaf", "-i", gaf_file, "-o", str(output_file)])
    with open_input(str(output_file)) as handle:
        assert handle.read() == Path(gaf_file).read_text()


def test_compress_paf(tmp_path, paf_file):
    output_file = tmp_path / "out.paf.gz"
    compress_paf.run(["compress-paf", "-i", paf_file, "-o", str(output_file)])
    with open_input(str(output_file)) as handle:
        assert handle.read() == Path(paf_file).read_text()


def test_split_gaf(tmp_path, gaf_file):
    file_names = split_gaf.split_gaf(
        gaf_file, SplitConfig(prefix=str(tmp_path / "x"), suffix=".gaf", records=3, left_pad=2)
    )
    assert [Path(f).name for f in file_names] == ["x00.gaf", "x01.gaf"]
    assert _column(file_names[1]) == ["read1"]


class TestFilterSam:
    def test_range(self, tmp_path, bam_file):
        output_file = tmp_path / "out.sam"
        filter_sam.run(["filter-sam", "-i", bam_file, "-o", str(output_file), "-r", "chr1:0-200"])
        assert _column(output_file) == ["r1"]

    def test_mapq(self, tmp_path, bam_file):
        output_file = tmp_path / "out.sam"
        filter_sam.run(["filter-sam", "-i", bam_file, "-o", str(output_file), "-q", "40"])
        assert _column(output_file) == ["r1", "r3"]

    def test_expression(self, tmp_path, bam_file):
        output_file = tmp_path / "out.sam"
        filter_sam.run(["filter-sam", "-i", bam_file, "-o", str(output_file), "-e", "flag:eq:16"])
        assert _column(output_file) == ["r2"]

    def test_header_is_written(self, tmp_path, bam_file):
        output_file = tmp_path / "out.sam"
        filter_sam.run(["filter-sam", "-i", bam_file, "-o", str(output_file), "-q", "100"])
        lines = output_file.read_text().splitlines()
        assert lines[0].startswith("@HD")
        assert [line.split("\t")[1] for line in lines if line.startswith("@SQ")] == ["SN:chr1", "SN:chr2"]

    def test_bzip2_input(self, tmp_path, bzip2_sam_file):
        output_file = tmp_path / "out.sam"
        filter_sam.run(["filter-sam", "-i", bzip2_sam_file, "-o", str(output_file), "-q", "40"])
        assert _column(output_file) == ["r1", "r3"]


def test_compress_sam(tmp_path, bam_file):
    output_file = tmp_path / "out.sam.gz"
    compress_sam.run(["compress-sam", "-i", bam_file, "-o", str(output_file)])
    assert _column(output_file) == ["r1", "r2", "r3", "r4"]


def test_compress_sam_bzip2_input(tmp_path, bzip2_sam_file):
    with open(bzip2_sam_file, "rb") as f:
        assert f.read(3) == b"BZh"
    output_file = tmp_path / "out.sam"
    compress_sam.run(["compress-sam", "-i", bzip2_sam_file, "-o", str(output_file)])
    assert _column(output_file) == ["r1", "r2", "r3", "r4"]
    assert output_file.read_text().startswith("@HD")
