from pathlib import Path

import pysam
import pytest
from biofmt_sequence import interleaved_fastq_to_bam
from biofmt_sequence.interleaved_fastq_to_bam import ReadGroup, read_name
from biofmt_sequence.paired_reads import PairingError
from biofmt_sequence.sequence_utils import Fastq


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


def _reads(path):
    with pysam.AlignmentFile(str(path), "rb", check_sq=False) as bam:
        return bam.header.to_dict(), list(bam)


def test_unmapped_pairs(tmp_path, resources_dir):
    output_file = tmp_path / "reads.bam"
    interleaved_fastq_to_bam.run(
        ["interleaved-fastq-to-bam", "-i", str(resources_dir / "interleaved.fq"), "-o", str(output_file)]
    )
    header, reads = _reads(output_file)
    assert "RG" not in header
    assert [r.query_name for r in reads] == ["pair1", "pair1", "pair2", "pair2", "pair3", "pair3"]
    assert [r.query_sequence for r in reads[:2]] == ["AAAA", "CCCC"]
    assert list(reads[0].query_qualities) == [40, 40, 40, 40]
    assert all(r.is_unmapped and r.is_paired for r in reads)
    assert [r.is_read1 for r in reads] == [True, False] * 3
    assert [r.is_read2 for r in reads] == [False, True] * 3
    assert not reads[0].has_tag("RG")


def test_read_group(tmp_path, resources_dir):
    output_file = tmp_path / "reads.bam"
    interleaved_fastq_to_bam.run(
        [
            "interleaved-fastq-to-bam",
            "-i",
            str(resources_dir / "interleaved.fq"),
            "-o",
            str(output_file),
            "-r",
            "rg1",
            "-s",
            "NA12878",
            "-y",
            "lib1",
            "-p",
            "unit1",
            "-z",
            "300",
            "-b",
            "ACGT,TGCA",
        ]
    )
    header, reads = _reads(output_file)
    (read_group,) = header["RG"]
    assert read_group["ID"] == "rg1"
    assert read_group["SM"] == "NA12878"
    assert read_group["LB"] == "lib1"
    assert read_group["PU"] == "unit1"
    assert str(read_group["PI"]) == "300"
    assert read_group["BC"] == "ACGT-TGCA"
    for read in reads:
        assert read.get_tag("RG") == "rg1"
        assert read.get_tag("LB") == "lib1"
        assert read.get_tag("PU") == "unit1"
        assert read.template_length == 300


def test_unpaired_read_is_an_error(tmp_path):
    input_file = tmp_path / "unpaired.fq"
    input_file.write_text("@pair1/1\nAAAA\n+\nIIII\n")
    with pytest.raises(PairingError):
        interleaved_fastq_to_bam.interleaved_fastq_to_bam(str(input_file), str(tmp_path / "out.bam"))


@pytest.mark.parametrize(
    "description, expected",
    [("pair1/1", "pair1"), ("pair1/2 comment", "pair1"), ("pair1 1:N:0:2", "pair1"), ("pair1_1", "pair1_1")],
)
def test_read_name(description, expected):
    assert read_name(Fastq(description, "A", "I")) == expected


def test_read_group_header_skips_unset_fields():
    assert ReadGroup("rg1", sample="s1").header_record() == {"ID": "rg1", "SM": "s1"}
