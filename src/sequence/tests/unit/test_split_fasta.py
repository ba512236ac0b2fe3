from pathlib import Path

import pytest
from biofmt_core.split_utils import SplitConfig
from biofmt_sequence import split_fasta, split_interleaved_fastq
from biofmt_sequence.sequence_utils import read_fastq


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


def test_split_fasta_by_records(tmp_path, resources_dir):
    prefix = str(tmp_path / "part")
    split_fasta.run(["split-fasta", "-i", str(resources_dir / "sequences.fa"), "-r", "1", "-p", prefix, "-d", "3"])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["part000.fa", "part001.fa"]
    assert (tmp_path / "part000.fa").read_text().startswith(">seq1 short sequence\n")
    assert (tmp_path / "part001.fa").read_text().startswith(">seq2 long sequence\n")


def test_split_fasta_infers_names(tmp_path, resources_dir, monkeypatch):
    monkeypatch.chdir(tmp_path)
    split_fasta.run(["split-fasta", "-i", str(resources_dir / "sequences.fa"), "-r", "5"])
    assert [p.name for p in tmp_path.iterdir()] == ["sequences0.fa"]


def test_split_fasta_compressed_suffix(tmp_path, resources_dir):
    prefix = str(tmp_path / "x")
    split_fasta.run(
        ["split-fasta", "-i", str(resources_dir / "sequences.fa"), "-b", "1k", "-p", prefix, "-s", ".fa.gz"]
    )
    assert [p.name for p in tmp_path.iterdir()] == ["x0.fa.gz"]


def test_split_fasta_invalid_bytes(resources_dir):
    with pytest.raises(SystemExit) as e:
        split_fasta.run(["split-fasta", "-i", str(resources_dir / "sequences.fa"), "-b", "42 hogshead"])
    assert e.value.code == -1


def test_split_interleaved_fastq_keeps_pairs_together(tmp_path, resources_dir):
    prefix = str(tmp_path / "x")
    file_names = split_interleaved_fastq.split_interleaved_fastq(
        str(resources_dir / "interleaved.fq"),
        SplitConfig(prefix=prefix, suffix=".fq", records=3),
    )
    assert len(file_names) == 3
    for file_name in file_names:
        with open(file_name) as f:
            reads = list(read_fastq(f))
        assert [r.description[-2:] for r in reads] == ["/1", "/2"]
