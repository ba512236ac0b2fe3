from pathlib import Path

import pytest
from biofmt_sequence import disinterleave_fastq, downsample_fastq, downsample_interleaved_fastq, interleave_fastq
from biofmt_sequence.paired_reads import PairingError
from biofmt_sequence.sequence_utils import read_fastq


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


def _descriptions(path):
    with open(path) as f:
        return [r.description for r in read_fastq(f)]


def test_interleave_fastq(tmp_path, resources_dir):
    paired = tmp_path / "paired.fq"
    unpaired = tmp_path / "unpaired.fq"
    interleave_fastq.run(
        [
            "interleave-fastq",
            "-1",
            str(resources_dir / "reads_1.fq"),
            "-2",
            str(resources_dir / "reads_2.fq"),
            "-p",
            str(paired),
            "-u",
            str(unpaired),
        ]
    )
    assert _descriptions(paired) == ["r2/1", "r2/2", "r1/1", "r1/2"]
    assert _descriptions(unpaired) == ["r4/2", "r3/1"]


def test_disinterleave_fastq(tmp_path, resources_dir):
    first = tmp_path / "first.fq"
    second = tmp_path / "second.fq"
    disinterleave_fastq.run(
        [
            "disinterleave-fastq",
            "-p",
            str(resources_dir / "interleaved.fq"),
            "-1",
            str(first),
            "-2",
            str(second),
        ]
    )
    assert _descriptions(first) == ["pair1/1", "pair2/1", "pair3/1"]
    assert _descriptions(second) == ["pair1/2", "pair2/2", "pair3/2"]


def test_disinterleave_routes_unpaired_reads(tmp_path, resources_dir):
    first = tmp_path / "first.fq"
    second = tmp_path / "second.fq"
    disinterleave_fastq.disinterleave_fastq(
        str(resources_dir / "interleaved.fq"), str(first), str(second), str(resources_dir / "reads_2.fq")
    )
    assert _descriptions(first)[-1] == "pair3/1"
    assert _descriptions(second)[-3:] == ["r2/2", "r1/2", "r4/2"]


def test_disinterleave_rejects_unpaired_input(tmp_path, resources_dir):
    with pytest.raises(PairingError):
        disinterleave_fastq.disinterleave_fastq(
            str(resources_dir / "reads_1.fq"), str(tmp_path / "1.fq"), str(tmp_path / "2.fq")
        )


@pytest.mark.parametrize("probability, expected", [(0.0, 3), (1.0, 0)])
def test_downsample_interleaved_fastq(tmp_path, resources_dir, probability, expected):
    output_file = tmp_path / "out.fq"
    kept = downsample_interleaved_fastq.downsample_interleaved_fastq(
        str(resources_dir / "interleaved.fq"), str(output_file), probability, seed=42
    )
    assert kept == expected
    assert len(_descriptions(output_file)) == 2 * expected


def test_downsample_is_reproducible_with_seed(tmp_path, resources_dir):
    outputs = []
    for i in range(2):
        output_file = tmp_path / f"out{i}.fq"
        downsample_interleaved_fastq.run(
            [
                "downsample-interleaved-fastq",
                "-i",
                str(resources_dir / "interleaved.fq"),
                "-o",
                str(output_file),
                "-p",
                "0.5",
                "-z",
                "7",
            ]
        )
        outputs.append(output_file.read_text())
    assert outputs[0] == outputs[1]


@pytest.mark.parametrize("probability, expected", [(0.0, 4), (1.0, 0)])
def test_downsample_fastq(tmp_path, resources_dir, probability, expected):
    output_file = tmp_path / "out.fq"
    kept = downsample_fastq.downsample_fastq(str(resources_dir / "reads.fq"), str(output_file), probability, seed=42)
    assert kept == expected
    assert len(_descriptions(output_file)) == expected


def test_downsample_fastq_keeps_record_order(tmp_path, resources_dir):
    output_file = tmp_path / "out.fq"
    downsample_fastq.run(
        ["downsample-fastq", "-i", str(resources_dir / "reads.fq"), "-o", str(output_file), "-p", "0.5", "-z", "3"]
    )
    kept = _descriptions(output_file)
    all_reads = _descriptions(resources_dir / "reads.fq")
    assert kept == [d for d in all_reads if d in kept]
