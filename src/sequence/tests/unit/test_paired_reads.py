import pytest
from biofmt_sequence.paired_reads import PairingError, interleaved_pairs, is_left, is_right, pair_reads, prefix
from biofmt_sequence.sequence_utils import Fastq


def _read(description):
    return Fastq(description, "ACGT", "IIII")


@pytest.mark.parametrize(
    "description, left, right, expected_prefix",
    [
        ("read/1", True, False, "read"),
        ("read/2", False, True, "read"),
        ("read 1:N:0:2", True, False, "read"),
        ("read 2:Y:18:ATCACG", False, True, "read"),
        ("read_1", True, False, "read"),
        ("read", False, False, "read"),
    ],
)
def test_pair_markers(description, left, right, expected_prefix):
    fastq = _read(description)
    assert is_left(fastq) is left
    assert is_right(fastq) is right
    assert prefix(fastq) == expected_prefix


def test_pair_reads():
    lefts = [_read("r1/1"), _read("r2/1"), _read("r3/1")]
    rights = [_read("r2/2"), _read("r1/2"), _read("r4/2")]
    result = [
        (left.description if left else None, right.description if right else None)
        for left, right in pair_reads(lefts, rights)
    ]
    assert result == [("r2/1", "r2/2"), ("r1/1", "r1/2"), (None, "r4/2"), ("r3/1", None)]


def test_interleaved_pairs():
    reads = [_read("a/1"), _read("a/2"), _read("b/1"), _read("b/2")]
    pairs = list(interleaved_pairs(reads))
    assert [(left.description, right.description) for left, right in pairs] == [("a/1", "a/2"), ("b/1", "b/2")]


@pytest.mark.parametrize(
    "descriptions",
    [
        ["a/2", "a/1"],
        ["a/1", "b/2"],
        ["a/1", "a/2", "b/1"],
    ],
)
def test_interleaved_pairs_unpaired(descriptions):
    with pytest.raises(PairingError, match="unpaired read"):
        list(interleaved_pairs([_read(d) for d in descriptions]))
