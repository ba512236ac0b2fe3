import io

import pytest
from biofmt_sequence.sequence_utils import (
    Alphabet,
    format_fasta,
    format_fastq,
    read_fasta,
    read_fastq,
    sanger_quality,
    sequence_name,
)


def test_format_fasta_wraps_sequence():
    assert format_fasta("seq1 desc", "ACGTACGTAC", line_width=4) == ">seq1 desc\nACGT\nACGT\nAC\n"
    assert format_fasta("seq1", "ACGT", line_width=4) == ">seq1\nACGT\n"
    assert format_fasta("seq1", "ACGTACGT", line_width=0) == ">seq1\nACGTACGT\n"
    assert format_fasta("empty", "") == ">empty\n"


def test_format_fastq():
    assert format_fastq("read1", "ACGT", "IIII") == "@read1\nACGT\n+\nIIII\n"


def test_read_fasta_joins_wrapped_lines():
    records = list(read_fasta(io.StringIO(">a first\nACGT\nAC\n>b\nTT\n")))
    assert [(r.description, r.name, r.sequence, r.length) for r in records] == [
        ("a first", "a", "ACGTAC", 6),
        ("b", "b", "TT", 2),
    ]


def test_read_fastq():
    records = list(read_fastq(io.StringIO("@r1 x\nACGT\n+\nIIII\n")))
    assert len(records) == 1
    assert records[0].name == "r1"
    assert records[0].quality == "IIII"
    assert records[0].format() == "@r1 x\nACGT\n+\nIIII\n"


def test_sequence_name():
    assert sequence_name("chr1 assembled") == "chr1"
    assert sequence_name("") == ""


def test_sanger_quality():
    assert sanger_quality(40) == "I"
    assert sanger_quality(0) == "!"
    with pytest.raises(ValueError):
        sanger_quality(94)


def test_alphabet():
    assert Alphabet.parse("DNA") is Alphabet.DNA
    assert Alphabet.parse("aa") is Alphabet.PROTEIN
    assert Alphabet.parse("protein") is Alphabet.PROTEIN
    with pytest.raises(ValueError):
        Alphabet.parse("rna")
