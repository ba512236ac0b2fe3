"""FASTA and FASTQ records, read with Biopython's low level parsers and written as text."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

DEFAULT_LINE_WIDTH = 70
FASTA_EXTENSIONS = (".fa", ".fasta", ".fna", ".faa")
FASTQ_EXTENSIONS = (".fq", ".fastq")
SANGER_OFFSET = 33
MAX_SANGER_QUALITY = 93


class Alphabet(Enum):
    """Sequence alphabet"""

    DNA = "dna"
    PROTEIN = "protein"

    @classmethod
    def parse(cls, value: str) -> Alphabet:
        """Parse an alphabet name, "protein" or "aa" for protein, "dna" otherwise."""
        value = value.lower()
        if value in ("protein", "aa"):
            return cls.PROTEIN
        if value == "dna":
            return cls.DNA
        raise ValueError(f"invalid alphabet '{value}', must be one of dna, protein")


@dataclass
class Fasta:
    description: str
    sequence: str

    @property
    def name(self) -> str:
        return sequence_name(self.description)

    @property
    def length(self) -> int:
        return len(self.sequence)

    def format(self, line_width: int = DEFAULT_LINE_WIDTH) -> str:
        return format_fasta(self.description, self.sequence, line_width)


@dataclass
class Fastq:
    description: str
    sequence: str
    quality: str

    @property
    def name(self) -> str:
        return sequence_name(self.description)

    @property
    def length(self) -> int:
        return len(self.sequence)

    def format(self) -> str:
        return format_fastq(self.description, self.sequence, self.quality)


def sequence_name(description: str) -> str:
    """Sequence name, the first whitespace delimited token of a description line."""
    tokens = description.split(maxsplit=1)
    return tokens[0] if tokens else ""


def read_fasta(handle: TextIO) -> Iterator[Fasta]:
    for description, sequence in SimpleFastaParser(handle):
        yield Fasta(description, sequence)


def read_fastq(handle: TextIO) -> Iterator[Fastq]:
    for description, sequence, quality in FastqGeneralIterator(handle):
        yield Fastq(description, sequence, quality)


def format_fasta(description: str, sequence: str, line_width: int = DEFAULT_LINE_WIDTH) -> str:
    """Format a FASTA record, wrapping the sequence at line_width characters (no wrapping when <= 0).

    Parameters
    ----------
    description : str
        Description line, without the leading ">".
    sequence : str
        Sequence.
    line_width : int
        Sequence line width.

    Returns
    -------
    str
        FASTA record text, newline terminated.
    """
    if line_width <= 0:
        lines = [sequence] if sequence else []
    else:
        lines = [sequence[i : i + line_width] for i in range(0, len(sequence), line_width)]
    return "".join(f"{line}\n" for line in [f">{description}", *lines])


def format_fastq(description: str, sequence: str, quality: str) -> str:
    return f"@{description}\n{sequence}\n+\n{quality}\n"


def sanger_quality(quality: int) -> str:
    """Single Sanger encoded quality character for a phred quality score."""
    if not 0 <= quality <= MAX_SANGER_QUALITY:
        raise ValueError(f"quality must be in [0, {MAX_SANGER_QUALITY}], got {quality}")
    return chr(quality + SANGER_OFFSET)


def add_line_width_argument(parser) -> None:
    parser.add_argument(
        "-w",
        "--line-width",
        type=int,
        default=DEFAULT_LINE_WIDTH,
        help=f"line width, default {DEFAULT_LINE_WIDTH}",
    )


def add_alphabet_argument(parser, flag: str = "-e") -> None:
    parser.add_argument(
        flag,
        "--alphabet",
        type=Alphabet.parse,
        default=Alphabet.DNA,
        help="input FASTA alphabet { dna, protein }, default dna",
    )
