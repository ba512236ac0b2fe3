"""GFF3 records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TextIO
from urllib.parse import unquote

from biofmt_core.record_utils import RecordFormatError, parse_int

GFF3_EXTENSIONS = (".gff3", ".gff")
GFF3_HEADER = "##gff-version 3\n"
GFF3_COLUMNS = 9
FASTA_DIRECTIVE = "##FASTA"
MISSING_VALUE = "."


def parse_attributes(attributes: str) -> dict[str, list[str]]:
    """Parse a GFF3 attributes column, ``key=value1,value2;key2=value``, into lists of values."""
    parsed: dict[str, list[str]] = {}
    if attributes in ("", MISSING_VALUE):
        return parsed
    for token in attributes.split(";"):
        if not token:
            continue
        key, sep, value = token.partition("=")
        if not sep:
            raise RecordFormatError(f"invalid GFF3 attribute '{token}'")
        parsed.setdefault(unquote(key), []).extend(unquote(v) for v in value.split(","))
    return parsed


@dataclass
class Gff3Record:
    """GFF3 feature line, with 1-based fully closed start and end as in the file."""

    seqid: str
    source: str
    type: str
    start: int
    end: int
    score_text: str
    strand: str | None
    phase: str | None
    attributes_text: str

    @classmethod
    def parse(cls, line: str) -> Gff3Record:
        tokens = line.split("\t")
        if len(tokens) != GFF3_COLUMNS:
            raise RecordFormatError(f"expected {GFF3_COLUMNS} columns in GFF3 line: {line}")
        seqid, source, feature_type, start, end, score, strand, phase, attributes = tokens
        if score != MISSING_VALUE:
            try:
                float(score)
            except ValueError as e:
                raise RecordFormatError(f"invalid score '{score}' in GFF3 line: {line}") from e
        return cls(
            seqid=seqid,
            source=source,
            type=feature_type,
            start=parse_int(start, "start", line),
            end=parse_int(end, "end", line),
            score_text=score,
            strand=None if strand == MISSING_VALUE else strand,
            phase=None if phase == MISSING_VALUE else phase,
            attributes_text=attributes,
        )

    @property
    def attributes(self) -> dict[str, list[str]]:
        return parse_attributes(self.attributes_text)

    @property
    def score(self) -> float | None:
        return None if self.score_text == MISSING_VALUE else float(self.score_text)

    def __str__(self):
        return "\t".join(
            [
                self.seqid,
                self.source,
                self.type,
                str(self.start),
                str(self.end),
                self.score_text,
                self.strand or MISSING_VALUE,
                self.phase or MISSING_VALUE,
                self.attributes_text,
            ]
        )


def read_gff3(handle: TextIO) -> Iterator[Gff3Record]:
    """GFF3 feature records of a stream; directives and comments are skipped and ``##FASTA`` ends the features."""
    for line in handle:
        line = line.rstrip("\r\n")
        if line.startswith(FASTA_DIRECTIVE):
            return
        if not line or line.startswith("#"):
            continue
        yield Gff3Record.parse(line)
