"""Pairwise mApping Format (PAF) records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, TextIO

from biofmt_core.record_utils import RecordFormatError, Tag, data_lines, format_tags, parse_int, parse_tags, tag_values

PAF_EXTENSIONS = (".paf",)
PAF_COLUMNS = 12


@dataclass
class PafRecord:
    """PAF alignment line; query and target coordinates are 0-based, half-open."""

    query_name: str
    query_length: int
    query_start: int
    query_end: int
    strand: str
    target_name: str
    target_length: int
    target_start: int
    target_end: int
    matches: int
    alignment_length: int
    mapping_quality: int
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> PafRecord:
        tokens = line.split("\t")
        if len(tokens) < PAF_COLUMNS:
            raise RecordFormatError(f"expected at least {PAF_COLUMNS} columns in PAF line: {line}")
        if tokens[4] not in ("+", "-"):
            raise RecordFormatError(f"invalid strand '{tokens[4]}' in PAF line: {line}")
        return cls(
            query_name=tokens[0],
            query_length=parse_int(tokens[1], "query length", line),
            query_start=parse_int(tokens[2], "query start", line),
            query_end=parse_int(tokens[3], "query end", line),
            strand=tokens[4],
            target_name=tokens[5],
            target_length=parse_int(tokens[6], "target length", line),
            target_start=parse_int(tokens[7], "target start", line),
            target_end=parse_int(tokens[8], "target end", line),
            matches=parse_int(tokens[9], "number of matches", line),
            alignment_length=parse_int(tokens[10], "alignment block length", line),
            mapping_quality=parse_int(tokens[11], "mapping quality", line),
            tag_fields=parse_tags(tokens[PAF_COLUMNS:]),
        )

    @property
    def tags(self) -> dict[str, Any]:
        return tag_values(self.tag_fields)

    def __str__(self):
        columns = [
            self.query_name,
            str(self.query_length),
            str(self.query_start),
            str(self.query_end),
            self.strand,
            self.target_name,
            str(self.target_length),
            str(self.target_start),
            str(self.target_end),
            str(self.matches),
            str(self.alignment_length),
            str(self.mapping_quality),
        ]
        return "\t".join(columns + format_tags(self.tag_fields))


def read_paf(handle: TextIO) -> Iterator[PafRecord]:
    for line in data_lines(handle):
        yield PafRecord.parse(line)
