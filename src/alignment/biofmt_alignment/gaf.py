"""Graph Alignment Format (GAF) records.

See https://github.com/lh3/gfatools/blob/master/doc/rGFA.md#the-graph-alignment-format-gaf
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, TextIO

from biofmt_core.record_utils import (
    MISSING,
    RecordFormatError,
    Tag,
    data_lines,
    format_tags,
    optional_int,
    parse_tags,
    tag_values,
)

GAF_EXTENSIONS = (".gaf",)
GAF_COLUMNS = 12


def _format_optional(value) -> str:
    return MISSING if value is None else str(value)


@dataclass
class GafRecord:
    """GAF alignment line; query and path coordinates are 0-based, half-open."""

    query_name: str
    query_length: int | None
    query_start: int | None
    query_end: int | None
    strand: str
    path_name: str
    path_length: int | None
    path_start: int | None
    path_end: int | None
    matches: int | None
    alignment_length: int | None
    mapping_quality: int | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> GafRecord:
        tokens = line.split("\t")
        if len(tokens) < GAF_COLUMNS:
            raise RecordFormatError(f"expected at least {GAF_COLUMNS} columns in GAF line: {line}")
        try:
            return cls(
                query_name=tokens[0],
                query_length=optional_int(tokens[1]),
                query_start=optional_int(tokens[2]),
                query_end=optional_int(tokens[3]),
                strand=tokens[4],
                path_name=tokens[5],
                path_length=optional_int(tokens[6]),
                path_start=optional_int(tokens[7]),
                path_end=optional_int(tokens[8]),
                matches=optional_int(tokens[9]),
                alignment_length=optional_int(tokens[10]),
                mapping_quality=optional_int(tokens[11]),
                tag_fields=parse_tags(tokens[GAF_COLUMNS:]),
            )
        except ValueError as e:
            raise RecordFormatError(f"invalid GAF line: {line}") from e

    @property
    def tags(self) -> dict[str, Any]:
        return tag_values(self.tag_fields)

    def __str__(self):
        columns = [
            self.query_name,
            _format_optional(self.query_length),
            _format_optional(self.query_start),
            _format_optional(self.query_end),
            self.strand,
            self.path_name,
            _format_optional(self.path_length),
            _format_optional(self.path_start),
            _format_optional(self.path_end),
            _format_optional(self.matches),
            _format_optional(self.alignment_length),
            _format_optional(self.mapping_quality),
        ]
        return "\t".join(columns + format_tags(self.tag_fields))


def read_gaf(handle: TextIO) -> Iterator[GafRecord]:
    for line in data_lines(handle):
        yield GafRecord.parse(line)
