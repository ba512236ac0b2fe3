"""GFA 2.0 lines, with named mandatory columns and optional tags.

See https://github.com/GFA-spec/GFA-spec/blob/master/GFA2.md
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, TextIO

from biofmt_core.record_utils import RecordFormatError, Tag, format_tags, parse_tags, tag_values

GFA2_EXTENSIONS = (".gfa2",)

# mandatory column names by record type, after the record type column
COLUMNS = {
    "H": (),
    "S": ("id", "length", "sequence"),
    "F": ("segment", "external", "segment_start", "segment_end", "fragment_start", "fragment_end", "alignment"),
    "E": ("id", "source", "target", "source_start", "source_end", "target_start", "target_end", "alignment"),
    "G": ("id", "source", "target", "distance", "variance"),
    "O": ("id", "references"),
    "U": ("id", "ids"),
}
INTEGER_COLUMNS = {"length", "distance"}


@dataclass
class Gfa2Record:
    """GFA 2.0 line of one of the record types H, S, F, E, G, O or U"""

    record_type: str
    columns: dict[str, Any]
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Gfa2Record:
        tokens = line.split("\t")
        record_type = tokens[0]
        names = COLUMNS.get(record_type)
        if names is None:
            raise RecordFormatError(f"unrecognized GFA 2.0 record type '{record_type}' in line: {line}")
        if len(tokens) < len(names) + 1:
            raise RecordFormatError(f"expected at least {len(names) + 1} columns in GFA 2.0 line: {line}")
        columns = {}
        for name, value in zip(names, tokens[1:]):
            if name in INTEGER_COLUMNS and value != "*":
                try:
                    value = int(value)
                except ValueError as e:
                    raise RecordFormatError(f"invalid {name} '{value}' in GFA 2.0 line: {line}") from e
            columns[name] = value
        return cls(record_type, columns, parse_tags(tokens[len(names) + 1 :]))

    @property
    def tags(self) -> dict[str, Any]:
        return tag_values(self.tag_fields)

    def __str__(self):
        return "\t".join([self.record_type, *(str(v) for v in self.columns.values()), *format_tags(self.tag_fields)])


def read_gfa2(handle: TextIO) -> Iterator[Gfa2Record]:
    """GFA 2.0 records of a stream; blank, comment and unrecognized lines are skipped."""
    for line_number, line in enumerate(handle, start=1):
        line = line.rstrip("\r\n")
        if line.split("\t", 1)[0] not in COLUMNS:
            continue
        try:
            record = Gfa2Record.parse(line)
        except RecordFormatError as e:
            raise RecordFormatError(f"could not read GFA 2.0 record at line {line_number}: {e}") from e
        yield record
