"""GFA 1.0 line models.

Header, segment, link, containment, path and traversal lines are parsed; other lines
are skipped. See https://github.com/GFA-spec/GFA-spec/blob/master/GFA1.md
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar, TextIO

from biofmt_core.logger import logger
from biofmt_core.record_utils import MISSING, RecordFormatError, Tag, format_tags, parse_tags, tag_values

GFA1_EXTENSIONS = (".gfa1", ".gfa")
ORIENTATIONS = ("+", "-")


def _optional(value: str) -> str | None:
    return None if value == MISSING else value


def _format_optional(value) -> str:
    return MISSING if value is None else str(value)


@dataclass(frozen=True)
class Reference:
    """Oriented segment reference, e.g. ``11+``"""

    name: str
    orientation: str

    @classmethod
    def parse(cls, value: str) -> Reference:
        return cls.from_columns(value[:-1], value[-1:])

    @classmethod
    def from_columns(cls, name: str, orientation: str) -> Reference:
        if not name or orientation not in ORIENTATIONS:
            raise RecordFormatError(f"invalid segment reference '{name}{orientation}'")
        return cls(name, orientation)

    def __str__(self):
        return f"{self.name}{self.orientation}"


@dataclass
class Gfa1Record:
    """Base of GFA 1.0 lines; subclasses define the mandatory columns"""

    record_type: ClassVar[str] = ""
    mandatory_columns: ClassVar[int] = 1

    @classmethod
    def split(cls, line: str) -> tuple[list[str], dict[str, Tag]]:
        tokens = line.split("\t")
        if len(tokens) < cls.mandatory_columns:
            raise RecordFormatError(
                f"expected at least {cls.mandatory_columns} columns in GFA 1.0 {cls.record_type} line: {line}"
            )
        return tokens[1 : cls.mandatory_columns], parse_tags(tokens[cls.mandatory_columns :])

    @property
    def tags(self) -> dict[str, Any]:
        return tag_values(self.tag_fields)

    def columns(self) -> list[str]:
        raise NotImplementedError

    def __str__(self):
        return "\t".join([self.record_type, *self.columns(), *format_tags(self.tag_fields)])


@dataclass
class Header(Gfa1Record):
    record_type: ClassVar[str] = "H"
    mandatory_columns: ClassVar[int] = 1

    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Header:
        _, tags = cls.split(line)
        return cls(tags)

    def columns(self) -> list[str]:
        return []


@dataclass
class Segment(Gfa1Record):
    record_type: ClassVar[str] = "S"
    mandatory_columns: ClassVar[int] = 3

    name: str
    sequence: str | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Segment:
        (name, sequence), tags = cls.split(line)
        return cls(name, _optional(sequence), tags)

    @property
    def length(self) -> int | None:
        """Segment length, the LN tag when present, otherwise the sequence length; None if neither is known."""
        if "LN" in self.tag_fields:
            return self.tag_fields["LN"].value
        if self.sequence is not None:
            return len(self.sequence)
        return None

    def columns(self) -> list[str]:
        return [self.name, _format_optional(self.sequence)]


@dataclass
class Link(Gfa1Record):
    record_type: ClassVar[str] = "L"
    mandatory_columns: ClassVar[int] = 6

    source: Reference
    target: Reference
    overlap: str | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Link:
        (source, source_orientation, target, target_orientation, overlap), tags = cls.split(line)
        return cls(
            Reference.from_columns(source, source_orientation),
            Reference.from_columns(target, target_orientation),
            _optional(overlap),
            tags,
        )

    def columns(self) -> list[str]:
        return [
            self.source.name,
            self.source.orientation,
            self.target.name,
            self.target.orientation,
            _format_optional(self.overlap),
        ]


@dataclass
class Containment(Gfa1Record):
    record_type: ClassVar[str] = "C"
    mandatory_columns: ClassVar[int] = 7

    container: Reference
    contained: Reference
    position: int
    overlap: str | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Containment:
        (container, container_orientation, contained, contained_orientation, position, overlap), tags = cls.split(
            line
        )
        try:
            position = int(position)
        except ValueError as e:
            raise RecordFormatError(f"invalid position '{position}' in GFA 1.0 line: {line}") from e
        return cls(
            Reference.from_columns(container, container_orientation),
            Reference.from_columns(contained, contained_orientation),
            position,
            _optional(overlap),
            tags,
        )

    def columns(self) -> list[str]:
        return [
            self.container.name,
            self.container.orientation,
            self.contained.name,
            self.contained.orientation,
            str(self.position),
            _format_optional(self.overlap),
        ]


@dataclass
class Path(Gfa1Record):
    record_type: ClassVar[str] = "P"
    mandatory_columns: ClassVar[int] = 4

    name: str
    segments: list[Reference]
    overlaps: list[str] | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Path:
        (name, segments, overlaps), tags = cls.split(line)
        return cls(
            name,
            [Reference.parse(segment) for segment in segments.split(",")],
            None if overlaps == MISSING else overlaps.split(","),
            tags,
        )

    def columns(self) -> list[str]:
        return [
            self.name,
            ",".join(str(segment) for segment in self.segments),
            MISSING if self.overlaps is None else ",".join(self.overlaps),
        ]


@dataclass
class Traversal(Gfa1Record):
    """Step of a path from one segment to the next"""

    record_type: ClassVar[str] = "T"
    mandatory_columns: ClassVar[int] = 8

    path_name: str
    ordinal: int
    source: Reference
    target: Reference
    overlap: str | None
    tag_fields: dict[str, Tag] = field(default_factory=dict)

    @classmethod
    def parse(cls, line: str) -> Traversal:
        (path_name, ordinal, source, source_orientation, target, target_orientation, overlap), tags = cls.split(line)
        try:
            ordinal = int(ordinal)
        except ValueError as e:
            raise RecordFormatError(f"invalid ordinal '{ordinal}' in GFA 1.0 line: {line}") from e
        return cls(
            path_name,
            ordinal,
            Reference.from_columns(source, source_orientation),
            Reference.from_columns(target, target_orientation),
            _optional(overlap),
            tags,
        )

    def columns(self) -> list[str]:
        return [
            self.path_name,
            str(self.ordinal),
            self.source.name,
            self.source.orientation,
            self.target.name,
            self.target.orientation,
            _format_optional(self.overlap),
        ]


RECORD_TYPES = {record.record_type: record for record in (Header, Segment, Link, Containment, Path, Traversal)}


def parse_gfa1(line: str) -> Gfa1Record | None:
    """Parse a GFA 1.0 line, None for blank or unrecognized lines."""
    record = RECORD_TYPES.get(line[:1])
    if record is None:
        return None
    return record.parse(line)


def read_gfa1(handle: TextIO) -> Iterator[Gfa1Record]:
    """
    GFA 1.0 records of a stream, in order.

    Raises
    ------
    RecordFormatError
        If a recognized line cannot be parsed, with the line number.
    """
    skipped = 0
    for line_number, line in enumerate(handle, start=1):
        line = line.rstrip("\r\n")
        try:
            record = parse_gfa1(line)
        except RecordFormatError as e:
            raise RecordFormatError(f"could not read GFA 1.0 record at line {line_number}: {e}") from e
        if record is None:
            if line:
                skipped += 1
            continue
        yield record
    if skipped:
        logger.debug(f"Skipped {skipped} unrecognized GFA 1.0 lines")
