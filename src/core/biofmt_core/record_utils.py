"""Helpers shared by the tab-delimited record models (BED, GFF3, GAF, PAF, GFA)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TextIO

MISSING = "*"
TAG_PARTS = 3


class RecordFormatError(ValueError):
    """Raised when a line cannot be parsed as a record of the expected format"""


@dataclass(frozen=True)
class Tag:
    """SAM style optional field, e.g. ``LN:i:1200``.

    The raw text is kept so records are written back exactly as read.
    """

    name: str
    type: str
    raw: str

    @classmethod
    def parse(cls, text: str) -> Tag:
        parts = text.split(":", TAG_PARTS - 1)
        if len(parts) != TAG_PARTS or len(parts[0]) != 2 or len(parts[1]) != 1:  # noqa: PLR2004
            raise RecordFormatError(f"invalid tag '{text}', expected NN:T:value")
        return cls(*parts)

    @property
    def value(self) -> Any:
        if self.type == "i":
            return int(self.raw)
        if self.type == "f":
            return float(self.raw)
        if self.type == "B":
            subtype, *values = self.raw.split(",")
            convert = float if subtype == "f" else int
            return [convert(v) for v in values]
        return self.raw

    def __str__(self):
        return f"{self.name}:{self.type}:{self.raw}"


def parse_tags(fields: list[str]) -> dict[str, Tag]:
    """Parse optional tag fields into a dict keyed by tag name, in input order."""
    tags = {}
    for field in fields:
        tag = Tag.parse(field)
        tags[tag.name] = tag
    return tags


def tag_values(tags: dict[str, Tag]) -> dict[str, Any]:
    """Typed tag values keyed by tag name, for use in filter expressions."""
    return {name: tag.value for name, tag in tags.items()}


def format_tags(tags: dict[str, Tag]) -> list[str]:
    return [str(tag) for tag in tags.values()]


def parse_int(value: str, field: str, line: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RecordFormatError(f"invalid {field} '{value}' in line: {line}") from e


def optional_int(value: str) -> int | None:
    return None if value == MISSING else int(value)


def data_lines(handle: TextIO, comment_prefixes: tuple[str, ...] = ("#",)) -> Iterator[str]:
    """Lines of a text stream with line endings stripped, skipping blank and comment lines."""
    for line in handle:
        line = line.rstrip("\r\n")
        if not line or line.startswith(comment_prefixes):
            continue
        yield line
