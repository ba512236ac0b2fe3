"""BED records, kept as parsed columns so they are written back as read."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TextIO

from biofmt_core.record_utils import RecordFormatError, data_lines, parse_int

BED_EXTENSIONS = (".bed",)
BED_SKIP_PREFIXES = ("#", "track", "browser")
BED_MIN_COLUMNS = 3
MISSING_VALUE = "."


@dataclass
class BedRecord:
    """BED record; columns after chromEnd are kept as text in ``extra``."""

    chrom: str
    start: int
    end: int
    extra: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, line: str) -> BedRecord:
        tokens = line.split("\t")
        if len(tokens) < BED_MIN_COLUMNS:
            raise RecordFormatError(f"expected at least {BED_MIN_COLUMNS} columns in BED line: {line}")
        start = parse_int(tokens[1], "chromStart", line)
        end = parse_int(tokens[2], "chromEnd", line)
        if start > end:
            raise RecordFormatError(f"start > end in BED line: {start} > {end}")
        return cls(tokens[0], start, end, tokens[3:])

    def _column(self, index: int) -> str | None:
        if len(self.extra) > index and self.extra[index] != MISSING_VALUE:
            return self.extra[index]
        return None

    @property
    def name(self) -> str | None:
        return self._column(0)

    @property
    def score(self) -> float | None:
        value = self._column(1)
        return None if value is None else float(value)

    @property
    def strand(self) -> str | None:
        return self._column(2)

    @property
    def length(self) -> int:
        return self.end - self.start

    def __str__(self):
        return "\t".join([self.chrom, str(self.start), str(self.end), *self.extra])


def read_bed(handle: TextIO) -> Iterator[BedRecord]:
    """BED records of a stream, skipping comment, track and browser lines."""
    for line in data_lines(handle, BED_SKIP_PREFIXES):
        yield BedRecord.parse(line)


class BedWriter:
    """Write BED records, one per line, to a text writer."""

    def __init__(self, writer):
        self.writer = writer

    def write(self, record: BedRecord) -> None:
        self.writer.write(f"{record}\n")

    def write_bed12(
        self,
        chrom: str,
        start: int,
        end: int,
        name: str,
        score: int = 0,
        strand: str = MISSING_VALUE,
    ) -> None:
        """Write a single block BED12 record spanning start to end."""
        if start > end:
            raise ValueError(f"start > end in write bed file: {start} > {end}")
        columns = [chrom, start, end, name, score, strand, start, end, "0", 1, end - start, 0]
        self.writer.write("\t".join(str(c) for c in columns) + "\n")
