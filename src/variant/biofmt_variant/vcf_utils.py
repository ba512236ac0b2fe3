"""Text level VCF access, for tools that pass records through with few or no changes."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TextIO

from biofmt_core.record_utils import RecordFormatError

VCF_EXTENSIONS = (".vcf",)
META_PREFIX = "##"
COLUMN_HEADER_PREFIX = "#CHROM"
FIXED_COLUMNS = 8
SAMPLE_COLUMNS_START = 9
CHROM = 0
FORMAT = 8

_STRUCTURED_META_PATTERN = re.compile(r"^##([^=]+)=<(.*)>$")


class VcfTextReader:
    """Read the meta lines and column header of a VCF stream, then stream its data lines.

    Parameters
    ----------
    handle : TextIO
        VCF text stream, positioned at the start of the file.

    Raises
    ------
    RecordFormatError
        If the stream has no ``#CHROM`` column header line before the first data line.
    """

    def __init__(self, handle: TextIO):
        self.handle = handle
        self.meta_lines: list[str] = []
        self.column_header: str | None = None
        for line in handle:
            line = line.rstrip("\r\n")
            if line.startswith(META_PREFIX):
                self.meta_lines.append(line)
            elif line.startswith("#"):
                self.column_header = line
                break
            elif line:
                raise RecordFormatError(f"VCF data line before #CHROM header line: {line}")
        if self.column_header is None:
            raise RecordFormatError("missing #CHROM header line in VCF")

    @property
    def header(self) -> str:
        """Meta lines and column header, newline terminated."""
        return "".join(f"{line}\n" for line in [*self.meta_lines, self.column_header])

    @property
    def samples(self) -> list[str]:
        return self.column_header.split("\t")[SAMPLE_COLUMNS_START:]

    def records(self) -> Iterator[list[str]]:
        """Tab-delimited columns of each data line."""
        for line in self.handle:
            line = line.rstrip("\r\n")
            if not line:
                continue
            columns = line.split("\t")
            if len(columns) < FIXED_COLUMNS:
                raise RecordFormatError(f"expected at least {FIXED_COLUMNS} columns in VCF line: {line}")
            yield columns


def format_record(columns: list[str]) -> str:
    return "\t".join(columns) + "\n"


def _split_unquoted(value: str, separator: str = ",") -> list[str]:
    fields = []
    start = 0
    quoted = False
    for i, c in enumerate(value):
        if c == '"':
            quoted = not quoted
        elif c == separator and not quoted:
            fields.append(value[start:i])
            start = i + 1
    fields.append(value[start:])
    return fields


def parse_structured_meta(line: str) -> tuple[str, list[tuple[str, str]]] | None:
    """
    Parse a structured ``##KEY=<k1=v1,k2="v 2",...>`` meta line.

    Parameters
    ----------
    line : str
        VCF meta line.

    Returns
    -------
    tuple[str, list[tuple[str, str]]] | None
        The meta line key and its fields as (name, value) pairs in line order, with quotes removed
        from values; None if the line is not structured.

    Raises
    ------
    RecordFormatError
        If a field has no ``=``.
    """
    match = _STRUCTURED_META_PATTERN.match(line)
    if match is None:
        return None
    fields = []
    for field in _split_unquoted(match.group(2)):
        name, separator, value = field.partition("=")
        if not separator:
            raise RecordFormatError(f"invalid ##{match.group(1)} meta line: {line}")
        if len(value) > 1 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        fields.append((name, value))
    return match.group(1), fields
