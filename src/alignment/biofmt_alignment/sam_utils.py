"""SAM/BAM access through pysam; records are written back as SAM text."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pysam
from biofmt_core.compress import pysam_input


@contextmanager
def open_alignments(input_file: str | None) -> Iterator[pysam.AlignmentFile]:
    """Open a SAM, BAM or CRAM file, or stdin when input_file is None; the format is detected by htslib.

    bzip2 compressed input is decompressed first, see :func:`pysam_input`.
    """
    with pysam_input(input_file) as path, pysam.AlignmentFile(path, "r", check_sq=False) as alignments:
        yield alignments


def sam_header(alignments: pysam.AlignmentFile) -> str:
    header = str(alignments.header)
    if header and not header.endswith("\n"):
        header += "\n"
    return header


def sam_line(record: pysam.AlignedSegment) -> str:
    return f"{record.to_string()}\n"
