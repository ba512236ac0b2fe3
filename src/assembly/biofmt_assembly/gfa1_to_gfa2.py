from __future__ import annotations

import argparse
import sys

from biofmt_assembly.gfa1 import (
    Containment,
    Gfa1Record,
    Header,
    Link,
    Path,
    Reference,
    Segment,
    Traversal,
    read_gfa1,
)
from biofmt_assembly.gfa2 import Gfa2Record
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_core.record_utils import MISSING, RecordFormatError, Tag

GFA1_VERSION = "1.0"
GFA2_VERSION = "2.0"
# edge positions unknown in GFA 1.0
UNKNOWN_POSITION = 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="gfa1-to-gfa2", description=run.__doc__)
    add_input_argument(parser, "GFA 1.0 file")
    add_output_argument(parser, "GFA 2.0 file")
    return parser.parse_args(argv[1:])


def _edge(
    source: Reference, target: Reference, target_start: int, overlap: str | None, tag_fields: dict[str, Tag]
) -> Gfa2Record:
    return Gfa2Record(
        "E",
        {
            "id": MISSING,
            "source": str(source),
            "target": str(target),
            "source_start": UNKNOWN_POSITION,
            "source_end": UNKNOWN_POSITION,
            "target_start": target_start,
            "target_end": UNKNOWN_POSITION,
            "alignment": overlap or MISSING,
        },
        tag_fields,
    )


def convert_record(record: Gfa1Record) -> Gfa2Record | None:
    """
    Convert a GFA 1.0 record to GFA 2.0.

    Links and containments become edges with unknown positions, except for the containment
    position as target start. Paths become ordered groups. Traversals have no GFA 2.0 form
    and are dropped.

    Returns
    -------
    Gfa2Record | None
        The converted record, None for a traversal.

    Raises
    ------
    RecordFormatError
        If the header VN tag is not 1.0.
    """
    if isinstance(record, Header):
        tag_fields = dict(record.tag_fields)
        if "VN" in tag_fields:
            version = tag_fields.pop("VN").value
            if version != GFA1_VERSION:
                raise RecordFormatError(f"cannot convert input as GFA 1.0, was {version}")
            tag_fields = {"VN": Tag("VN", "Z", GFA2_VERSION), **tag_fields}
        return Gfa2Record("H", {}, tag_fields)
    if isinstance(record, Segment):
        if record.sequence is not None:
            length = len(record.sequence)
        else:
            length = record.tag_fields["LN"].value if "LN" in record.tag_fields else 0
        return Gfa2Record(
            "S", {"id": record.name, "length": length, "sequence": record.sequence or MISSING}, record.tag_fields
        )
    if isinstance(record, Link):
        return _edge(record.source, record.target, UNKNOWN_POSITION, record.overlap, record.tag_fields)
    if isinstance(record, Containment):
        return _edge(record.container, record.contained, record.position, record.overlap, record.tag_fields)
    if isinstance(record, Path):
        references = " ".join(str(segment) for segment in record.segments)
        return Gfa2Record("O", {"id": record.name, "references": references}, record.tag_fields)
    if isinstance(record, Traversal):
        return None
    raise TypeError(f"unexpected GFA 1.0 record {type(record).__name__}")


def gfa1_to_gfa2(input_file: str | None, output_file: str | None) -> int:
    """
    Write each GFA 1.0 record as GFA 2.0.

    Returns
    -------
    int
        Number of records written.
    """
    count = skipped = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for record in read_gfa1(handle):
            converted = convert_record(record)
            if converted is None:
                skipped += 1
                continue
            writer.write(f"{converted}\n")
            count += 1
    if skipped:
        logger.info(f"Skipped {skipped} traversals, which have no GFA 2.0 form")
    return count


def run(argv):
    """Convert GFA 1.0 format to GFA 2.0 format."""
    args = parse_args(argv)
    gfa1_to_gfa2(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
