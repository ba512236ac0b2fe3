from __future__ import annotations

import argparse
import math
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_feature.bed import MISSING_VALUE, BedWriter
from biofmt_feature.gff3 import Gff3Record, read_gff3

TRANSCRIPT_ID = "transcript_id"
MIN_BED_SCORE = 0
MAX_BED_SCORE = 1000


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="gff3-to-bed", description=run.__doc__)
    add_input_argument(parser, "GFF3 file")
    add_output_argument(parser, "BED file")
    return parser.parse_args(argv[1:])


def bed_score(record: Gff3Record) -> int:
    """GFF3 score rounded half up and clamped to [0, 1000], 0 when missing."""
    if record.score is None:
        return MIN_BED_SCORE
    return max(MIN_BED_SCORE, min(MAX_BED_SCORE, math.floor(record.score + 0.5)))


def gff3_to_bed(input_file: str | None, output_file: str | None) -> int:
    """
    Convert GFF3 records with a transcript_id attribute to single block BED12 records.

    The BED name is the first transcript_id value; the thick region and the single block
    span the whole feature.

    Returns
    -------
    int
        Number of BED records written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as output:
        writer = BedWriter(output)
        for record in read_gff3(handle):
            transcript_ids = record.attributes.get(TRANSCRIPT_ID)
            if not transcript_ids:
                continue
            writer.write_bed12(
                record.seqid,
                record.start - 1,
                record.end,
                transcript_ids[0],
                bed_score(record),
                record.strand or MISSING_VALUE,
            )
            count += 1
    return count


def run(argv):
    """Convert transcript features in GFF3 format to BED format."""
    args = parse_args(argv)
    gff3_to_bed(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
