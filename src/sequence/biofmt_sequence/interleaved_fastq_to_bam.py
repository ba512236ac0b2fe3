from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

import pysam
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool, string_list
from biofmt_core.compress import STDIO, open_input
from biofmt_core.logger import logger
from biofmt_sequence.paired_reads import interleaved_pairs
from biofmt_sequence.sequence_utils import Fastq, read_fastq

PAIRED = 0x1
UNMAPPED = 0x4
FIRST_OF_PAIR = 0x40
SECOND_OF_PAIR = 0x80
PAIR_SUFFIXES = ("/1", "/2")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="interleaved-fastq-to-bam", description=run.__doc__)
    add_input_argument(parser, "interleaved FASTQ file")
    parser.add_argument("-o", "--output-file", type=str, default=None, help="output BAM file, default stdout")
    parser.add_argument("-r", "--read-group-id", type=str, default=None, help="read group id")
    parser.add_argument("-s", "--read-group-sample", type=str, default=None, help="read group sample")
    parser.add_argument("-y", "--read-group-library", type=str, default=None, help="read group library")
    parser.add_argument("-p", "--read-group-platform-unit", type=str, default=None, help="read group platform unit")
    parser.add_argument(
        "-z", "--read-group-insert-size", type=int, default=None, help="read group predicted median insert size"
    )
    parser.add_argument("-b", "--read-group-barcodes", type=string_list, default=None, help="read group barcodes")
    return parser.parse_args(argv[1:])


@dataclass
class ReadGroup:
    """Read group of the unmapped reads, added to the header and tagged on every read"""

    read_group_id: str
    sample: str | None = None
    library: str | None = None
    platform_unit: str | None = None
    insert_size: int | None = None
    barcodes: list[str] | None = None

    def header_record(self) -> dict:
        record = {"ID": self.read_group_id}
        for key, value in [
            ("SM", self.sample),
            ("LB", self.library),
            ("PU", self.platform_unit),
            ("PI", None if self.insert_size is None else str(self.insert_size)),
            ("BC", "-".join(self.barcodes) if self.barcodes else None),
        ]:
            if value is not None:
                record[key] = value
        return record

    def tag(self, segment: pysam.AlignedSegment) -> None:
        segment.set_tag("RG", self.read_group_id)
        if self.library is not None:
            segment.set_tag("LB", self.library)
        if self.platform_unit is not None:
            segment.set_tag("PU", self.platform_unit)
        if self.insert_size is not None:
            segment.template_length = self.insert_size


def read_name(fastq: Fastq) -> str:
    """SAM read name of a FASTQ record, its first description token without a /1 or /2 suffix."""
    name = fastq.name
    return name[:-2] if name.endswith(PAIR_SUFFIXES) else name


def unmapped_segment(
    fastq: Fastq, flag: int, header: pysam.AlignmentHeader, read_group: ReadGroup | None
) -> pysam.AlignedSegment:
    segment = pysam.AlignedSegment(header)
    segment.query_name = read_name(fastq)
    segment.flag = flag
    segment.reference_id = -1
    segment.reference_start = -1
    segment.next_reference_id = -1
    segment.next_reference_start = -1
    segment.mapping_quality = 0
    segment.query_sequence = fastq.sequence
    segment.query_qualities = pysam.qualitystring_to_array(fastq.quality)
    if read_group is not None:
        read_group.tag(segment)
    return segment


def interleaved_fastq_to_bam(
    input_file: str | None,
    output_file: str | None,
    read_group: ReadGroup | None = None,
) -> int:
    """
    Write read pairs of interleaved FASTQ as unmapped, paired reads in BAM format.

    Parameters
    ----------
    input_file : str | None
        Interleaved FASTQ file, or None for stdin.
    output_file : str | None
        Output BAM file, or None for stdout.
    read_group : ReadGroup, optional
        Read group for the header ``@RG`` line and the RG, LB and PU tags of each read.

    Returns
    -------
    int
        Number of pairs written.

    Raises
    ------
    PairingError
        If a read is not followed by its mate.
    """
    header = {"HD": {"VN": "1.6", "SO": "unsorted"}}
    if read_group is not None:
        header["RG"] = [read_group.header_record()]
    pairs = 0
    with open_input(input_file) as handle, pysam.AlignmentFile(output_file or STDIO, "wb", header=header) as bam:
        for left, right in interleaved_pairs(read_fastq(handle)):
            bam.write(unmapped_segment(left, PAIRED | UNMAPPED | FIRST_OF_PAIR, bam.header, read_group))
            bam.write(unmapped_segment(right, PAIRED | UNMAPPED | SECOND_OF_PAIR, bam.header, read_group))
            pairs += 1
    logger.info(f"Wrote {pairs} read pairs to {output_file or STDIO}")
    return pairs


def run(argv):
    """Convert DNA sequences in interleaved FASTQ format to unaligned BAM format."""
    args = parse_args(argv)
    read_group = None
    if args.read_group_id is not None:
        read_group = ReadGroup(
            args.read_group_id,
            sample=args.read_group_sample,
            library=args.read_group_library,
            platform_unit=args.read_group_platform_unit,
            insert_size=args.read_group_insert_size,
            barcodes=args.read_group_barcodes,
        )
    interleaved_fastq_to_bam(args.input_file, args.output_file, read_group)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
