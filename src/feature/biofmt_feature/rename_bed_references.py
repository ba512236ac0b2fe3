from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.rename_references import ReferenceRenamer
from biofmt_feature.bed import BedWriter, read_bed


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="rename-bed-references", description=run.__doc__)
    parser.add_argument("-c", "--chr", action="store_true", help="add \"chr\" to chrom names, default remove it")
    add_input_argument(parser, "BED file")
    add_output_argument(parser, "BED file")
    return parser.parse_args(argv[1:])


def rename_bed_references(input_file: str | None, output_file: str | None, chr_prefix: bool) -> None:
    """Rename the chrom column of BED records, adding the ``chr`` prefix if chr_prefix else removing it."""
    renamer = ReferenceRenamer(chr_prefix)
    with open_input(input_file) as handle, open_output(output_file) as output:
        writer = BedWriter(output)
        for record in read_bed(handle):
            record.chrom = renamer.rename(record.chrom)
            writer.write(record)


def run(argv):
    """Rename references in BED files."""
    args = parse_args(argv)
    rename_bed_references(args.input_file, args.output_file, args.chr)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
