from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.rename_references import ReferenceRenamer
from biofmt_feature.gff3 import GFF3_HEADER, read_gff3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="rename-gff3-references", description=run.__doc__)
    parser.add_argument("-c", "--chr", action="store_true", help="add \"chr\" to seqid names, default remove it")
    add_input_argument(parser, "GFF3 file")
    add_output_argument(parser, "GFF3 file")
    return parser.parse_args(argv[1:])


def rename_gff3_references(input_file: str | None, output_file: str | None, chr_prefix: bool) -> None:
    renamer = ReferenceRenamer(chr_prefix)
    with open_input(input_file) as handle, open_output(output_file) as writer:
        writer.write(GFF3_HEADER)
        for record in read_gff3(handle):
            record.seqid = renamer.rename(record.seqid)
            writer.write(f"{record}\n")


def run(argv):
    """Rename references in GFF3 files."""
    args = parse_args(argv)
    rename_gff3_references(args.input_file, args.output_file, args.chr)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
