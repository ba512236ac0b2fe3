from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.rename_references import ReferenceRenamer
from biofmt_variant.vcf_utils import CHROM, VcfTextReader, format_record

REFERENCE_META_PREFIXES = ("##contig", "##reference")


class ReferenceRenameError(RuntimeError):
    """Raised when renaming would make the VCF header inconsistent with its records"""


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="rename-vcf-references", description=run.__doc__)
    parser.add_argument("-c", "--chr", action="store_true", help="add \"chr\" to CHROM names, default remove it")
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "VCF file")
    return parser.parse_args(argv[1:])


def rename_vcf_references(input_file: str | None, output_file: str | None, chr_prefix: bool) -> None:
    """
    Rename the CHROM column of VCF records.

    Raises
    ------
    ReferenceRenameError
        If the header has ``##contig`` or ``##reference`` lines, which would no longer match the records.
    """
    renamer = ReferenceRenamer(chr_prefix)
    with open_input(input_file) as handle:
        reader = VcfTextReader(handle)
        for line in reader.meta_lines:
            if line.startswith(REFERENCE_META_PREFIXES):
                raise ReferenceRenameError(f"cannot rename references in VCF with header line {line}")
        with open_output(output_file) as writer:
            writer.write(reader.header)
            for columns in reader.records():
                columns[CHROM] = renamer.rename(columns[CHROM])
                writer.write(format_record(columns))


def run(argv):
    """Rename references in VCF files."""
    args = parse_args(argv)
    rename_vcf_references(args.input_file, args.output_file, args.chr)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
