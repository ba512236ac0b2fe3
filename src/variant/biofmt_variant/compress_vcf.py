from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_variant.vcf_utils import VcfTextReader, format_record


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="compress-vcf", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "VCF file")
    return parser.parse_args(argv[1:])


def compress_vcf(input_file: str | None, output_file: str | None) -> None:
    with open_input(input_file) as handle, open_output(output_file) as writer:
        reader = VcfTextReader(handle)
        writer.write(reader.header)
        for columns in reader.records():
            writer.write(format_record(columns))


def run(argv):
    """Compress variants in VCF format."""
    args = parse_args(argv)
    compress_vcf(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
