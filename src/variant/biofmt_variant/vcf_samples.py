from __future__ import annotations

import argparse
import sys

import pysam
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_output, pysam_input


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="vcf-samples", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "file of sample ids")
    return parser.parse_args(argv[1:])


def vcf_samples(input_file: str | None, output_file: str | None) -> list[str]:
    """
    Write the sample ids of a VCF file, one per line, in header order.

    Returns
    -------
    list[str]
        Sample ids.
    """
    with pysam_input(input_file) as vcf_path, pysam.VariantFile(vcf_path) as vcf:
        samples = list(vcf.header.samples)
    with open_output(output_file) as writer:
        writer.writelines(f"{sample}\n" for sample in samples)
    return samples


def run(argv):
    """List the samples in VCF format."""
    args = parse_args(argv)
    vcf_samples(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
