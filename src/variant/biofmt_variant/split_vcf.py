from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool
from biofmt_core.compress import open_input
from biofmt_core.logger import logger
from biofmt_core.split_utils import RecordSplitter, SplitConfig, add_split_arguments
from biofmt_variant.vcf_utils import VCF_EXTENSIONS, VcfTextReader, format_record


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="split-vcf", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    add_split_arguments(parser, "output file suffix, e.g. .vcf.gz")
    return parser.parse_args(argv[1:])


def split_vcf(input_file: str | None, config: SplitConfig) -> list[str]:
    """
    Split VCF records across files, writing the full VCF header to every file.

    Returns
    -------
    list[str]
        Names of the files written, in order.
    """
    with open_input(input_file) as handle:
        reader = VcfTextReader(handle)
        with RecordSplitter(config, header=reader.header) as splitter:
            for columns in reader.records():
                splitter.write(format_record(columns))
    logger.info(f"Split VCF into {len(splitter.file_names)} files")
    return splitter.file_names


def run(argv):
    """Split files in VCF format."""
    args = parse_args(argv)
    split_vcf(args.input_file, SplitConfig.from_args(args, VCF_EXTENSIONS, ".vcf"))


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
