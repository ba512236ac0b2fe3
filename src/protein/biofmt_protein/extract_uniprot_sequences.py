from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_protein.uniprot import read_entry_sequences


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="extract-uniprot-sequences", description=run.__doc__)
    add_input_argument(parser, "UniProt XML file")
    add_output_argument(parser, "sequence file")
    return parser.parse_args(argv[1:])


def extract_uniprot_sequences(input_file: str | None, output_file: str | None) -> int:
    """
    Write one tab-separated line per UniProt entry.

    Columns are accession, length, mass, checksum, modified, version, precursor, fragment
    (empty when absent) and sequence.

    Returns
    -------
    int
        Number of entries written.
    """
    count = 0
    with open_input(input_file) as handle, open_output(output_file) as writer:
        for entry_sequence in read_entry_sequences(handle):
            writer.write(f"{entry_sequence}\n")
            count += 1
    logger.info(f"Extracted {count} UniProt entry sequences")
    return count


def run(argv):
    """Extract entry sequences from UniProt XML format."""
    args = parse_args(argv)
    extract_uniprot_sequences(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
