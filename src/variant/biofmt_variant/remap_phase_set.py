from __future__ import annotations

import argparse
import sys

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_variant.vcf_utils import FORMAT, SAMPLE_COLUMNS_START, VcfTextReader, format_record, parse_structured_meta

PHASE_SET = "PS"
FORMAT_META_PREFIX = "##FORMAT=<"
MISSING = "."


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="remap-phase-set", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "VCF file")
    return parser.parse_args(argv[1:])


class PhaseSetRemapper:
    """Assign integer ids 0, 1, 2, ... to phase set strings in the order they are first seen."""

    def __init__(self):
        self.ids: dict[str, int] = {}

    def remap(self, phase_set: str) -> str:
        if phase_set == MISSING:
            return phase_set
        return str(self.ids.setdefault(phase_set, len(self.ids)))

    def remap_record(self, columns: list[str]) -> list[str]:
        if len(columns) <= FORMAT:
            return columns
        keys = columns[FORMAT].split(":")
        if PHASE_SET not in keys:
            return columns
        index = keys.index(PHASE_SET)
        for i in range(SAMPLE_COLUMNS_START, len(columns)):
            values = columns[i].split(":")
            if index < len(values):
                values[index] = self.remap(values[index])
                columns[i] = ":".join(values)
        return columns


def remap_phase_set_header(meta_lines: list[str]) -> bool:
    """
    Rewrite a ``Type=String`` PS FORMAT meta line in place as ``Type=Integer``.

    Returns
    -------
    bool
        True if the PS FORMAT field was declared with ``Type=String`` and has been rewritten.
    """
    for i, line in enumerate(meta_lines):
        if not line.startswith(FORMAT_META_PREFIX):
            continue
        _, fields = parse_structured_meta(line)
        attributes = dict(fields)
        if attributes.get("ID") != PHASE_SET:
            continue
        if attributes.get("Type") != "String":
            return False
        description = f"{attributes.get('Description', '')} (converted from Type=String to Type=Integer)"
        meta_lines[i] = f'##FORMAT=<ID=PS,Number=1,Type=Integer,Description="{description}">'
        return True
    return False


def remap_phase_set(input_file: str | None, output_file: str | None) -> int:
    """
    Remap string PS phase set ids to integers.

    When the header declares PS with ``Type=String``, each distinct PS value is replaced with an
    integer id, numbered from 0 across all records and samples, and the FORMAT meta line is
    rewritten as ``Type=Integer``. Otherwise the VCF is written unchanged. Missing ``.`` values are kept.

    Returns
    -------
    int
        Number of distinct phase sets remapped.
    """
    remapper = PhaseSetRemapper()
    with open_input(input_file) as handle, open_output(output_file) as writer:
        reader = VcfTextReader(handle)
        remapping = remap_phase_set_header(reader.meta_lines)
        if not remapping:
            logger.info("PS FORMAT field is not Type=String, writing records unchanged")
        writer.write(reader.header)
        for columns in reader.records():
            if remapping:
                columns = remapper.remap_record(columns)
            writer.write(format_record(columns))
    logger.info(f"Remapped {len(remapper.ids)} phase sets")
    return len(remapper.ids)


def run(argv):
    """Remap Type=String PS phase set ids in VCF format to Type=Integer."""
    args = parse_args(argv)
    remap_phase_set(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
