from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, add_output_argument, run_tool
from biofmt_core.compress import open_input, open_output
from biofmt_core.logger import logger
from biofmt_core.record_utils import RecordFormatError
from biofmt_variant.vcf_utils import VcfTextReader, parse_structured_meta

SAMPLE_META_PREFIX = "##SAMPLE="
PEDIGREE_META_PREFIX = "##PEDIGREE="


@dataclass(frozen=True)
class Relationship:
    """An edge of the pedigree graph, from a source genome to the target genome of a ``##PEDIGREE`` line"""

    source: str
    source_label: str
    target: str
    target_label: str

    def __str__(self):
        return f"{self.source}\t{self.source_label}\t{self.target}"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="vcf-pedigree", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    add_output_argument(parser, "pedigree file")
    return parser.parse_args(argv[1:])


def read_pedigree(reader: VcfTextReader) -> list[Relationship]:
    """
    Relationships of the ``##PEDIGREE`` meta lines of a VCF header.

    The first field of a line names the target genome, e.g. ``Child`` or ``Derived``, and each
    following field names a source genome, e.g. ``Mother`` or ``Original``. Genome ids must be
    declared by a ``##SAMPLE`` line or be a sample column.

    Raises
    ------
    RecordFormatError
        If a pedigree line is malformed or names an unknown sample.
    """
    sample_ids = set(reader.samples)
    pedigrees = []
    for line in reader.meta_lines:
        if line.startswith(SAMPLE_META_PREFIX):
            _, fields = parse_structured_meta(line) or (None, [])
            sample_ids.update(value for name, value in fields if name == "ID")
        elif line.startswith(PEDIGREE_META_PREFIX):
            parsed = parse_structured_meta(line)
            if parsed is None:
                raise RecordFormatError(f"invalid ##PEDIGREE meta line: {line}")
            pedigrees.append((line, parsed[1]))

    relationships = []
    for line, fields in pedigrees:
        if len(fields) < 2:
            logger.warning(f"Ignoring ##PEDIGREE meta line without source genomes: {line}")
            continue
        for _, sample_id in fields:
            if sample_id not in sample_ids:
                raise RecordFormatError(f"VCF sample id {sample_id} not found in samples")
        target_label, target = fields[0]
        relationships.extend(Relationship(source, label, target, target_label) for label, source in fields[1:])
    return relationships


def vcf_pedigree(input_file: str | None, output_file: str | None) -> list[Relationship]:
    """Write one ``source<TAB>source label<TAB>target`` line per pedigree relationship."""
    with open_input(input_file) as handle:
        relationships = read_pedigree(VcfTextReader(handle))
    with open_output(output_file) as writer:
        for relationship in relationships:
            writer.write(f"{relationship}\n")
    return relationships


def run(argv):
    """Extract a pedigree from VCF format."""
    args = parse_args(argv)
    vcf_pedigree(args.input_file, args.output_file)


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
