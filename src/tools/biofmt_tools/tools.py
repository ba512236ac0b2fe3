"""Run any biofmt tool as ``biofmt <command> [args]``."""

from __future__ import annotations

import sys
from types import ModuleType

from biofmt_alignment import (
    compress_gaf,
    compress_paf,
    compress_sam,
    filter_gaf,
    filter_paf,
    filter_sam,
    split_gaf,
)
from biofmt_assembly import (
    compress_gfa1,
    compress_gfa2,
    compress_rgfa,
    export_segments,
    filter_gfa1,
    filter_gfa2,
    filter_rgfa,
    gfa1_to_gfa2,
)
from biofmt_core.cli_utils import ARGUMENT_ERROR_EXIT_CODE, about, run_tool
from biofmt_feature import (
    compress_bed,
    compress_gff3,
    filter_bed,
    filter_gff3,
    gff3_to_bed,
    rename_bed_references,
    rename_gff3_references,
    split_bed,
    split_gff3,
)
from biofmt_protein import (
    extract_uniprot_features_to_parquet,
    extract_uniprot_sequences,
)
from biofmt_sequence import (
    compress_fasta,
    compress_fastq,
    count_fastq,
    disinterleave_fastq,
    downsample_fastq,
    downsample_interleaved_fastq,
    extract_fasta,
    extract_fasta_kmers,
    extract_fastq,
    extract_fastq_by_length,
    fasta_to_fastq,
    fasta_to_parquet,
    fasta_to_text,
    fastq_description,
    fastq_sequence_length,
    fastq_to_fasta,
    fastq_to_parquet,
    fastq_to_text,
    filter_fasta,
    filter_fastq,
    interleave_fastq,
    interleaved_fastq_to_bam,
    split_fasta,
    split_interleaved_fastq,
    text_to_fasta,
    text_to_fastq,
    truncate_fasta,
)
from biofmt_variant import (
    compress_vcf,
    filter_vcf,
    remap_phase_set,
    rename_vcf_references,
    split_vcf,
    vcf_header,
    vcf_pedigree,
    vcf_samples,
    vcf_to_parquet,
    vcf_to_partitioned_parquet,
)

TOOLS: dict[str, ModuleType] = {
    "compress-bed": compress_bed,
    "compress-fasta": compress_fasta,
    "compress-fastq": compress_fastq,
    "compress-gaf": compress_gaf,
    "compress-gfa1": compress_gfa1,
    "compress-gfa2": compress_gfa2,
    "compress-gff3": compress_gff3,
    "compress-paf": compress_paf,
    "compress-rgfa": compress_rgfa,
    "compress-sam": compress_sam,
    "compress-vcf": compress_vcf,
    "count-fastq": count_fastq,
    "disinterleave-fastq": disinterleave_fastq,
    "downsample-fastq": downsample_fastq,
    "downsample-interleaved-fastq": downsample_interleaved_fastq,
    "export-segments": export_segments,
    "extract-fasta": extract_fasta,
    "extract-fasta-kmers": extract_fasta_kmers,
    "extract-fastq": extract_fastq,
    "extract-fastq-by-length": extract_fastq_by_length,
    "extract-uniprot-features-to-parquet": extract_uniprot_features_to_parquet,
    "extract-uniprot-sequences": extract_uniprot_sequences,
    "fasta-to-fastq": fasta_to_fastq,
    "fasta-to-parquet": fasta_to_parquet,
    "fasta-to-text": fasta_to_text,
    "fastq-description": fastq_description,
    "fastq-sequence-length": fastq_sequence_length,
    "fastq-to-fasta": fastq_to_fasta,
    "fastq-to-parquet": fastq_to_parquet,
    "fastq-to-text": fastq_to_text,
    "filter-bed": filter_bed,
    "filter-fasta": filter_fasta,
    "filter-fastq": filter_fastq,
    "filter-gaf": filter_gaf,
    "filter-gfa1": filter_gfa1,
    "filter-gfa2": filter_gfa2,
    "filter-gff3": filter_gff3,
    "filter-paf": filter_paf,
    "filter-rgfa": filter_rgfa,
    "filter-sam": filter_sam,
    "filter-vcf": filter_vcf,
    "gfa1-to-gfa2": gfa1_to_gfa2,
    "gff3-to-bed": gff3_to_bed,
    "interleave-fastq": interleave_fastq,
    "interleaved-fastq-to-bam": interleaved_fastq_to_bam,
    "remap-phase-set": remap_phase_set,
    "rename-bed-references": rename_bed_references,
    "rename-gff3-references": rename_gff3_references,
    "rename-vcf-references": rename_vcf_references,
    "split-bed": split_bed,
    "split-fasta": split_fasta,
    "split-gaf": split_gaf,
    "split-gff3": split_gff3,
    "split-interleaved-fastq": split_interleaved_fastq,
    "split-vcf": split_vcf,
    "text-to-fasta": text_to_fasta,
    "text-to-fastq": text_to_fastq,
    "truncate-fasta": truncate_fasta,
    "vcf-header": vcf_header,
    "vcf-pedigree": vcf_pedigree,
    "vcf-samples": vcf_samples,
    "vcf-to-parquet": vcf_to_parquet,
    "vcf-to-partitioned-parquet": vcf_to_partitioned_parquet,
}


def _summary(tool: ModuleType) -> str:
    return (tool.run.__doc__ or "").strip().split("\n")[0]


def usage() -> str:
    width = max(len(command) for command in TOOLS)
    lines = ["usage: biofmt [-a] [-h] <command> [args]", "", "commands:"]
    lines += [f"  {command.ljust(width)}  {_summary(TOOLS[command])}" for command in sorted(TOOLS)]
    lines += ["", "run biofmt <command> -h for help on a command"]
    return "\n".join(lines) + "\n"


def run(argv: list[str]) -> None:
    """
    Dispatch to the tool named by the first argument, passing it the remaining arguments.

    Raises
    ------
    SystemExit
        With code -1 when the command is missing or unknown, 0 after -a or -h.
    """
    if len(argv) < 2:  # noqa: PLR2004
        sys.stderr.write(usage())
        sys.exit(ARGUMENT_ERROR_EXIT_CODE)
    command = argv[1]
    if command in ("-a", "--about"):
        sys.stdout.write(f"{about()}\n")
        sys.exit(0)
    if command in ("-h", "--help"):
        sys.stdout.write(usage())
        sys.exit(0)
    tool = TOOLS.get(command)
    if tool is None:
        sys.stderr.write(f"biofmt: error: unknown command '{command}'\n\n{usage()}")
        sys.exit(ARGUMENT_ERROR_EXIT_CODE)
    tool.run([f"biofmt {command}", *argv[2:]])


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
