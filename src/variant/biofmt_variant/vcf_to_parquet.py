from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator

import polars as pl
import pysam
from biofmt_core.cli_utils import ToolArgumentParser, add_input_argument, run_tool, string_list
from biofmt_core.compress import pysam_input
from biofmt_core.parquet_utils import DEFAULT_ROW_GROUP_SIZE, add_parquet_arguments, write_parquet
from biofmt_core.record_utils import RecordFormatError

PASS = "PASS"
STRING_LIST = pl.List(pl.Utf8)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = ToolArgumentParser(prog="vcf-to-parquet", description=run.__doc__)
    add_input_argument(parser, "VCF file")
    parser.add_argument("-o", "--output-path", type=str, required=True, help="output Parquet file")
    parser.add_argument("-m", "--multiallelic", action="store_true", help="allow multiallelic records")
    parser.add_argument("-d", "--include-id", action="store_true", help="include the ID column")
    parser.add_argument("-n", "--info-fields", type=string_list, default=[], help="INFO fields to include")
    parser.add_argument("-p", "--info-prefix", type=str, default="", help='INFO column prefix, default ""')
    parser.add_argument("-s", "--samples", type=string_list, default=[], help="samples to include")
    parser.add_argument("-x", "--sample-prefix", type=str, default="", help='sample column prefix, default ""')
    parser.add_argument("-f", "--format-fields", type=string_list, default=[], help="FORMAT fields to include")
    parser.add_argument(
        "-w", "--lowercase", action="store_true", help="lowercase fields and samples for column names"
    )
    add_parquet_arguments(parser, partitioned=False)
    return parser.parse_args(argv[1:])


def _column_name(prefix: str, name: str, lowercase: bool) -> str:
    return prefix + (name.lower() if lowercase else name)


def _string_values(value) -> list[str] | None:
    """INFO or FORMAT value as a list of strings; None when the field is missing, [] for a set flag."""
    if value is None or value is False:
        return None
    if value is True:
        return []
    if isinstance(value, (tuple, list)):
        return ["." if v is None else str(v) for v in value]
    return [str(value)]


def _genotype(sample) -> list[str] | None:
    alleles = sample.get("GT")
    if alleles is None or all(allele is None for allele in alleles):
        return None
    separator = "|" if sample.phased else "/"
    return [separator.join("." if allele is None else str(allele) for allele in alleles)]


def _filters(record: pysam.VariantRecord) -> tuple[bool, bool, list[str]]:
    """filters_applied, filters_passed and filters_failed of a record."""
    names = list(record.filter.keys())
    if not names:
        return False, False, []
    if names == [PASS]:
        return True, True, []
    return True, False, names


def variant_schema(
    info_columns: list[str], sample_columns: list[str], multiallelic: bool, include_id: bool = False
) -> dict[str, pl.DataType]:
    schema = {"chrom": pl.Utf8, "pos": pl.Int64}
    if include_id:
        schema["id"] = pl.Utf8
    schema.update(
        {
            "ref": pl.Utf8,
            "alt": STRING_LIST if multiallelic else pl.Utf8,
            "qual": pl.Float64,
            "filters_applied": pl.Boolean,
            "filters_passed": pl.Boolean,
            "filters_failed": STRING_LIST,
        }
    )
    for column in [*info_columns, *sample_columns]:
        schema[column] = STRING_LIST
    return schema


def variant_rows(
    vcf: pysam.VariantFile,
    multiallelic: bool,
    info_fields: dict[str, str],
    sample_fields: dict[str, tuple[str, str]],
    include_id: bool = False,
) -> Iterator[dict]:
    """Rows of the variants table, one per VCF record.

    Parameters
    ----------
    vcf : pysam.VariantFile
        Open VCF file.
    multiallelic : bool
        Keep alt as a list of alleles; otherwise a record with more than one alt allele is an error.
    info_fields : dict[str, str]
        INFO field by column name.
    sample_fields : dict[str, tuple[str, str]]
        (sample, FORMAT field) by column name.
    include_id : bool
        Add the ID column, None when the record has no ID.

    Raises
    ------
    RecordFormatError
        On a multiallelic record when multiallelic is False.
    """
    for record in vcf:
        alts = list(record.alts or [])
        if multiallelic:
            alt = alts
        elif len(alts) > 1:
            raise RecordFormatError(
                f"multiallelic variants not supported, found alternate alleles {','.join(alts)} "
                f"at {record.chrom}:{record.pos}"
            )
        else:
            alt = alts[0] if alts else ""
        filters_applied, filters_passed, filters_failed = _filters(record)
        row = {
            "chrom": record.chrom,
            "pos": record.pos,
            "ref": record.ref,
            "alt": alt,
            "qual": record.qual,
            "filters_applied": filters_applied,
            "filters_passed": filters_passed,
            "filters_failed": filters_failed,
        }
        if include_id:
            row["id"] = record.id
        for column, field in info_fields.items():
            row[column] = _string_values(record.info.get(field)) if field in record.info else None
        for column, (sample, field) in sample_fields.items():
            call = record.samples[sample]
            if field == "GT":
                row[column] = _genotype(call)
            else:
                row[column] = _string_values(call.get(field)) if field in call else None
        yield row


def vcf_to_parquet(
    input_file: str | None,
    output_path: str,
    multiallelic: bool = False,
    include_id: bool = False,
    info_fields: list[str] = (),
    info_prefix: str = "",
    samples: list[str] = (),
    sample_prefix: str = "",
    format_fields: list[str] = (),
    lowercase: bool = False,
    row_group_size: int = DEFAULT_ROW_GROUP_SIZE,
) -> int:
    """
    Export VCF records to a Parquet file.

    The fixed columns are chrom, pos, ref, alt, qual, filters_applied, filters_passed and
    filters_failed, with id after pos when include_id is set. Each INFO field adds a
    ``<info_prefix><field>`` column and each sample and FORMAT field pair adds a
    ``<sample_prefix><sample>_<field>`` column, all lists of strings.

    Returns
    -------
    int
        Number of rows written.

    Raises
    ------
    ValueError
        If a sample is not in the VCF header.
    """
    info_columns = {_column_name(info_prefix, field, lowercase): field for field in info_fields}
    sample_columns = {
        _column_name(sample_prefix, f"{sample}_{field}", lowercase): (sample, field)
        for sample in samples
        for field in format_fields
    }
    schema = variant_schema(list(info_columns), list(sample_columns), multiallelic, include_id)
    with pysam_input(input_file) as vcf_path, pysam.VariantFile(vcf_path) as vcf:
        missing = [sample for sample in samples if sample not in vcf.header.samples]
        if missing:
            raise ValueError(f"samples not found in VCF header: {', '.join(missing)}")
        rows = variant_rows(vcf, multiallelic, info_columns, sample_columns, include_id)
        return write_parquet(rows, schema, output_path, row_group_size)


def run(argv):
    """Convert variants in VCF format to Parquet format."""
    args = parse_args(argv)
    vcf_to_parquet(
        args.input_file,
        args.output_path,
        multiallelic=args.multiallelic,
        include_id=args.include_id,
        info_fields=args.info_fields,
        info_prefix=args.info_prefix,
        samples=args.samples,
        sample_prefix=args.sample_prefix,
        format_fields=args.format_fields,
        lowercase=args.lowercase,
        row_group_size=args.row_group_size,
    )


def main():
    run_tool(run, sys.argv)


if __name__ == "__main__":
    main()
