import io
from pathlib import Path

import pytest
from biofmt_core.record_utils import RecordFormatError
from biofmt_variant.vcf_utils import VcfTextReader, format_record


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


def test_reader_splits_header_and_records(resources_dir):
    with open(resources_dir / "variants.vcf") as handle:
        reader = VcfTextReader(handle)
        records = list(reader.records())
    assert len(reader.meta_lines) == 9
    assert reader.column_header.startswith("#CHROM\tPOS")
    assert reader.samples == ["NA1", "NA2"]
    assert [columns[2] for columns in records] == ["rs1", "rs2;rs3", ".", "rs4"]


def test_header_round_trips(resources_dir):
    text = (resources_dir / "variants.vcf").read_text()
    reader = VcfTextReader(io.StringIO(text))
    body = "".join(format_record(columns) for columns in reader.records())
    assert reader.header + body == text


def test_no_samples(resources_dir):
    with open(resources_dir / "variants_no_contigs.vcf") as handle:
        assert VcfTextReader(handle).samples == []


def test_missing_column_header():
    with pytest.raises(RecordFormatError):
        VcfTextReader(io.StringIO("##fileformat=VCFv4.2\nchr1\t1\t.\tA\tG\t.\t.\t.\n"))


def test_short_record():
    reader = VcfTextReader(io.StringIO("#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\nchr1\t1\t.\n"))
    with pytest.raises(RecordFormatError):
        list(reader.records())
