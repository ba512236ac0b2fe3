import io

import pytest
from biofmt_core.record_utils import RecordFormatError
from biofmt_feature.bed import BedRecord, BedWriter, read_bed


class TestBedRecord:
    def test_parse(self):
        record = BedRecord.parse("chr1\t10\t20\tname\t5.5\t-")
        assert record.chrom == "chr1"
        assert record.start == 10
        assert record.end == 20
        assert record.name == "name"
        assert record.score == 5.5
        assert record.strand == "-"
        assert record.length == 10
        assert str(record) == "chr1\t10\t20\tname\t5.5\t-"

    def test_bed3(self):
        record = BedRecord.parse("chr1\t10\t20")
        assert record.name is None
        assert record.score is None
        assert str(record) == "chr1\t10\t20"

    def test_missing_score(self):
        assert BedRecord.parse("chr1\t10\t20\tname\t.").score is None

    @pytest.mark.parametrize("line", ["chr1\t10", "chr1\ta\t20", "chr1\t30\t20"])
    def test_invalid(self, line):
        with pytest.raises(RecordFormatError):
            BedRecord.parse(line)


def test_read_bed_skips_headers():
    handle = io.StringIO("browser position chr1\ntrack name=x\n#c\nchr1\t0\t1\n\nchr2\t1\t2\n")
    assert [r.chrom for r in read_bed(handle)] == ["chr1", "chr2"]


class TestBedWriter:
    def test_write(self):
        output = io.StringIO()
        writer = BedWriter(output)
        writer.write(BedRecord("chr2", 100, 102, ["hmer-indel"]))
        writer.write(BedRecord("chr3", 120, 123, ["snp"]))
        assert output.getvalue().splitlines() == ["chr2\t100\t102\thmer-indel", "chr3\t120\t123\tsnp"]

    def test_write_bed12(self):
        output = io.StringIO()
        BedWriter(output).write_bed12("chr1", 10, 30, "tx1", 7, "+")
        assert output.getvalue() == "chr1\t10\t30\ttx1\t7\t+\t10\t30\t0\t1\t20\t0\n"

    def test_write_bed12_start_after_end(self):
        with pytest.raises(ValueError, match="start > end"):
            BedWriter(io.StringIO()).write_bed12("chr1", 30, 10, "tx1")
