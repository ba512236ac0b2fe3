import gzip
from pathlib import Path

import pytest
from biofmt_core.filter_utils import ExpressionFilter, FilterEvaluationError
from biofmt_sequence import filter_fasta, filter_fastq
from biofmt_sequence.sequence_utils import read_fasta, read_fastq


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


class TestFilterFasta:
    def test_length_filter_keeps_longer_sequence(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fa"
        filter_fasta.run(
            ["filter-fasta", "-i", str(resources_dir / "sequences.fa"), "-o", str(output_file), "-n", "100"]
        )
        expected = (resources_dir / "sequences.fa").read_text().split(">seq2", 1)[1]
        assert output_file.read_text() == ">seq2" + expected

    def test_no_filters_keeps_everything(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fa"
        filters = filter_fasta.build_filters()
        assert filter_fasta.filter_fasta(str(resources_dir / "sequences.fa"), str(output_file), filters) == 2

    def test_line_width(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fa"
        filter_fasta.run(
            ["filter-fasta", "-i", str(resources_dir / "sequences.fa"), "-o", str(output_file), "-w", "100"]
        )
        lines = output_file.read_text().splitlines()
        assert [len(line) for line in lines] == [20, 50, 19, 100, 50]

    def test_expression_filter(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fa"
        filter_fasta.run(
            ["filter-fasta", "-i", str(resources_dir / "sequences.fa"), "-o", str(output_file), "-e", "name:eq:seq1"]
        )
        with open(output_file) as f:
            assert [r.name for r in read_fasta(f)] == ["seq1"]

    def test_filters_are_combined(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fa"
        filters = filter_fasta.build_filters(10, [ExpressionFilter.parse("length:lt:100")])
        assert filter_fasta.filter_fasta(str(resources_dir / "sequences.fa"), str(output_file), filters) == 1

    def test_expression_on_missing_field(self, tmp_path, resources_dir):
        filters = filter_fasta.build_filters(expressions=[ExpressionFilter.parse("score:gt:1")])
        with pytest.raises(FilterEvaluationError):
            filter_fasta.filter_fasta(str(resources_dir / "sequences.fa"), str(tmp_path / "out.fa"), filters)

    def test_invalid_expression_is_argument_error(self, resources_dir):
        with pytest.raises(SystemExit) as e:
            filter_fasta.run(["filter-fasta", "-i", str(resources_dir / "sequences.fa"), "-e", "length"])
        assert e.value.code == -1


class TestFilterFastq:
    def test_length_filter(self, tmp_path, resources_dir):
        output_file = tmp_path / "filtered.fq.gz"
        filter_fastq.run(["filter-fastq", "-i", str(resources_dir / "reads.fq"), "-o", str(output_file), "-n", "10"])
        with gzip.open(output_file, "rt") as f:
            assert [r.name for r in read_fastq(f)] == ["read3", "read4"]
