import io
from pathlib import Path

import pytest
from biofmt_assembly.gfa1 import (
    Containment,
    Header,
    Link,
    Reference,
    Segment,
    Traversal,
    parse_gfa1,
    read_gfa1,
)
from biofmt_assembly.gfa1 import Path as GfaPath
from biofmt_assembly.gfa2 import Gfa2Record, read_gfa2
from biofmt_core.record_utils import RecordFormatError


@pytest.fixture
def resources_dir():
    return Path(__file__).parent.parent / "resources"


def test_read_gfa1_skips_unrecognized_lines(resources_dir):
    with open(resources_dir / "graph.gfa") as handle:
        records = list(read_gfa1(handle))
    assert [type(r) for r in records[:4]] == [Header, Segment, Segment, Segment]
    assert len(records) == 13
    assert isinstance(records[6], Containment)
    assert isinstance(records[8], Traversal)


def test_gfa1_round_trip(resources_dir):
    lines = [line for line in (resources_dir / "graph.gfa").read_text().splitlines() if not line.startswith("W")]
    assert [str(parse_gfa1(line)) for line in lines] == lines


def test_segment_length():
    assert Segment.parse("S\ts1\tACGT").length == 4
    assert Segment.parse("S\ts1\tACGT\tLN:i:10").length == 10
    assert Segment.parse("S\ts1\t*").length is None


def test_segment_tags():
    segment = Segment.parse("S\ts1\t*\tRC:i:20\tLN:i:500")
    assert segment.sequence is None
    assert segment.tags == {"RC": 20, "LN": 500}


def test_link():
    link = Link.parse("L\ts1\t+\ts2\t-\t*")
    assert link.source == Reference("s1", "+")
    assert link.target == Reference("s2", "-")
    assert link.overlap is None
    assert str(link) == "L\ts1\t+\ts2\t-\t*"


def test_path():
    path = GfaPath.parse("P\tp1\ts1+,s2-\t4M")
    assert [str(segment) for segment in path.segments] == ["s1+", "s2-"]
    assert path.overlaps == ["4M"]


def test_invalid_orientation():
    with pytest.raises(RecordFormatError):
        Link.parse("L\ts1\t?\ts2\t-\t*")


def test_too_few_columns_reports_line_number():
    with pytest.raises(RecordFormatError, match="line 2"):
        list(read_gfa1(io.StringIO("H\tVN:Z:1.0\nL\ts1\t+\n")))


def test_gfa2_records(resources_dir):
    with open(resources_dir / "graph.gfa2") as handle:
        records = list(read_gfa2(handle))
    assert [r.record_type for r in records] == ["H", "S", "S", "E", "G", "O", "U", "F"]
    assert records[1].columns == {"id": "s1", "length": 10, "sequence": "ACGTACGTAC"}
    assert records[1].tags == {"RC": 4}
    assert records[4].columns["distance"] == 100


def test_gfa2_round_trip(resources_dir):
    lines = [line for line in (resources_dir / "graph.gfa2").read_text().splitlines() if not line.startswith("#")]
    assert [str(Gfa2Record.parse(line)) for line in lines] == lines


def test_gfa2_invalid_length():
    with pytest.raises(RecordFormatError):
        Gfa2Record.parse("S\ts1\tten\tACGT")
