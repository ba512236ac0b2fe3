import io

import pytest
from biofmt_core.record_utils import RecordFormatError, Tag, data_lines, parse_tags, tag_values


class TestTag:
    @pytest.mark.parametrize(
        "text, value",
        [
            ("LN:i:1200", 1200),
            ("dv:f:0.25", 0.25),
            ("cs:Z::10*ag:5", ":10*ag:5"),
            ("tp:A:P", "P"),
            ("xb:B:i,1,2,3", [1, 2, 3]),
            ("xf:B:f,0.5,1.5", [0.5, 1.5]),
        ],
    )
    def test_parse(self, text, value):
        tag = Tag.parse(text)
        assert tag.value == value
        assert str(tag) == text

    @pytest.mark.parametrize("text", ["LN", "LN:i", "LEN:i:1", "LN:int:1"])
    def test_invalid(self, text):
        with pytest.raises(RecordFormatError):
            Tag.parse(text)


def test_parse_tags():
    tags = parse_tags(["LN:i:10", "RC:i:4"])
    assert list(tags) == ["LN", "RC"]
    assert tag_values(tags) == {"LN": 10, "RC": 4}


def test_data_lines():
    handle = io.StringIO("#comment\n\nchr1\t0\t10\r\nchr2\t5\t6\n")
    assert list(data_lines(handle)) == ["chr1\t0\t10", "chr2\t5\t6"]
