from types import SimpleNamespace

import pytest
from biofmt_core.filter_utils import (
    ExpressionFilter,
    FilterChain,
    FilterEvaluationError,
    Range,
    parse_range,
    resolve_field,
)


class TestFilterChain:
    def test_empty_chain_accepts_everything(self):
        chain = FilterChain()
        assert len(chain) == 0
        assert chain.accept(object())
        assert chain.accept(None)

    def test_all_filters_must_accept(self):
        chain = FilterChain([lambda r: r > 1, lambda r: r < 10])
        assert chain.accept(5)
        assert not chain.accept(0)
        assert not chain.accept(11)

    def test_filters_evaluated_in_order(self):
        calls = []

        def first(record):
            calls.append("first")
            return True

        def second(record):
            calls.append("second")
            return True

        chain = FilterChain().add(first).add(None).add(second)
        assert len(chain) == 2
        assert chain(1)
        assert calls == ["first", "second"]


class TestRange:
    def test_parse_range(self):
        assert parse_range("chr1:100-200") == Range("chr1", 100, 200)
        assert parse_range("HLA-A*01:01:01:01:0-10") == Range("HLA-A*01:01:01:01", 0, 10)

    @pytest.mark.parametrize("value", ["chr1", "chr1:100", "chr1:a-b", ":1-2", "chr1:200-100"])
    def test_parse_invalid_range(self, value):
        with pytest.raises(ValueError):
            parse_range(value)

    def test_intersects(self):
        r = Range("chr1", 100, 200)
        assert r.intersects("chr1", 150, 250)
        assert r.intersects("chr1", 50, 101)
        assert not r.intersects("chr1", 200, 300)
        assert not r.intersects("chr1", 0, 100)
        assert not r.intersects("chr2", 150, 160)

    def test_contains(self):
        r = Range("chr1", 100, 200)
        assert r.contains("chr1", 100)
        assert r.contains("chr1", 199)
        assert not r.contains("chr1", 200)
        assert not r.contains("chr2", 150)


class TestExpressionFilter:
    def test_parse_converts_values(self):
        assert ExpressionFilter.parse("length:gt:100").value == 100
        assert ExpressionFilter.parse("score:ge:0.5").value == 0.5
        assert ExpressionFilter.parse("paired:eq:true").value is True
        assert ExpressionFilter.parse("chrom:in:chr1,chr2,3").value == ["chr1", "chr2", 3]
        assert ExpressionFilter.parse("name:eq:a:b").value == "a:b"

    @pytest.mark.parametrize("expression", ["length", "length:gt", "length:between:1", ":eq:1"])
    def test_parse_invalid(self, expression):
        with pytest.raises(ValueError):
            ExpressionFilter.parse(expression)

    def test_comparisons(self):
        record = SimpleNamespace(length=150, chrom="chr1")
        assert ExpressionFilter.parse("length:gt:100")(record)
        assert not ExpressionFilter.parse("length:lt:100")(record)
        assert ExpressionFilter.parse("length:le:150")(record)
        assert ExpressionFilter.parse("chrom:eq:chr1")(record)
        assert ExpressionFilter.parse("chrom:ne:chr2")(record)
        assert ExpressionFilter.parse("chrom:in:chr1,chr2")(record)
        assert not ExpressionFilter.parse("chrom:not_in:chr1,chr2")(record)

    def test_dotted_field(self):
        record = SimpleNamespace(tags={"RC": 12})
        assert ExpressionFilter.parse("tags.RC:ge:10")(record)
        assert resolve_field(record, "tags.RC") == 12

    def test_missing_field_raises(self):
        record = SimpleNamespace(length=1)
        with pytest.raises(FilterEvaluationError, match="no field 'score'"):
            ExpressionFilter.parse("score:gt:1")(record)
        with pytest.raises(FilterEvaluationError):
            ExpressionFilter.parse("tags.RC:gt:1")(SimpleNamespace(tags={}))

    def test_incomparable_value_raises(self):
        record = SimpleNamespace(score=None)
        with pytest.raises(FilterEvaluationError):
            ExpressionFilter.parse("score:gt:1")(record)
