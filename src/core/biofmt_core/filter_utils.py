from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

# ───────────────────────────── constants ──────────────────────────────────
EXPRESSION_PARTS = 3  # field:op:value
FIELD_SEPARATOR = "."

_RANGE_PATTERN = re.compile(r"^(.+):([0-9]+)-([0-9]+)$")

_OPS = {
    "eq": lambda c, v: c == v,
    "ne": lambda c, v: c != v,
    "lt": lambda c, v: c < v,
    "le": lambda c, v: c <= v,
    "gt": lambda c, v: c > v,
    "ge": lambda c, v: c >= v,
    "in": lambda c, v: c in v,
    "not_in": lambda c, v: c not in v,
}

RecordFilter = Callable[[Any], bool]


class FilterEvaluationError(RuntimeError):
    """Raised when a filter expression cannot be evaluated against a record"""


# ───────────────────────────── filter chain ───────────────────────────────
class FilterChain:
    """Ordered conjunction of record filters.

    A record is accepted only if every filter accepts it; an empty chain accepts
    every record.
    """

    def __init__(self, filters: Iterable[RecordFilter] | None = None):
        self.filters: list[RecordFilter] = list(filters or [])

    def add(self, record_filter: RecordFilter | None) -> FilterChain:
        """Append a filter, ignoring None so absent CLI options can be added unconditionally."""
        if record_filter is not None:
            self.filters.append(record_filter)
        return self

    def accept(self, record) -> bool:
        return all(record_filter(record) for record_filter in self.filters)

    __call__ = accept

    def __len__(self):
        return len(self.filters)


# ───────────────────────────── ranges ─────────────────────────────────────
@dataclass(frozen=True)
class Range:
    """Named 0-based, half-open range, e.g. chr1:100-200"""

    name: str
    start: int
    end: int

    def intersects(self, name: str, start: int, end: int) -> bool:
        return name == self.name and start < self.end and end > self.start

    def contains(self, name: str, position: int) -> bool:
        return name == self.name and self.start <= position < self.end


def parse_range(value: str) -> Range:
    """Parse a range in ``name:start-end`` format.

    Raises
    ------
    ValueError
        If the value is not in ``name:start-end`` format or end < start.
    """
    match = _RANGE_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"invalid range '{value}', expected name:start-end")
    name, start, end = match.group(1), int(match.group(2)), int(match.group(3))
    if end < start:
        raise ValueError(f"invalid range '{value}', end must not be before start")
    return Range(name, start, end)


# ───────────────────────────── expressions ────────────────────────────────
def _try_to_convert_to_number_or_boolean(value: str) -> Any:
    """Try to convert a string to a boolean, int, or float, otherwise return the original string."""
    if value in {"true", "True", "TRUE"}:
        return True
    if value in {"false", "False", "FALSE"}:
        return False
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _parse_value_based_on_operation(value_str: str, op: str) -> Any:
    """Parse value string based on the operation type."""
    if op in ["in", "not_in"]:
        return [_try_to_convert_to_number_or_boolean(value) for value in value_str.split(",")]
    return _try_to_convert_to_number_or_boolean(value_str)


def resolve_field(record, field: str) -> Any:
    """Look up a possibly dotted field on a record, e.g. "score" or "tags.RC".

    Each part is looked up by key on mapping-like objects and as an attribute otherwise.

    Raises
    ------
    KeyError, AttributeError
        If any part of the field is missing.
    """
    value = record
    for part in field.split(FIELD_SEPARATOR):
        if isinstance(value, Mapping) or hasattr(value, "keys"):
            value = value[part]
        else:
            value = getattr(value, part)
    return value


class ExpressionFilter:
    """Compare one record field against a constant.

    Parameters
    ----------
    field : str
        Record field, dotted to descend into mappings (e.g. "tags.RC").
    op : str
        One of eq, ne, lt, le, gt, ge, in, not_in.
    value : Any
        Constant to compare against; a list for in and not_in.
    """

    def __init__(self, field: str, op: str, value: Any):
        if op not in _OPS:
            raise ValueError(f"Unsupported operator '{op}', must be one of {list(_OPS)}")
        self.field = field
        self.op = op
        self.value = value

    @classmethod
    def parse(cls, expression: str) -> ExpressionFilter:
        """Parse a ``field:op:value`` expression, e.g. ``length:gt:100`` or ``chrom:in:chr1,chr2``."""
        parts = expression.split(":", EXPRESSION_PARTS - 1)
        if len(parts) != EXPRESSION_PARTS or not all(parts[:2]):
            raise ValueError(f"Invalid filter expression '{expression}', expected field:op:value")
        field, op, value_str = parts
        if op not in _OPS:
            raise ValueError(f"Unsupported operator '{op}' in filter expression '{expression}'")
        return cls(field, op, _parse_value_based_on_operation(value_str, op))

    def __call__(self, record) -> bool:
        try:
            actual = resolve_field(record, self.field)
        except (KeyError, AttributeError, IndexError) as e:
            raise FilterEvaluationError(f"could not evaluate filter {self}: no field '{self.field}' on record") from e
        try:
            return bool(_OPS[self.op](actual, self.value))
        except TypeError as e:
            raise FilterEvaluationError(f"could not evaluate filter {self} against value {actual!r}") from e

    def __repr__(self):
        return f"ExpressionFilter({self.field}:{self.op}:{self.value!r})"


def add_expression_argument(parser) -> None:
    parser.add_argument(
        "-e",
        "--expression",
        type=ExpressionFilter.parse,
        action="append",
        default=[],
        help="filter expression field:op:value, op one of eq, ne, lt, le, gt, ge, in, not_in; may be repeated",
    )
