"""Pair left and right reads of paired-end FASTQ by read name."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from biofmt_sequence.sequence_utils import Fastq

LEFT = re.compile(r"^.*[/ +_\\]1.*$|^.* 1:[YN]:[02468]+:[0-9]+$")
RIGHT = re.compile(r"^.*[/ +_\\]2.*$|^.* 2:[YN]:[02468]+:[0-9]+$")
PREFIX = re.compile(r"[/ +_\\]+[12]")


class PairingError(ValueError):
    """Raised when interleaved reads are not in left, right order"""


def is_left(fastq: Fastq) -> bool:
    """True if the description marks a left (first of pair) read, e.g. ``read/1`` or ``read 1:N:0:2``."""
    return LEFT.match(fastq.description) is not None


def is_right(fastq: Fastq) -> bool:
    return RIGHT.match(fastq.description) is not None


def prefix(fastq: Fastq) -> str:
    """Read name shared by both reads of a pair, the description up to the pair marker."""
    return PREFIX.split(fastq.description, maxsplit=1)[0]


def pair_reads(
    left_reads: Iterable[Fastq], right_reads: Iterable[Fastq]
) -> Iterator[tuple[Fastq | None, Fastq | None]]:
    """Match left and right reads by prefix.

    Left reads are held in memory, keyed by prefix. Right reads are streamed: each one with
    a matching left read is yielded as ``(left, right)``, others as ``(None, right)``.
    Left reads without a mate are yielded last as ``(left, None)``.
    """
    lefts = {prefix(left): left for left in left_reads}
    for right in right_reads:
        left = lefts.pop(prefix(right), None)
        yield left, right
    for left in lefts.values():
        yield left, None


def interleaved_pairs(reads: Iterable[Fastq]) -> Iterator[tuple[Fastq, Fastq]]:
    """Pairs of consecutive reads in an interleaved stream.

    Raises
    ------
    PairingError
        If a read is not followed by its mate.
    """
    left = None
    for read in reads:
        if left is None:
            if not is_left(read):
                raise PairingError(f"interleaved paired file contained unpaired read {read.description}")
            left = read
            continue
        if not is_right(read) or prefix(read) != prefix(left):
            raise PairingError(f"interleaved paired file contained unpaired read {left.description}")
        yield left, read
        left = None
    if left is not None:
        raise PairingError(f"interleaved paired file contained unpaired read {left.description}")
