"""Rename reference sequence (chromosome) names between the ``chr`` prefixed and bare conventions.

Renaming applies an ordered series of whole-string regular expression substitutions.
Names that match none of them pass through unchanged.
"""

from __future__ import annotations

import re

AUTOSOMAL = re.compile(r"^([0-9]+)$")
SEX = re.compile(r"^([XYZW])$")
# Character class, not an alternation: matches a single one of c, h, r, M, "," or T.
MITOCHONDRIAL = re.compile(r"^[chrM,MT]$")
VERSIONED = re.compile(r"([0-9]+)v([0-9]+)")
CHRUN = re.compile(r"^chrUn_(.+)$")
CHR = re.compile(r"^chr(.+)$")


def add_chr(name: str) -> str:
    """Add the ``chr`` prefix to autosomal, sex and mitochondrial reference names.

    Parameters
    ----------
    name : str
        Reference name, e.g. "1" or "X".

    Returns
    -------
    str
        Renamed reference name, e.g. "chr1" or "chrX".
    """
    name = AUTOSOMAL.sub(r"chr\1", name)
    name = SEX.sub(r"chr\1", name)
    return MITOCHONDRIAL.sub("chrM", name)


def remove_chr(name: str) -> str:
    """Remove the ``chr`` and ``chrUn_`` prefixes and de-version contig names.

    Parameters
    ----------
    name : str
        Reference name, e.g. "chr1", "chrUn_GL000195v1".

    Returns
    -------
    str
        Renamed reference name, e.g. "1", "GL000195.1".
    """
    name = VERSIONED.sub(r"\1.\2", name)
    name = CHRUN.sub(r"\1", name)
    name = MITOCHONDRIAL.sub("MT", name)
    return CHR.sub(r"\1", name)


class ReferenceRenamer:
    """Rename reference names in one direction, fixed at construction.

    Parameters
    ----------
    chr_prefix : bool
        If True add the ``chr`` prefix, otherwise remove it.
    """

    def __init__(self, chr_prefix: bool):
        self.chr_prefix = chr_prefix

    def rename(self, name: str | None) -> str | None:
        if name is None:
            return None
        return add_chr(name) if self.chr_prefix else remove_chr(name)

    __call__ = rename
