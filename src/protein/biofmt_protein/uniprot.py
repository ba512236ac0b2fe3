"""Streaming access to UniProt XML entries."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TextIO

from biofmt_core.record_utils import RecordFormatError

ENTRY = "entry"
ACCESSION = "accession"
SEQUENCE = "sequence"
FEATURE = "feature"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


@dataclass
class EntrySequence:
    """Sequence of a UniProt entry, with the attributes of its sequence element"""

    accession: str
    length: int
    mass: int
    checksum: str
    modified: str
    version: int
    precursor: bool
    fragment: str | None
    sequence: str

    @classmethod
    def from_entry(cls, entry: ET.Element) -> EntrySequence:
        """
        Build from an ``entry`` element, using its primary (first) accession and its sequence element.

        Raises
        ------
        RecordFormatError
            If the entry has no accession or no sequence, or sequence attributes are missing.
        """
        accession = _child(entry, ACCESSION)
        sequence = _child(entry, SEQUENCE)
        if accession is None or sequence is None:
            raise RecordFormatError("UniProt entry without accession or sequence")
        try:
            return cls(
                accession=accession.text.strip(),
                length=int(sequence.attrib["length"]),
                mass=int(sequence.attrib["mass"]),
                checksum=sequence.attrib["checksum"],
                modified=sequence.attrib["modified"],
                version=int(sequence.attrib["version"]),
                precursor=sequence.attrib.get("precursor", "false").lower() == "true",
                fragment=sequence.attrib.get("fragment"),
                sequence="".join((sequence.text or "").split()),
            )
        except (KeyError, ValueError) as e:
            raise RecordFormatError(f"invalid sequence element in UniProt entry {accession.text}") from e

    def __str__(self):
        return "\t".join(
            [
                self.accession,
                str(self.length),
                str(self.mass),
                self.checksum,
                self.modified,
                str(self.version),
                str(self.precursor).lower(),
                self.fragment or "",
                self.sequence,
            ]
        )


# position status attribute to symbol; a missing status is certain
POSITION_STATUS_SYMBOLS = {
    "certain": "=",
    "uncertain": "~",
    "less than": "<",
    "greater than": ">",
    "unknown": "?",
}
CERTAIN = "="


@dataclass
class Position:
    """A begin, end or single position of a feature location."""

    position: int | None
    status: str

    @classmethod
    def from_element(cls, element: ET.Element) -> Position:
        status = element.attrib.get("status")
        if status is not None and status not in POSITION_STATUS_SYMBOLS:
            raise RecordFormatError(f"invalid position status {status}")
        position = element.attrib.get("position")
        return cls(
            position=None if position is None else int(position),
            status=CERTAIN if status is None else POSITION_STATUS_SYMBOLS[status],
        )


@dataclass
class EntryFeature:
    """A ``feature`` element of a UniProt entry, with the accession of its entry."""

    accession: str
    description: str | None = None
    evidence: str | None = None
    ref: str | None = None
    type: str | None = None
    original: str | None = None
    variations: str | None = None
    begin: Position | None = None
    end: Position | None = None
    position: Position | None = None
    location_sequence: str | None = None
    ligand: str | None = None
    ligand_part: str | None = None

    @classmethod
    def from_feature(cls, accession: str, feature: ET.Element) -> EntryFeature:
        """
        Build from a ``feature`` element.

        Variations are joined with ``"; "``. A location has either begin and end positions
        or a single position; ligand and ligand part are taken from their ``name`` children.

        Raises
        ------
        RecordFormatError
            If a position is not an integer or has an unknown status.
        """
        entry_feature = cls(
            accession=accession,
            description=feature.attrib.get("description"),
            evidence=feature.attrib.get("evidence"),
            ref=feature.attrib.get("ref"),
            type=feature.attrib.get("type"),
        )
        variations = []
        for child in feature:
            name = _local_name(child.tag)
            if name == "original":
                entry_feature.original = child.text
            elif name == "variation":
                variations.append(child.text or "")
            elif name == "location":
                entry_feature.location_sequence = child.attrib.get("sequence")
                try:
                    for part in child:
                        part_name = _local_name(part.tag)
                        if part_name in ("begin", "end", "position"):
                            setattr(entry_feature, part_name, Position.from_element(part))
                except ValueError as e:
                    raise RecordFormatError(f"invalid feature location in UniProt entry {accession}") from e
            elif name in ("ligand", "ligandPart"):
                ligand_name = _child(child, "name")
                value = None if ligand_name is None else ligand_name.text
                if name == "ligand":
                    entry_feature.ligand = value
                else:
                    entry_feature.ligand_part = value
        if variations:
            entry_feature.variations = "; ".join(variations)
        return entry_feature

    def row(self) -> dict:
        """Columns of the features table."""
        row = {
            "accession": self.accession,
            "description": self.description,
            "evidence": self.evidence,
            "ref": self.ref,
            "type": self.type,
            "original": self.original,
            "variations": self.variations,
        }
        for name in ("begin", "end", "position"):
            position = getattr(self, name)
            row[f"{name}_status"] = None if position is None else position.status
            row[name] = None if position is None else position.position
        row["location_sequence"] = self.location_sequence
        row["ligand"] = self.ligand
        row["ligand_part"] = self.ligand_part
        return row


def iter_entries(handle: TextIO) -> Iterator[ET.Element]:
    """
    ``entry`` elements of a UniProt XML stream, each complete when yielded.

    Entries are removed from the document root once the caller resumes, so memory use is
    bounded by the largest entry rather than the size of the file.
    """
    root = None
    for event, element in ET.iterparse(handle, events=("start", "end")):
        if root is None:
            root = element
        if event == "end" and _local_name(element.tag) == ENTRY:
            yield element
            root.clear()


def read_entry_sequences(handle: TextIO) -> Iterator[EntrySequence]:
    """Entry sequences of a UniProt XML stream, parsed one entry at a time."""
    for entry in iter_entries(handle):
        yield EntrySequence.from_entry(entry)


def read_entry_features(handle: TextIO) -> Iterator[EntryFeature]:
    """Features of each entry of a UniProt XML stream, with the primary (first) accession of the entry."""
    for entry in iter_entries(handle):
        accession = _child(entry, ACCESSION)
        if accession is None:
            raise RecordFormatError("UniProt entry without accession")
        for child in entry:
            if _local_name(child.tag) == FEATURE:
                yield EntryFeature.from_feature(accession.text.strip(), child)
