"""Split a stream of records across output files bounded by a record and/or byte count."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from biofmt_core.cli_utils import positive_int
from biofmt_core.compress import CountingWriter, close_quietly, is_stdio, open_sink, sniff_path
from biofmt_core.logger import logger

DEFAULT_PREFIX = "x"

BYTE_UNITS = {
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "t": 1024**4,
    "tb": 1024**4,
}
_BYTES_PATTERN = re.compile(r"^([0-9]+)\s*([a-zA-Z]*)$")


def to_bytes(value: str) -> int:
    """Convert a human readable size such as "42", "42 kb" or "1G" to a number of bytes.

    Units are case insensitive and powers of 1024.

    Raises
    ------
    ValueError
        If value is empty, has no numeric part or has an unknown unit.
    """
    if value is None:
        raise ValueError("byte size must not be empty")
    match = _BYTES_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"invalid byte size: '{value}'")
    number, unit = match.groups()
    unit = unit.lower() or "b"
    if unit not in BYTE_UNITS:
        raise ValueError(f"invalid byte size unit '{unit}' in '{value}'")
    return int(number) * BYTE_UNITS[unit]


def output_file_name(prefix: str, index: int, suffix: str, left_pad: int = -1) -> str:
    """Name of the index-th split file, the index zero padded to left_pad digits when left_pad > 0."""
    number = f"{index:0{left_pad}d}" if left_pad > 0 else str(index)
    return f"{prefix}{number}{suffix}"


def split_names(
    input_path: str | None,
    format_extensions: tuple[str, ...],
    default_extension: str,
) -> tuple[str, str]:
    """Infer the output file name prefix and suffix for a split run.

    Parameters
    ----------
    input_path : str, optional
        Input file, standard input when None or "-".
    format_extensions : tuple[str, ...]
        Format extensions stripped from the input file name, e.g. (".fa", ".fasta").
    default_extension : str
        Format extension used when reading from standard input, e.g. ".fa".

    Returns
    -------
    tuple[str, str]
        ``(prefix, suffix)``. For "reads.fa.gz" this is ("reads", ".fa.gz"). For standard input
        the prefix is "x" and the suffix is the default extension followed by the compression suffix
        sniffed from the stream.
    """
    if is_stdio(input_path):
        return DEFAULT_PREFIX, default_extension + sniff_path(None).value

    name = Path(input_path).name
    stem, dot, last = name.rpartition(".")
    if not dot or not stem:
        return name, ""
    last_extension = f".{last}"
    for extension in format_extensions:
        if stem.endswith(extension) and len(stem) > len(extension):
            return stem[: -len(extension)], extension + last_extension
    return stem, last_extension


@dataclass
class SplitConfig:
    """Where and when to split.

    Attributes
    ----------
    prefix : str
        Output file name prefix.
    suffix : str
        Output file name suffix, including any compression extension.
    bytes : int, optional
        Roll over to a new file once a file holds at least this many bytes.
    records : int, optional
        Roll over to a new file once a file holds at least this many records.
    left_pad : int
        Zero pad the file index to this many digits, no padding when <= 0.
    """

    prefix: str = DEFAULT_PREFIX
    suffix: str = ""
    bytes: int | None = None
    records: int | None = None
    left_pad: int = -1

    def __post_init__(self):
        if self.bytes is not None and self.bytes <= 0:
            raise ValueError(f"bytes must be positive, got {self.bytes}")
        if self.records is not None and self.records <= 0:
            raise ValueError(f"records must be positive, got {self.records}")

    @classmethod
    def from_args(cls, args, format_extensions: tuple[str, ...], default_extension: str) -> SplitConfig:
        """Build a configuration from parsed split arguments, inferring prefix and suffix where not given."""
        prefix, suffix = args.prefix, args.suffix
        if prefix is None or suffix is None:
            inferred_prefix, inferred_suffix = split_names(args.input_file, format_extensions, default_extension)
            prefix = inferred_prefix if prefix is None else prefix
            suffix = inferred_suffix if suffix is None else suffix
        return cls(prefix=prefix, suffix=suffix, bytes=args.bytes, records=args.records, left_pad=args.left_pad)


class RecordSplitter:
    """Write records to a sequence of files, opening each file lazily.

    A file is closed once the records or bytes written to it reach the configured
    thresholds; the next file is opened when the next record arrives. With neither
    threshold set, everything goes to a single file.

    Parameters
    ----------
    config : SplitConfig
        Output naming and rollover thresholds.
    header : str, optional
        Text written at the start of every file, counted toward the file's bytes.
    """

    def __init__(self, config: SplitConfig, header: str | None = None):
        self.config = config
        self.header = header
        self.file_names: list[str] = []
        self.index = 0
        self.records = 0
        self._writer: CountingWriter | None = None

    def write(self, text: str, weight: int = 1) -> None:
        """Write one record, serialized as text; weight is the number of records it counts for."""
        if self._writer is None:
            self._open()
        self._writer.write(text)
        self.records += weight
        if self._should_roll_over():
            self._roll_over()

    def _open(self) -> None:
        file_name = output_file_name(self.config.prefix, self.index, self.config.suffix, self.config.left_pad)
        logger.debug(f"Opening split file {file_name}")
        self._writer = open_sink(file_name)
        self.file_names.append(file_name)
        self.records = 0
        if self.header:
            self._writer.write(self.header)

    def _should_roll_over(self) -> bool:
        if self.config.records is not None and self.records >= self.config.records:
            return True
        return self.config.bytes is not None and self._writer.count >= self.config.bytes

    def _roll_over(self) -> None:
        close_quietly(self._writer, f"split file {self.file_names[-1]}")
        self._writer = None
        self.index += 1

    def close(self) -> None:
        """Close the current file; errors closing it are logged and ignored, as on rollover."""
        if self._writer is not None:
            close_quietly(self._writer, f"split file {self.file_names[-1]}")
            self._writer = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def add_split_arguments(parser, default_suffix_help: str) -> None:
    """Add the -b/-r/-p/-d/-s arguments shared by the split tools."""
    parser.add_argument(
        "-b", "--bytes", type=to_bytes, default=None, help="split input into files of at most this size, e.g. 100m"
    )
    parser.add_argument(
        "-r", "--records", type=positive_int, default=None, help="split input into files of this many records"
    )
    parser.add_argument(
        "-p", "--prefix", type=str, default=None, help="output file prefix, default input file name or x"
    )
    parser.add_argument(
        "-d", "--left-pad", type=int, default=-1, help="left pad split index in output file name, default no padding"
    )
    parser.add_argument("-s", "--suffix", type=str, default=None, help=default_suffix_help)
