"""Compression aware input and output streams.

Inputs are sniffed by magic bytes, so bgzf, gzip and bzip2 files (or standard input)
are decompressed transparently. Outputs are compressed according to the suffix of the
output file name.
"""

from __future__ import annotations

import bz2
import gzip
import io
import shutil
import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import BinaryIO, TextIO

import pysam
from biofmt_core.logger import logger

BGZF_MAGIC = b"\x1f\x8b\x08\x04"
GZIP_MAGIC = b"\x1f\x8b"
BZIP2_MAGIC = b"BZh"
STDIO = "-"

# (raw, wrapped) standard input, so every caller peeks and reads the same buffer
_wrapped_stdin: tuple[BinaryIO, io.BufferedReader] | None = None


class Compression(Enum):
    """Compression codecs, valued by their conventional file name suffix"""

    NONE = ""
    BGZF = ".bgz"
    GZIP = ".gz"
    BZIP2 = ".bz2"

    @classmethod
    def from_path(cls, path: str | None) -> Compression:
        """Choose the output codec from a file name suffix, plain text by default."""
        if path is None:
            return cls.NONE
        lower = str(path).lower()
        if lower.endswith((".bgz", ".bgzf")):
            return cls.BGZF
        if lower.endswith(".gz"):
            return cls.GZIP
        if lower.endswith(".bz2"):
            return cls.BZIP2
        return cls.NONE


def sniff_compression(stream: io.BufferedReader) -> Compression:
    """Detect the codec of a buffered binary stream without consuming any of it.

    Parameters
    ----------
    stream : io.BufferedReader
        Stream supporting ``peek``.

    Returns
    -------
    Compression
        BGZF is reported before plain gzip since every bgzf block is a gzip member.
    """
    head = stream.peek(len(BGZF_MAGIC))[: len(BGZF_MAGIC)]
    if head.startswith(BGZF_MAGIC):
        return Compression.BGZF
    if head.startswith(GZIP_MAGIC):
        return Compression.GZIP
    if head.startswith(BZIP2_MAGIC):
        return Compression.BZIP2
    return Compression.NONE


def is_stdio(path: str | None) -> bool:
    return path is None or str(path) == STDIO


def stdin_buffer() -> io.BufferedReader:
    """Binary standard input, wrapped once when the current stream cannot peek."""
    global _wrapped_stdin  # noqa: PLW0603
    buffer = sys.stdin.buffer
    if hasattr(buffer, "peek"):
        return buffer
    if _wrapped_stdin is None or _wrapped_stdin[0] is not buffer:
        _wrapped_stdin = (buffer, io.BufferedReader(buffer))
    return _wrapped_stdin[1]


def sniff_path(path: str | None) -> Compression:
    """Sniff the codec of a file, or of standard input when path is None."""
    if is_stdio(path):
        return sniff_compression(stdin_buffer())
    with open(path, "rb") as raw:
        return sniff_compression(io.BufferedReader(raw))


def _decompress(stream: BinaryIO, compression: Compression) -> BinaryIO:
    if compression in (Compression.BGZF, Compression.GZIP):
        return gzip.GzipFile(fileobj=stream, mode="rb")
    if compression is Compression.BZIP2:
        return bz2.BZ2File(stream, mode="rb")
    return stream


@contextmanager
def open_input(path: str | None = None) -> Iterator[TextIO]:
    """Open a text input stream, decompressing bgzf, gzip or bzip2 input by magic bytes.

    Parameters
    ----------
    path : str, optional
        Input file path, standard input when None or "-".

    Yields
    ------
    TextIO
        Decoded text stream. Standard input is left open on exit.
    """
    if is_stdio(path):
        buffer = stdin_buffer()
        handle = io.TextIOWrapper(_decompress(buffer, sniff_compression(buffer)), encoding="utf-8")
        try:
            yield handle
        finally:
            handle.detach()
        return

    compression = sniff_path(path)
    if compression in (Compression.BGZF, Compression.GZIP):
        handle = gzip.open(path, "rt", encoding="utf-8")
    elif compression is Compression.BZIP2:
        handle = bz2.open(path, "rt", encoding="utf-8")
    else:
        handle = open(path, encoding="utf-8")
    with handle:
        yield handle


@contextmanager
def pysam_input(path: str | None = None) -> Iterator[str]:
    """Input path to hand to pysam, which reads plain, gzip and bgzf files but not bzip2.

    bzip2 files are decompressed to a temporary file, and standard input of any kind is
    spooled to one, bzip2 decompressed; the temporary file name is yielded instead.

    Parameters
    ----------
    path : str, optional
        Input file path, standard input when None or "-".

    Yields
    ------
    str
        Path for htslib to open. The temporary file, if any, is removed on exit.
    """
    if not is_stdio(path) and sniff_path(path) is not Compression.BZIP2:
        yield str(path)
        return

    with tempfile.NamedTemporaryFile(prefix="biofmt-") as spool:
        if is_stdio(path):
            source = stdin_buffer()
            if sniff_compression(source) is Compression.BZIP2:
                source = bz2.BZ2File(source, mode="rb")
            shutil.copyfileobj(source, spool)
        else:
            with bz2.open(path, "rb") as source:
                shutil.copyfileobj(source, spool)
        spool.flush()
        logger.debug(f"Spooled {path or STDIO} to {spool.name}")
        yield spool.name


class CountingWriter:
    """Text writer over a binary sink that counts the bytes written to it.

    The count is measured on the encoded text handed to the sink, before any
    compression the sink applies.
    """

    def __init__(self, sink: BinaryIO, *, close_sink: bool = True, encoding: str = "utf-8"):
        self.sink = sink
        self.close_sink = close_sink
        self.encoding = encoding
        self.count = 0
        self.closed = False

    def write(self, text: str) -> int:
        data = text.encode(self.encoding)
        self.sink.write(data)
        self.count += len(data)
        return len(text)

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self.sink.flush()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.close_sink:
            self.sink.close()
        else:
            self.sink.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def open_sink(path: str | None) -> CountingWriter:
    """Open a counting text writer, compressed by the suffix of path.

    Standard output is used when path is None or "-" and is never closed.
    """
    if is_stdio(path):
        return CountingWriter(sys.stdout.buffer, close_sink=False)
    compression = Compression.from_path(path)
    if compression is Compression.BGZF:
        sink = pysam.BGZFile(str(path), "wb")
    elif compression is Compression.GZIP:
        sink = gzip.open(path, "wb")
    elif compression is Compression.BZIP2:
        sink = bz2.open(path, "wb")
    else:
        sink = open(path, "wb")
    return CountingWriter(sink)


def close_quietly(writer: CountingWriter, description: str) -> None:
    """Close a writer, logging rather than raising any I/O error from the close."""
    try:
        writer.close()
    except OSError as e:
        logger.debug(f"Ignoring error closing {description}: {e}")


@contextmanager
def open_output(path: str | None = None) -> Iterator[CountingWriter]:
    """Context manager around :func:`open_sink`; errors closing the output are logged and ignored."""
    writer = open_sink(path)
    try:
        yield writer
    finally:
        close_quietly(writer, path or STDIO)
