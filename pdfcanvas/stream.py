"""PDF data streams, compression filters and extended graphics state objects."""

from __future__ import annotations

import enum
import zlib
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from .format import PdfObject, dictionary, iref, is_eol

START_OF_STREAM = b"stream\n"
END_OF_STREAM = b"\nendstream\n"

# Streams longer than this write their compressed length as a separate object.
_INDIRECT_LENGTH_THRESHOLD = 4096


class Filter(enum.IntEnum):
    """A compression algorithm applied to stream data."""

    DEFAULT = 0
    FLATE = 1
    DCT_DECODE = 2
    NO_FILTER = 3

    @property
    def pdf_name(self) -> str:
        return _FILTER_NAMES[self]

    def __str__(self) -> str:
        return self.pdf_name


_FILTER_NAMES = {
    Filter.DEFAULT: "",
    Filter.FLATE: "/FlateDecode",
    Filter.DCT_DECODE: "/DCTDecode",
    Filter.NO_FILTER: "",
}


def flate_compress(data: bytes) -> bytes:
    """Return ``data`` compressed in the zlib (Flate) format."""
    return zlib.compress(bytes(data))


def _write(w: BinaryIO, data: bytes) -> int:
    w.write(data)
    return len(data)


@dataclass(eq=False)
class LengthObject(PdfObject):
    """An indirect object holding the length of a compressed stream."""

    length: int = 0
    refnum: int = 0

    def encode(self, w: BinaryIO) -> int:
        return _write(w, f"{self.length}\n".encode("ascii"))


@dataclass(eq=False)
class Stream(PdfObject):
    """A PDF data stream."""

    data: bytes | bytearray = b""
    filter: Filter = Filter.DEFAULT
    extras: list[tuple[str, Any]] = field(default_factory=list)
    length_obj: LengthObject | None = None
    refnum: int = 0

    def mark(self, i: int) -> None:
        self.refnum = i

    def children(self) -> list[PdfObject]:
        if self.filter == Filter.DEFAULT:
            self.filter = Filter.FLATE
        if (
            self.filter == Filter.FLATE
            and len(self.data) > _INDIRECT_LENGTH_THRESHOLD
            and self.length_obj is None
        ):
            self.length_obj = LengthObject()
            return [self.length_obj]
        return []

    def _strip_trailing_eol(self) -> bytes:
        data = bytes(self.data)
        end = len(data)
        while end > 0 and is_eol(data[end - 1]):
            end -= 1
        return data[:end]

    def encode(self, w: BinaryIO) -> int:
        try:
            self.filter = Filter(self.filter)
        except ValueError:
            raise ValueError(f"invalid compression filter {self.filter}") from None

        data = self._strip_trailing_eol()
        self.data = data
        dlen = len(data)

        if self.filter == Filter.FLATE and self.length_obj is not None:
            header = dictionary(
                [
                    ("/Filter", self.filter.pdf_name),
                    ("/Length1", dlen),
                    ("/Length", iref(self.length_obj)),
                    *self.extras,
                ]
            )
            n = _write(w, header + START_OF_STREAM)
            compressed = flate_compress(data)
            n += _write(w, compressed)
            self.length_obj.length = len(compressed)
            return n + _write(w, END_OF_STREAM)

        if self.filter == Filter.FLATE:
            compressed = flate_compress(data)
            header = dictionary(
                [
                    ("/Filter", self.filter.pdf_name),
                    ("/Length1", dlen),
                    ("/Length", len(compressed)),
                    *self.extras,
                ]
            )
            n = _write(w, header + START_OF_STREAM)
            return n + _write(w, compressed + END_OF_STREAM)

        fields: list[tuple[str, Any]] = [("/Length", dlen)]
        if self.filter == Filter.DCT_DECODE:
            fields.append(("/Filter", Filter.DCT_DECODE.pdf_name))
        fields.extend(self.extras)
        n = _write(w, dictionary(fields) + START_OF_STREAM)
        return n + _write(w, data + END_OF_STREAM)


@dataclass(eq=False)
class ExtGState(PdfObject):
    """An extended graphics state parameter dictionary."""

    fields: list[tuple[str, Any]] = field(default_factory=list)
    refnum: int = 0

    def encode(self, w: BinaryIO) -> int:
        return _write(w, dictionary(self.fields))