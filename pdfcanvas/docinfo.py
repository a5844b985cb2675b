"""Document information dictionary and XMP metadata stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, BinaryIO

from .format import PdfObject, dictionary, pdf_date
from .stream import Stream


def utf16be_string(s: str) -> bytes:
    """Return ``s`` as a PDF literal string in UTF-16BE with a byte order mark."""
    try:
        encoded = s.encode("utf-16-be")
    except UnicodeEncodeError:
        return b"()"
    return b"(\xfe\xff" + encoded + b")"


@dataclass(eq=False)
class InfoDict(PdfObject):
    """A document information dictionary holding document-level metadata."""

    title: str = ""
    author: str = ""
    subject: str = ""
    keywords: str = ""
    creator: str = ""
    producer: str = ""
    creation_date: datetime | None = None
    mod_date: datetime | None = None
    refnum: int = 0

    def encode(self, w: BinaryIO) -> int:
        fields: list[tuple[str, Any]] = [
            (key, utf16be_string(value))
            for key, value in (
                ("/Title", self.title),
                ("/Author", self.author),
                ("/Subject", self.subject),
                ("/Keywords", self.keywords),
                ("/Creator", self.creator),
                ("/Producer", self.producer),
            )
            if value
        ]
        if self.creation_date is not None:
            fields.append(("/CreationDate", pdf_date(self.creation_date)))
        if self.mod_date is not None:
            fields.append(("/ModDate", pdf_date(self.mod_date)))
        data = dictionary(fields)
        w.write(data)
        return len(data)


@dataclass(eq=False)
class Metadata(Stream):
    """An uncompressed XMP metadata stream; its content is not validated."""

    extras: list[tuple[str, Any]] = field(
        default_factory=lambda: [("/Type", "/Metadata"), ("/Subtype", "/XML")]
    )

    def children(self) -> list[PdfObject]:
        return []

    def encode(self, w: BinaryIO) -> int:
        self.extras = [("/Type", "/Metadata"), ("/Subtype", "/XML")]
        return super().encode(w)