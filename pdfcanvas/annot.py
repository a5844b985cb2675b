"""Text annotations that pop up over an area of a page."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any, BinaryIO

from .color import Color
from .docinfo import utf16be_string
from .format import PdfObject, dictionary, iref, pdf_date, subdictionary
from .geometry import Rect


class AnnotFlag(enum.IntFlag):
    """Flags specifying the behaviour of text annotations and widgets."""

    NONE = 0
    INVISIBLE = 1 << 0
    HIDDEN = 1 << 1
    PRINT = 1 << 2  # must be set for an annotation to appear when printed
    NO_ZOOM = 1 << 3
    NO_ROTATE = 1 << 4
    NO_VIEW = 1 << 5
    READ_ONLY = 1 << 6
    LOCKED = 1 << 7
    TOGGLE_NO_VIEW = 1 << 8
    LOCKED_CONTENTS = 1 << 9


class TextAnnotStyle(enum.IntEnum):
    """Viewer-defined icon styles for text annotations."""

    COMMENT = 0
    KEY = 1
    NOTE = 2
    HELP = 3
    NEW_PARAGRAPH = 4
    PARAGRAPH = 5
    INSERT = 6

    @property
    def pdf_name(self) -> str:
        return _STYLE_NAMES[self]

    def __str__(self) -> str:
        return self.pdf_name


_STYLE_NAMES = {
    TextAnnotStyle.COMMENT: "/Comment",
    TextAnnotStyle.KEY: "/Key",
    TextAnnotStyle.NOTE: "/Note",
    TextAnnotStyle.HELP: "/Help",
    TextAnnotStyle.NEW_PARAGRAPH: "/NewParagraph",
    TextAnnotStyle.PARAGRAPH: "/Paragraph",
    TextAnnotStyle.INSERT: "/Insert",
}


@dataclass(eq=False)
class TextAnnot(PdfObject):
    """Text shown in a pop-up when the user hovers over the annotated area.

    ``appearance``, if given, describes the note icon and overrides
    ``icon_style``; ``color`` sets the colour of the pop-up.
    """

    contents: str = ""
    user: str = ""
    mod_date: datetime | None = None
    creation_date: datetime | None = None
    subject: str = ""
    open: bool = False
    name: str = ""
    flags: AnnotFlag = AnnotFlag.NONE
    icon_style: TextAnnotStyle = TextAnnotStyle.COMMENT
    appearance: PdfObject | None = None
    color: Color | None = None
    rect: Rect = Rect()
    refnum: int = 0

    def children(self) -> list[PdfObject]:
        return [] if self.appearance is None else [self.appearance]

    def encode(self, w: BinaryIO) -> int:
        fields: list[tuple[str, Any]] = [
            ("/Type", "/Annot"),
            ("/Subtype", "/Text"),
            ("/Rect", self.rect),
            ("/Contents", utf16be_string(self.contents)),
            ("/F", int(self.flags)),
        ]
        if self.appearance is not None:
            fields.append(("/AP", subdictionary([("/N", iref(self.appearance))])))
        else:
            fields.append(("/Name", TextAnnotStyle(self.icon_style).pdf_name))
        if self.user:
            fields.append(("/T", utf16be_string(self.user)))
        if self.creation_date is not None:
            fields.append(("/CreationDate", pdf_date(self.creation_date)))
        if self.subject:
            fields.append(("/Subj", utf16be_string(self.subject)))
        if self.open:
            fields.append(("/Open", True))
        if self.name:
            fields.append(("/NM", utf16be_string(self.name)))
        if self.mod_date is not None:
            fields.append(("/M", pdf_date(self.mod_date)))
        if self.color is not None:
            fields.append(("/C", self.color.components()))
        data = dictionary(fields)
        w.write(data)
        return len(data)