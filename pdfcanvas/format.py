"""Low-level formatting of PDF objects, operators and primitive values."""

from __future__ import annotations

import abc
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, BinaryIO

# Graphics state operators (Table 56).
OP_q = b"q\n"
OP_Q = b"Q\n"
OP_cm = b"cm\n"
OP_w = b"w\n"
OP_J = b"J\n"
OP_j = b"j\n"
OP_M = b"M\n"
OP_d = b"d\n"
OP_ri = b"ri\n"
OP_i = b"i\n"
OP_gs = b"gs\n"

# Path construction operators (Table 58).
OP_m = b"m\n"
OP_l = b"l\n"
OP_c = b"c\n"
OP_v = b"v\n"
OP_y = b"y\n"
OP_h = b"h\n"
OP_re = b"re\n"

# Path painting operators (Table 59).
OP_S = b"S\n"
OP_s = b"s\n"
OP_f = b"f\n"
OP_f_STAR = b"f*\n"
OP_B = b"B\n"
OP_B_STAR = b"B*\n"
OP_b = b"b\n"
OP_b_STAR = b"b*\n"
OP_n = b"n\n"

# Clipping path operators (Table 60).
OP_W = b"W\n"
OP_W_STAR = b"W*\n"

# Colour operators (Table 73).
OP_CS = b"CS\n"
OP_cs = b"cs\n"
OP_SC = b"SC\n"
OP_SCN = b"SCN\n"
OP_sc = b"sc\n"
OP_scn = b"scn\n"
OP_G = b"G\n"
OP_g = b"g\n"
OP_RG = b"RG\n"
OP_rg = b"rg\n"
OP_K = b"K\n"
OP_k = b"k\n"

# XObject operator (Table 86).
OP_Do = b"Do\n"

# Text state operators (Table 103).
OP_Tc = b"Tc\n"
OP_Tw = b"Tw\n"
OP_Tz = b"Tz\n"
OP_TL = b"TL\n"
OP_Tf = b"Tf\n"
OP_Tr = b"Tr\n"
OP_Ts = b"Ts\n"

# Text object operators (Table 105).
OP_BT = b"BT\n"
OP_ET = b"ET\n"

# Text positioning operators (Table 106).
OP_Td = b"Td\n"
OP_TD = b"TD\n"
OP_Tm = b"Tm\n"
OP_T_STAR = b"T*\n"

# Text showing operators (Table 107).
OP_Tj = b"Tj\n"
OP_APOSTROPHE = b"'\n"
OP_QUOTE = b'"\n'
OP_TJ = b"TJ\n"

# Marked content operators (Table 352).
OP_MP = b"MP\n"
OP_DP = b"DP\n"
OP_BMC = b"BMC\n"
OP_EMC = b"EMC\n"


class PdfObject(abc.ABC):
    """A node of the PDF document graph.

    A node's ``refnum`` is 0 until it is marked; once marked, it is the
    number by which other objects refer to it indirectly.
    """

    refnum: int = 0

    def mark(self, i: int) -> None:
        """Assign the object number ``i`` to this node."""
        self.refnum = i

    def children(self) -> list[PdfObject]:
        """Return the nodes reachable from this one."""
        return []

    @abc.abstractmethod
    def encode(self, w: BinaryIO) -> int:
        """Write the PDF encoding of this node to ``w``; return the byte count."""


def pdf_date(t: datetime) -> bytes:
    """Return the PDF date string for ``t``, e.g. ``(D:20240102030405Z00'00)``."""
    offset = t.utcoffset()
    seconds = int(offset.total_seconds()) if offset is not None else 0
    if seconds < 0:
        sign = "-"
    elif seconds == 0:
        sign = "Z"
    else:
        sign = "+"
    seconds = abs(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    text = (
        f"(D:{t.year:04d}{t.month % 100:02d}{t.day % 100:02d}"
        f"{t.hour % 100:02d}{t.minute % 100:02d}{t.second % 100:02d}"
        f"{sign}{hours % 100:02d}'{minutes % 100:02d})"
    )
    return text.encode("ascii")


def hex_text(b: bytes) -> bytes:
    """Return ``b`` as a hexadecimal PDF string, including the angle brackets."""
    return b"<" + bytes(b).hex().encode("ascii") + b">"


_FIELD_NAME_FORBIDDEN = frozenset(b"\\().")


def acrofield_name(s: str) -> bytes:
    """Return ``s`` as a literal string safe for use as a form field name."""
    out = bytearray(b"(")
    for ch in s:
        r = ord(ch)
        c = r & 0xFF
        if c != r or c < ord("!") or c > ord("~") or c in _FIELD_NAME_FORBIDDEN:
            c = ord("_")
        out.append(c)
    out.append(ord(")"))
    return bytes(out)


def pdf_string(s: str) -> str:
    """Return ``s`` wrapped as a PDF literal string with escaped parentheses."""
    s = s.replace("(", "\\(")
    s = s.replace(")", "\\)")
    s = s.replace("\\", "\\\\)")
    return "(" + s + ")"


def iref(o: PdfObject) -> str:
    """Return an indirect reference to ``o``."""
    return f"{o.refnum} 0 R"


def pdf_name(s: str) -> str:
    """Return ``s`` as a PDF name literal."""
    return "/" + s


def is_eol(c: int) -> bool:
    """Return True if the byte ``c`` is a line feed or carriage return."""
    return c in (0x0A, 0x0D)


def format_float(f: float) -> str:
    """Format ``f`` in the shortest exact positional form, without exponent."""
    f = float(f)
    if math.isnan(f):
        return "NaN"
    if math.isinf(f):
        return "+Inf" if f > 0 else "-Inf"
    text = format(Decimal(repr(f)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def command(op: bytes, *args: float) -> bytes:
    """Return an operator line taking float operands."""
    return b"".join(format_float(a).encode("ascii") + b" " for a in args) + op


def int_command(op: bytes, *args: int) -> bytes:
    """Return an operator line taking integer operands."""
    return b"".join(str(int(a)).encode("ascii") + b" " for a in args) + op


_RECT_ATTRS = ("llx", "lly", "urx", "ury")


def _to_bytes(s: str) -> bytes:
    try:
        return s.encode("latin-1")
    except UnicodeEncodeError:
        return s.encode("utf-8")


def _format_element(item: Any) -> bytes:
    if isinstance(item, PdfObject):
        return iref(item).encode("ascii")
    if isinstance(item, str):
        return _to_bytes(item)
    if isinstance(item, bool):
        return b"true" if item else b"false"
    if isinstance(item, int):
        return str(item).encode("ascii")
    if isinstance(item, float):
        return format_float(item).encode("ascii")
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)
    raise TypeError(f"cannot format array element of type {type(item).__name__}")


def format_value(value: Any) -> bytes:
    """Return the PDF encoding of a dictionary value."""
    if isinstance(value, PdfObject):
        return iref(value).encode("ascii")
    if isinstance(value, str):
        return _to_bytes(value)
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if isinstance(value, int):
        return str(int(value)).encode("ascii")
    if isinstance(value, float):
        return format_float(value).encode("ascii")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if all(hasattr(value, attr) for attr in _RECT_ATTRS):
        coords = (format_float(getattr(value, attr)) for attr in _RECT_ATTRS)
        return ("[" + " ".join(coords) + "]").encode("ascii")
    if isinstance(value, (list, tuple)):
        return b"[" + b" ".join(_format_element(item) for item in value) + b"]"
    raise TypeError(f"cannot format value of type {type(value).__name__}")


FieldsLike = Mapping[str, Any] | Iterable[tuple[str, Any]]


def dictionary(fields: FieldsLike) -> bytes:
    """Return the PDF dictionary for ``fields``; entries whose value is None are skipped."""
    pairs = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    if not pairs:
        return b""
    parts = [b"<<\n"]
    for key, value in pairs:
        if value is None:
            continue
        parts.append(_to_bytes(key) + b" " + format_value(value) + b"\n")
    parts.append(b">>\n")
    return b"".join(parts)


def subdictionary(fields: FieldsLike) -> bytes:
    """Return a dictionary for embedding in another, without the trailing newline."""
    return dictionary(fields)[:-1]


def pad10(n: int) -> bytes:
    """Return ``n`` as ten zero-padded digits, keeping the last ten if longer."""
    if n <= 0:
        return b"0" * 10
    return f"{n % 10**10:010d}".encode("ascii")


W1252: tuple[int, ...] = tuple(range(128)) + (
    0x20AC, 0x0000, 0x201A, 0x0192, 0x201E, 0x2026, 0x2020, 0x2021,
    0x02C6, 0x2030, 0x0160, 0x2039, 0x0152, 0x0000, 0x017D, 0x0000,
    0x0000, 0x2018, 0x2019, 0x201C, 0x201D, 0x2022, 0x2013, 0x2014,
    0x02DC, 0x2122, 0x0161, 0x203A, 0x0153, 0x0000, 0x017E, 0x0178,
) + tuple(range(0xA0, 0x100))
"""Maps each Windows-1252 byte to its Unicode code point (0 where undefined)."""

_W1252_REVERSE = {cp: code for code, cp in enumerate(W1252) if code >= 0x80}


def win1252_code(r: str | int) -> int:
    """Return the Windows-1252 byte for the character ``r``, or 0 if it has none."""
    u = ord(r) if isinstance(r, str) else int(r)
    if 0 <= u < 128:
        return u
    if u < 256 and W1252[u] == u:
        return u
    return _W1252_REVERSE.get(u, 0)