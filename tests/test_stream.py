import io
import zlib

import pytest

from pdfcanvas.stream import (
    END_OF_STREAM,
    START_OF_STREAM,
    ExtGState,
    Filter,
    LengthObject,
    Stream,
    flate_compress,
)


def _split(out: bytes) -> tuple[bytes, bytes]:
    header, _, rest = out.partition(START_OF_STREAM)
    assert rest.endswith(END_OF_STREAM)
    return header, rest[: -len(END_OF_STREAM)]


def test_filter_names_in_headers():
    flate_buf = io.BytesIO()
    Stream(b"abc", filter=Filter.FLATE).encode(flate_buf)
    flate_header, _ = _split(flate_buf.getvalue())
    assert b"/Filter " + Filter.FLATE.pdf_name.encode() + b"\n" in flate_header
    assert Filter.FLATE.pdf_name == "/FlateDecode"
    assert Filter.DCT_DECODE.pdf_name == "/DCTDecode"

    plain_buf = io.BytesIO()
    Stream(b"abc", filter=Filter.NO_FILTER).encode(plain_buf)
    plain_header, _ = _split(plain_buf.getvalue())
    assert b"/Filter" not in plain_header
    assert str(Filter.NO_FILTER) == ""


def test_flate_compress_round_trip():
    data = b"some content stream data " * 20
    assert zlib.decompress(flate_compress(data)) == data


def test_uncompressed_stream_exact_bytes():
    s = Stream(b"hello", filter=Filter.NO_FILTER)
    buf = io.BytesIO()
    n = s.encode(buf)
    assert buf.getvalue() == b"<<\n/Length 5\n>>\nstream\nhello\nendstream\n"
    assert n == len(buf.getvalue())


def test_trailing_eol_stripped():
    s = Stream(b"abc\n\r\n", filter=Filter.NO_FILTER)
    buf = io.BytesIO()
    s.encode(buf)
    header, body = _split(buf.getvalue())
    assert body == b"abc"
    assert b"/Length 3\n" in header


def test_dct_stream_has_filter():
    s = Stream(b"\xff\xd8\xff", filter=Filter.DCT_DECODE)
    buf = io.BytesIO()
    s.encode(buf)
    header, body = _split(buf.getvalue())
    assert b"/Filter /DCTDecode\n" in header
    assert body == b"\xff\xd8\xff"


def test_default_filter_becomes_flate_after_children():
    s = Stream(b"0 0 m\n10 10 l\nS\n")
    assert s.children() == []
    assert s.filter == Filter.FLATE


def test_short_flate_stream_round_trip():
    data = b"0 0 m\n10 10 l\nS"
    s = Stream(data, filter=Filter.FLATE)
    buf = io.BytesIO()
    n = s.encode(buf)
    out = buf.getvalue()
    assert n == len(out)
    header, body = _split(out)
    assert zlib.decompress(body) == data
    assert b"/Filter /FlateDecode\n" in header
    assert f"/Length1 {len(data)}\n".encode() in header
    assert f"/Length {len(body)}\n".encode() in header


def test_long_flate_stream_uses_length_object():
    data = bytes(range(256)) * 20
    s = Stream(data)
    kids = s.children()
    assert len(kids) == 1 and isinstance(kids[0], LengthObject)
    assert s.children() == []
    kids[0].mark(9)
    buf = io.BytesIO()
    n = s.encode(buf)
    out = buf.getvalue()
    assert n == len(out)
    header, body = _split(out)
    assert b"/Length 9 0 R\n" in header
    assert zlib.decompress(body) == data
    assert kids[0].length == len(body)


def test_extras_appended():
    s = Stream(b"x", filter=Filter.NO_FILTER, extras=[("/Type", "/XObject")])
    buf = io.BytesIO()
    s.encode(buf)
    header, _ = _split(buf.getvalue())
    assert header.index(b"/Length") < header.index(b"/Type /XObject")


def test_invalid_filter_raises():
    s = Stream(b"x", filter=7)
    with pytest.raises(ValueError):
        s.encode(io.BytesIO())


def test_length_object_encode():
    obj = LengthObject(length=42)
    buf = io.BytesIO()
    assert obj.encode(buf) == 3
    assert buf.getvalue() == b"42\n"


def test_ext_gstate_encode():
    e = ExtGState([("/ca", 0.5)])
    buf = io.BytesIO()
    n = e.encode(buf)
    assert buf.getvalue() == b"<<\n/ca 0.5\n>>\n"
    assert n == len(buf.getvalue())
    assert e.children() == []


def test_mark_sets_refnum():
    s = Stream(b"")
    s.mark(4)
    assert s.refnum == 4