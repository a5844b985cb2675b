# pdfcanvas

Low-level building blocks for producing PDF documents from Python. The package
has no runtime dependencies.

## Modules

- `pdfcanvas.format` – encoding of PDF values: `dictionary`, `subdictionary`,
  `format_value`, `pdf_name`, `pdf_string`, `hex_text`, `acrofield_name`,
  `pdf_date`, `iref`, `pad10`, `win1252_code`, the operator-line helpers
  `command` and `int_command`, the `OP_*` operator constants, and the
  `PdfObject` base class for nodes of a document graph.
- `pdfcanvas.geometry` – `Point`, `Rect` and affine `Matrix` values with
  `translate`, `scale_by`, `rotate`, `skew`, `mul`, `transform`,
  `transform_rect` and `equiv`.
- `pdfcanvas.color` – `GColor`, `RGBColor` and `CMYKColor`, each with its
  `ColorSpace`, plus named colours such as `BLACK`, `RED` and `CYAN`.
- `pdfcanvas.stream` – `Stream` objects with an optional Flate `Filter`,
  `LengthObject`, `ExtGState` and `flate_compress`.
- `pdfcanvas.docinfo` – the document information dictionary (`InfoDict`),
  XMP `Metadata` streams and `utf16be_string`.
- `pdfcanvas.annot` – pop-up text annotations (`TextAnnot`) with
  `AnnotFlag` and `TextAnnotStyle`.
- `pdfcanvas.content` – a `ContentStream` that records drawing operators and
  tracks a `GraphicsState`: paths, painting, clipping, line styles, dash
  patterns, colours, alpha constants, the `q`/`Q` stack and text objects.
- `pdfcanvas.arcs` – elliptic arcs (`arc`, `arc2`), `circle` and `ellipse`
  built from cubic Bézier segments, and SVG endpoint-parameterised arcs
  (`svg_arc`, `center`).
- `pdfcanvas.subset.harfbuzz` – font subsetting through the HarfBuzz
  `hb-subset` program (`hb_subset`, `hb_subset_path`, `HarfBuzzSubsetter`).

## Installation

```
pip install pdfcanvas
```

## Drawing

```python
import io

from pdfcanvas.arcs import circle
from pdfcanvas.color import RGBColor
from pdfcanvas.content import ContentStream, FillRule

cs = ContentStream()
cs.set_line_width(2)
cs.set_color_stroke(RGBColor(0, 0, 1))
cs.draw_line(72, 72, 288, 72)

cs.set_color(RGBColor(1, 0, 0))
circle(cs, 144, 144, 36)
cs.fill(FillRule.NON_ZERO)

out = io.BytesIO()
written = cs.encode(out)  # a Flate-compressed stream object body
```

Path operators only take effect while a path is being built: `line_to` and
the `cubic_bezier*` methods do nothing until `move_to` or `re` has started a
path, and the painting operators (`stroke`, `fill`, `fill_stroke`,
`end_path` and the closing variants) reset the current point.

`q_restore` raises `GraphicsStackError` when the stack is empty or when a text
object opened after the last `q_save` is still open. Text objects cannot be
nested: `begin_text` raises `TextObjectError` if one is already open and
returns the function that closes it. `ContentStream.text()` does the same as a
context manager:

```python
with cs.text():
    ...
```

`set_alpha_const` and `set_ext_gs` add an `ExtGState` to the stream's
`resources` and emit `/GSn gs`; `ResourceDict.to_bytes()` renders the
resource dictionary for a page.

## Streams

A `Stream` whose filter is `Filter.DEFAULT` switches to Flate when its
`children()` are collected. Flate streams longer than 4096 bytes then get a
`LengthObject`, which must be given an object number before encoding and
receives the compressed length when the stream is written. Trailing line
feeds and carriage returns are stripped from stream data on encoding.

## Geometry

```python
import math

from pdfcanvas.geometry import Point, mul, rotate, transform, translate

m = mul(rotate(math.pi / 2), translate(10, 0))
p = transform(Point(1, 0), m)
inverse = m.inverse()
same = rotate(math.pi / 2) @ translate(10, 0)
```

`Matrix()` is the identity. `Matrix.inverse` raises `ValueError` for a
singular matrix. Matrix multiplication is not commutative.

## Encoding values

```python
from pdfcanvas.format import dictionary, hex_text, pdf_name

body = dictionary([("/Type", "/Example"), ("/Name", pdf_name("Demo")), ("/Data", hex_text(b"hi"))])
```

Fields whose value is `None` are left out of the dictionary. `PdfObject`
values are written as indirect references; lists and `Rect` values become
arrays.

## Font subsetting

`hb_subset_path` and `hb_subset` run the external `hb-subset` program, which
must be installed; glyph IDs are retained. `hb_subset` passes the font on
`/dev/stdin`, so it needs a system that provides it. An empty cutset raises
`ValueError`, and a failing `hb-subset` raises
`subprocess.CalledProcessError`.

## What the package does not do

pdfcanvas does not assemble or write complete PDF files: there is no document
or page object, no cross-reference table or trailer. It does not load fonts,
measure or show text, embed images, or provide interactive form fields. It
produces the objects and byte encodings such a writer is built from.

## Running the tests

```
pip install -e .[test]
pytest
```