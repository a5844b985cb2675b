"""Content streams: graphics state, path construction and painting operators."""

from __future__ import annotations

import copy
import enum
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from .color import CMYKColor, Color, ColorSpace, GColor, RGBColor
from .format import (
    OP_B,
    OP_B_STAR,
    OP_BT,
    OP_ET,
    OP_G,
    OP_J,
    OP_K,
    OP_M,
    OP_Q,
    OP_RG,
    OP_S,
    OP_W,
    OP_W_STAR,
    OP_b,
    OP_b_STAR,
    OP_c,
    OP_cm,
    OP_f,
    OP_f_STAR,
    OP_g,
    OP_h,
    OP_i,
    OP_j,
    OP_k,
    OP_l,
    OP_m,
    OP_n,
    OP_q,
    OP_re,
    OP_rg,
    OP_ri,
    OP_s,
    OP_v,
    OP_w,
    OP_y,
    PdfObject,
    command,
    format_value,
    int_command,
    iref,
    subdictionary,
)
from .geometry import Matrix, Point, Rect, mul
from .stream import ExtGState, Filter, Stream


class LineCap(enum.IntEnum):
    """The shape at the ends of stroked open subpaths."""

    BUTT = 0
    ROUND = 1
    SQUARE = 2


class LineJoin(enum.IntEnum):
    """The shape at the corners of stroked paths."""

    MITER = 0
    ROUND = 1
    BEVEL = 2


@dataclass(frozen=True)
class DashPattern:
    """A dash array and the phase at which the pattern starts."""

    array: tuple[int, ...] = ()
    phase: int = 0


class PathState(enum.IntEnum):
    """The state of path construction in a content stream."""

    NO_PATH = 0
    BUILDING = 1
    CLIPPING = 2


class BlendMode(enum.IntEnum):
    """Separable blend modes."""

    NORMAL = 0
    MULTIPLY = 1
    SCREEN = 2
    DARKEN = 3
    LIGHTEN = 4
    COLOR_DODGE = 5
    COLOR_BURN = 6
    HARD_LIGHT = 7
    SOFT_LIGHT = 8
    OVERLAY = 9
    DIFFERENCE = 10
    EXCLUSION = 11


class FillRule(enum.IntEnum):
    """The rule deciding whether a point lies inside a path."""

    NON_ZERO = 0
    EVEN_ODD = 1


class TextObjectError(Exception):
    """Raised when text objects are nested or closed twice."""


class GraphicsStackError(Exception):
    """Raised when the graphics state stack cannot be restored."""


@dataclass
class GraphicsState:
    """A content stream's graphics state."""

    matrix: Matrix = field(default_factory=Matrix)
    line_cap: LineCap = LineCap.BUTT
    line_join: LineJoin = LineJoin.MITER
    dash_pattern: DashPattern = field(default_factory=DashPattern)
    path_state: PathState = PathState.NO_PATH
    cur_pt: Point = field(default_factory=Point)
    n_color_space: ColorSpace = ColorSpace.DEVICE_GRAY
    s_color_space: ColorSpace = ColorSpace.DEVICE_GRAY
    n_color: Color | None = None
    s_color: Color | None = None
    line_width: float = 0.0
    miter_limit: float = 0.0
    rendering_intent: str = ""
    stroke_adj: bool = False
    blend_mode: str = ""
    soft_mask: str = ""
    alpha_constant: float = 0.0
    stroke_alpha_constant: float = 0.0
    alpha_source: bool = False
    bp_comp: str = ""
    overprint: bool = False
    overprint_mode: int = 0
    black_gen: str = ""
    undercolor_rem: str = ""
    transfer: str = ""
    halftone: str = ""
    flatness: float = 0.0
    smoothness: float = 0.0


@dataclass
class TextObject:
    """The text and line matrices of an open text object."""

    matrix: Matrix = field(default_factory=Matrix)
    line_matrix: Matrix = field(default_factory=Matrix)


@dataclass
class ResourceDict:
    """Resources referenced by a content stream."""

    fonts: list[PdfObject] = field(default_factory=list)
    ext_gstate: list[PdfObject] = field(default_factory=list)
    images: list[PdfObject] = field(default_factory=list)
    xforms: list[PdfObject] = field(default_factory=list)
    widgets: list[PdfObject] = field(default_factory=list)
    text_annots: list[PdfObject] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Return the resource dictionary as embedded in a page dictionary."""
        if not (self.fonts or self.xforms or self.images or self.ext_gstate):
            return b"<<>>"
        fields: list[tuple[str, Any]] = []
        if self.fonts:
            fields.append(
                ("/Font", subdictionary([(f"/F{i}", iref(o)) for i, o in enumerate(self.fonts)]))
            )
        if self.xforms or self.images:
            xobjects = [(f"/P{i}", iref(o)) for i, o in enumerate(self.xforms)]
            xobjects += [(f"/Im{i}", iref(o)) for i, o in enumerate(self.images)]
            fields.append(("/XObject", subdictionary(xobjects)))
        if self.ext_gstate:
            fields.append(
                (
                    "/ExtGState",
                    subdictionary([(f"/GS{i}", iref(o)) for i, o in enumerate(self.ext_gstate)]),
                )
            )
        return subdictionary(fields)


class _StackState(enum.Enum):
    GRAPHICS = 0
    TEXT = 1


_PAINTING_STATES = (PathState.BUILDING, PathState.CLIPPING)


@dataclass(eq=False)
class ContentStream(Stream):
    """A stream of drawing operators together with the graphics state they produce."""

    data: bytearray = field(default_factory=bytearray)
    filter: Filter = Filter.FLATE
    gs: GraphicsState = field(default_factory=GraphicsState)
    text_object: TextObject | None = None
    resources: ResourceDict = field(default_factory=ResourceDict)
    _gs_stack: list[GraphicsState] = field(default_factory=list, repr=False)
    _stack: list[_StackState] = field(default_factory=list, repr=False)

    def _emit(self, chunk: bytes) -> None:
        self.data += chunk

    # Text objects

    def begin_text(self) -> Callable[[], None]:
        """Open a text object and return the function that closes it.

        Raises TextObjectError if a text object is already open; the
        returned function raises it if the text object is already closed.
        """
        if self.text_object is not None:
            raise TextObjectError("text objects cannot be statically nested")
        self.text_object = TextObject()
        self._stack.append(_StackState.TEXT)
        self._emit(OP_BT)

        def end_text() -> None:
            if self.text_object is None:
                raise TextObjectError("text object is already closed")
            self.text_object = None
            self._stack.pop()
            self._emit(OP_ET)

        return end_text

    @contextmanager
    def text(self) -> Iterator[TextObject]:
        """Open a text object for the duration of the block."""
        end_text = self.begin_text()
        assert self.text_object is not None
        try:
            yield self.text_object
        finally:
            end_text()

    # Graphics state

    def q_save(self) -> None:
        """Push the current graphics state onto the stack."""
        self._gs_stack.append(copy.copy(self.gs))
        self._stack.append(_StackState.GRAPHICS)
        self._emit(OP_q)

    def q_restore(self) -> None:
        """Pop the most recently saved graphics state and make it current."""
        if not self._stack:
            raise GraphicsStackError("current GSStack is empty")
        if self._stack[-1] is not _StackState.GRAPHICS:
            raise GraphicsStackError("cannot interleave q/Q and BT/ET pairs")
        self._stack.pop()
        self.gs = self._gs_stack.pop()
        self._emit(OP_Q)

    def concat(self, m: Matrix) -> None:
        """Set the current transformation matrix to the product of ``m`` and itself."""
        self.gs.matrix = mul(m, self.gs.matrix)
        self._emit(command(OP_cm, m.a, m.b, m.c, m.d, m.e, m.f))

    def set_line_width(self, f: float) -> None:
        self.gs.line_width = f
        self._emit(command(OP_w, f))

    def set_line_cap(self, lc: LineCap) -> None:
        self.gs.line_cap = LineCap(lc)
        self._emit(int_command(OP_J, int(lc)))

    def set_line_join(self, lj: LineJoin) -> None:
        self.gs.line_join = LineJoin(lj)
        self._emit(int_command(OP_j, int(lj)))

    def set_miter_limit(self, ml: float) -> None:
        self.gs.miter_limit = ml
        self._emit(command(OP_M, ml))

    def set_dash_pattern(self, d: DashPattern) -> None:
        self.gs.dash_pattern = d
        array = format_value([int(x) for x in d.array])
        self._emit(array + f" {int(d.phase)} d\n".encode("ascii"))

    def set_render_intent(self, n: str) -> None:
        self.gs.rendering_intent = n
        self._emit(n.encode("latin-1") + b" " + OP_ri)

    def set_flatness(self, f: float) -> None:
        self.gs.flatness = f
        self._emit(command(OP_i, f))

    def _add_ext_gstate(self, fields: list[tuple[str, Any]]) -> None:
        self._emit(f"/GS{len(self.resources.ext_gstate)} gs\n".encode("ascii"))
        self.resources.ext_gstate.append(ExtGState(fields=fields))

    def set_alpha_const(self, a: float, stroke: bool) -> None:
        """Set the stroking or nonstroking alpha constant; 0 is transparent, 1 opaque."""
        if stroke:
            key = "/CA"
            self.gs.stroke_alpha_constant = a
        else:
            key = "/ca"
            self.gs.alpha_constant = a
        self._add_ext_gstate([(key, a)])

    def set_ext_gs(self, ext_gstate: Mapping[str, Any]) -> None:
        """Apply an extended graphics state dictionary of raw PDF entries."""
        self._add_ext_gstate(list(ext_gstate.items()))

    # Colour

    @staticmethod
    def _color_ops(cl: Color) -> tuple[bytes, bytes]:
        if isinstance(cl, GColor):
            return OP_G, OP_g
        if isinstance(cl, RGBColor):
            return OP_RG, OP_rg
        if isinstance(cl, CMYKColor):
            return OP_K, OP_k
        raise TypeError(f"unsupported colour type {type(cl).__name__}")

    def set_color_stroke(self, cl: Color) -> None:
        """Set the stroking colour and its colour space."""
        op, _ = self._color_ops(cl)
        self.gs.s_color_space = cl.color_space
        self.gs.s_color = cl
        self._emit(command(op, *cl.components()))

    def set_color(self, cl: Color) -> None:
        """Set the nonstroking colour and its colour space."""
        _, op = self._color_ops(cl)
        self.gs.n_color_space = cl.color_space
        self.gs.n_color = cl
        self._emit(command(op, *cl.components()))

    # Path construction

    def move_to(self, x: float, y: float) -> None:
        """Begin a new subpath at (x, y)."""
        self.gs.path_state = PathState.BUILDING
        self.gs.cur_pt = Point(x, y)
        self._emit(command(OP_m, x, y))

    def line_to(self, x: float, y: float) -> None:
        """Append a line to (x, y); ignored unless a path is being built."""
        if self.gs.path_state == PathState.BUILDING:
            self.gs.cur_pt = Point(x, y)
            self._emit(command(OP_l, x, y))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Stroke a line from (x1, y1) to (x2, y2)."""
        self.move_to(x1, y1)
        self.line_to(x2, y2)
        self.stroke()

    def _curve(self, op: bytes, x3: float, y3: float, *args: float) -> None:
        if self.gs.path_state in (PathState.NO_PATH, PathState.CLIPPING):
            return
        self.gs.cur_pt = Point(x3, y3)
        self._emit(command(op, *args))

    def cubic_bezier1(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        """Append a curve to (x3, y3) with control points (x1, y1) and (x2, y2)."""
        self._curve(OP_c, x3, y3, x1, y1, x2, y2, x3, y3)

    def cubic_bezier2(self, x2: float, y2: float, x3: float, y3: float) -> None:
        """Append a curve to (x3, y3) controlled by the current point and (x2, y2)."""
        self._curve(OP_v, x3, y3, x2, y2, x3, y3)

    def cubic_bezier3(self, x1: float, y1: float, x3: float, y3: float) -> None:
        """Append a curve to (x3, y3) controlled by (x1, y1) and (x3, y3)."""
        self._curve(OP_y, x3, y3, x1, y1, x3, y3)

    def close_path(self) -> None:
        """Close the current subpath."""
        if self.gs.path_state in _PAINTING_STATES:
            self.gs.path_state = PathState.BUILDING
            self._emit(OP_h)

    def _finish_path(self, op: bytes) -> None:
        if self.gs.path_state in _PAINTING_STATES:
            self.gs.path_state = PathState.NO_PATH
            self.gs.cur_pt = Point()
            self._emit(op)

    def stroke(self) -> None:
        self._finish_path(OP_S)

    def close_path_stroke(self) -> None:
        self._finish_path(OP_s)

    def fill(self, rule: FillRule = FillRule.NON_ZERO) -> None:
        self._finish_path(OP_f_STAR if rule == FillRule.EVEN_ODD else OP_f)

    def fill_stroke(self, rule: FillRule = FillRule.NON_ZERO) -> None:
        self._finish_path(OP_B_STAR if rule == FillRule.EVEN_ODD else OP_B)

    def close_path_fill_stroke(self, rule: FillRule = FillRule.NON_ZERO) -> None:
        self._finish_path(OP_b_STAR if rule == FillRule.EVEN_ODD else OP_b)

    def end_path(self) -> None:
        """End the path without painting it, applying any pending clip."""
        self._finish_path(OP_n)

    def re(self, x: float, y: float, w: float, h: float) -> None:
        """Append a rectangle at (x, y) of width ``w`` and height ``h``."""
        self.gs.path_state = PathState.BUILDING
        self.gs.cur_pt = Point(x, y)
        self._emit(command(OP_re, x, y, w, h))

    def re2(self, r: Rect) -> None:
        """Append the rectangle ``r`` to the path."""
        self.re(r.llx, r.lly, r.urx - r.llx, r.ury - r.lly)

    def clip(self, rule: FillRule = FillRule.NON_ZERO) -> None:
        """Intersect the clipping path with the path being built."""
        if self.gs.path_state == PathState.BUILDING:
            self.gs.path_state = PathState.CLIPPING
            self._emit(OP_W_STAR if rule == FillRule.EVEN_ODD else OP_W)

    # Document graph

    def children(self) -> list[PdfObject]:
        return super().children()

    def encode(self, w: BinaryIO) -> int:
        return super().encode(w)