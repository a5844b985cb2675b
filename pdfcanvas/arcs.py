"""Elliptic arcs drawn as sequences of cubic Bézier curves."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from .content import ContentStream
from .geometry import Matrix, Point, equiv, transform

Vector = tuple[float, float]

_TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class SVGArcParams:
    """The endpoint parameterization of an SVG arc subpath.

    Coordinates are in SVG user space; ``phi`` is the x-axis rotation in radians.
    """

    x1: float = 0.0
    y1: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    phi: float = 0.0
    is_long: bool = False
    is_clockwise: bool = False
    x2: float = 0.0
    y2: float = 0.0


@dataclass
class CenterParams:
    """The center parameterization of an elliptic arc."""

    rx: float = 0.0
    ry: float = 0.0
    cx: float = 0.0
    cy: float = 0.0
    phi: float = 0.0
    theta: float = 0.0
    delta: float = 0.0


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics: division by zero yields an infinity or NaN."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _rotate(p: Point, theta: float) -> Point:
    sin, cos = math.sin(theta), math.cos(theta)
    return Point(p.x * cos - p.y * sin, p.x * sin + p.y * cos)


def _place(p: Point, rx: float, ry: float, phi: float, cx: float, cy: float) -> Point:
    scaled = Point(p.x * rx, p.y * ry)
    rotated = _rotate(scaled, phi)
    return Point(rotated.x + cx, rotated.y + cy)


def kappa(theta: float) -> float:
    """Return the distance between a unit-circle segment's end point and its control point."""
    if theta == math.pi / 4:
        return 0.265216489839544
    if theta == math.pi / 2:
        return 0.5522847498307933
    if theta == math.pi / 8:
        return 0.13132187114288565
    return 4.0 / 3.0 * math.tan(theta / 4.0)


def basic_arc(theta: float, delta: float) -> tuple[Point, Point, Point, Point]:
    """Return the Bézier points of the unit-circle arc from ``theta`` to ``theta + delta``.

    Valid for ``abs(delta) <= pi``. The points are start, first control,
    second control and end.
    """
    k = kappa(delta)
    sin_d, cos_d = math.sin(delta), math.cos(delta)
    p1 = Point(1.0, 0.0)
    p2 = Point(cos_d, sin_d)
    q1 = Point(1.0, k)
    dx, dy = -sin_d, cos_d
    q2 = Point(p2.x - dx * k, p2.y - dy * k)
    return (
        _rotate(p1, theta),
        _rotate(q1, theta),
        _rotate(q2, theta),
        _rotate(p2, theta),
    )


def _segments(theta: float, delta: float, tau: float) -> Iterator[tuple[float, float]]:
    """Yield (start angle, sweep) for each segment of an arc split at most ``tau`` wide."""
    beta = 0.0
    if delta > 0:
        while beta < delta:
            yield theta, min(tau, delta - beta)
            theta += tau
            beta += tau
    elif delta < 0:
        while beta > delta:
            yield theta, max(-tau, delta - beta)
            theta -= tau
            beta -= tau


def _step_size(step: float) -> float:
    tau = min(abs(step), math.pi)
    return math.pi / 8 if tau <= 0 else tau


def _draw(cs: ContentStream, curves: Iterator[tuple[Point, Point, Point, Point]]) -> None:
    for index, (p1, q1, q2, p2) in enumerate(curves):
        if index == 0 and not equiv(cs.gs.cur_pt, p1):
            cs.move_to(p1.x, p1.y)
        cs.cubic_bezier1(q1.x, q1.y, q2.x, q2.y, p2.x, p2.y)


def arc2(
    cs: ContentStream,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    theta: float,
    delta: float,
    phi: float,
    step: float,
) -> None:
    """Draw an elliptic arc rotated by ``phi`` about its center.

    ``step`` is the largest sweep, in radians, of each Bézier segment; it is
    capped at pi, and a value of 0 falls back to pi/8.
    """
    tau = _step_size(step)

    def curves() -> Iterator[tuple[Point, Point, Point, Point]]:
        for start, sweep in _segments(theta, delta, tau):
            yield tuple(  # type: ignore[misc]
                _place(p, rx, ry, phi, cx, cy) for p in basic_arc(start, sweep)
            )

    _draw(cs, curves())


def arc(
    cs: ContentStream,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    theta: float,
    delta: float,
) -> None:
    """Draw the arc of the ellipse centred at (cx, cy) from ``theta`` to ``theta + delta``.

    A negative ``delta`` draws the arc clockwise.
    """
    arc2(cs, cx, cy, rx, ry, theta, delta, 0.0, math.pi / 2)


def circle(cs: ContentStream, cx: float, cy: float, r: float) -> None:
    """Append a circle of radius ``r`` centred at (cx, cy); it ends at (cx + r, cy)."""
    arc2(cs, cx, cy, r, r, 0.0, _TWO_PI, 0.0, math.pi / 4)


def ellipse(cs: ContentStream, cx: float, cy: float, rx: float, ry: float) -> None:
    """Append an ellipse with radii ``rx`` and ``ry`` centred at (cx, cy)."""
    arc2(cs, cx, cy, rx, ry, 0.0, _TWO_PI, 0.0, math.pi / 4)


def _svg_to_pdf(p: Point, h: float, m: Matrix) -> Point:
    q = transform(p, m)
    return Point(q.x, h - q.y)


def svg_arc(cs: ContentStream, s: SVGArcParams, h: float, m: Matrix) -> None:
    """Draw an SVG endpoint-parameterized arc; ``h`` and ``m`` are the SVG's height and matrix."""
    cp = center(s)
    tau = _step_size(math.pi / 4)

    def curves() -> Iterator[tuple[Point, Point, Point, Point]]:
        for start, sweep in _segments(cp.theta, cp.delta, tau):
            yield tuple(  # type: ignore[misc]
                _svg_to_pdf(_place(p, cp.rx, cp.ry, cp.phi, cp.cx, cp.cy), h, m)
                for p in basic_arc(start, sweep)
            )

    _draw(cs, curves())


def _dot(u: Vector, v: Vector) -> float:
    return u[0] * v[0] + u[1] * v[1]


def _clamp(f: float, low: float, high: float) -> float:
    if math.isnan(f):
        return f
    return min(high, max(low, f))


def vector_angle(u: Vector, v: Vector) -> float:
    """Return the signed angle, in radians, from ``u`` to ``v``."""
    sign = -1.0 if u[0] * v[1] - u[1] * v[0] < 0 else 1.0
    cosine = _div(_dot(u, v), math.hypot(*u) * math.hypot(*v))
    return sign * math.acos(_clamp(cosine, -1.0, 1.0))


def center(a: SVGArcParams) -> CenterParams:
    """Convert an endpoint parameterization to a center parameterization."""
    rx, ry = abs(a.rx), abs(a.ry)
    sin_phi, cos_phi = math.sin(a.phi), math.cos(a.phi)

    # Step 1: compute (x1', y1').
    xt = (a.x1 - a.x2) / 2.0
    yt = (a.y1 - a.y2) / 2.0
    x1p = cos_phi * xt + sin_phi * yt
    y1p = -sin_phi * xt + cos_phi * yt
    x1ps, y1ps = x1p * x1p, y1p * y1p

    # Scale the radii up if they are too small to span the endpoints.
    lam = _div(x1ps, rx * rx) + _div(y1ps, ry * ry)
    if lam > 1.0:
        root = math.sqrt(lam)
        rx = rx * root if not math.isinf(root) or rx != 0 else math.nan
        ry = ry * root if not math.isinf(root) or ry != 0 else math.nan
    rxs, rys = rx * rx, ry * ry

    # Step 2: compute (cx', cy').
    num = abs(rxs * rys - rxs * y1ps - rys * x1ps)
    den = abs(rxs * y1ps + rys * x1ps)
    coeff = math.sqrt(_div(num, den))
    if a.is_long == a.is_clockwise:
        coeff = -coeff
    cxp = coeff * _div(rx * y1p, ry)
    cyp = coeff * _div(-1.0 * ry * x1p, rx)

    # Step 3: compute (cx, cy).
    cx = cos_phi * cxp - sin_phi * cyp + (a.x1 + a.x2) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (a.y1 + a.y2) / 2.0

    # Step 4: compute theta and delta.
    start = (_div(x1p - cxp, rx), _div(y1p - cyp, ry))
    theta = vector_angle((1.0, 0.0), start)
    end = (_div(-x1p - cxp, rx), _div(-y1p - cyp, ry))
    delta = math.fmod(abs(vector_angle(start, end)), _TWO_PI)
    if delta < math.pi and a.is_long:
        delta = _TWO_PI - delta
    elif delta > math.pi and not a.is_long:
        delta = _TWO_PI - delta
    if not a.is_clockwise:
        delta = -delta

    return CenterParams(rx=rx, ry=ry, cx=cx, cy=cy, phi=a.phi, theta=theta, delta=delta)