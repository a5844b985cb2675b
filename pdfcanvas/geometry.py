"""Points, rectangles and affine transformation matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point in a two-dimensional coordinate space."""

    x: float = 0.0
    y: float = 0.0

    def to_rect(self, w: float, h: float) -> Rect:
        """Return the Rect whose lower-left vertex is this point, of width ``w`` and height ``h``."""
        return Rect(self.x, self.y, self.x + w, self.y + h)


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its lower-left and upper-right vertices."""

    llx: float = 0.0
    lly: float = 0.0
    urx: float = 0.0
    ury: float = 0.0

    @property
    def width(self) -> float:
        return self.urx - self.llx

    @property
    def height(self) -> float:
        return self.ury - self.lly


@dataclass(frozen=True)
class Matrix:
    """The first two columns of a 3x3 affine matrix whose third column is [0, 0, 1].

    The default value is the identity matrix.
    """

    a: float = 1.0  # x scale
    b: float = 0.0  # x shear
    c: float = 0.0  # y shear
    d: float = 1.0  # y scale
    e: float = 0.0  # x offset
    f: float = 0.0  # y offset

    def inverse(self) -> Matrix:
        """Return the inverse of this matrix; raise ValueError if it has none."""
        det = self.a * self.d - self.c * self.b
        if det == 0:
            raise ValueError("matrix has no inverse")
        return Matrix(
            a=self.d / det,
            b=-self.b / det,
            c=-self.c / det,
            d=self.a / det,
            e=(self.c * self.f - self.e * self.d) / det,
            f=-(self.a * self.f - self.e * self.b) / det,
        )

    def __matmul__(self, other: Matrix) -> Matrix:
        return mul(self, other)


def translate(dx: float, dy: float) -> Matrix:
    """Return a matrix translating a coordinate space by ``dx`` and ``dy``."""
    return Matrix(1, 0, 0, 1, dx, dy)


def scale_by(sx: float, sy: float) -> Matrix:
    """Return a matrix scaling a coordinate space by ``sx`` and ``sy``."""
    return Matrix(sx, 0, 0, sy, 0, 0)


def rotate(theta: float) -> Matrix:
    """Return a matrix rotating a coordinate space counter-clockwise by ``theta`` radians."""
    cos, sin = math.cos(theta), math.sin(theta)
    return Matrix(cos, sin, -sin, cos, 0, 0)


def skew(x_theta: float, y_theta: float) -> Matrix:
    """Return a matrix skewing the x axis by ``x_theta`` and the y axis by ``y_theta``."""
    return Matrix(1, math.tan(x_theta), math.tan(y_theta), 1, 0, 0)


def transform(p: Point, m: Matrix) -> Point:
    """Return ``p`` transformed by ``m``."""
    return Point(
        p.x * m.a + p.y * m.c + m.e,
        p.x * m.b + p.y * m.d + m.f,
    )


def transform_rect(r: Rect, m: Matrix) -> tuple[Point, Point, Point, Point]:
    """Return the vertices of ``r`` transformed by ``m``, in the order LL, UL, LR, UR."""
    return (
        transform(Point(r.llx, r.lly), m),
        transform(Point(r.llx, r.ury), m),
        transform(Point(r.urx, r.lly), m),
        transform(Point(r.urx, r.ury), m),
    )


def mul(m1: Matrix, m2: Matrix) -> Matrix:
    """Return the matrix product of ``m1`` and ``m2`` (not commutative)."""
    return Matrix(
        a=m1.a * m2.a + m1.b * m2.c,
        b=m1.a * m2.b + m1.b * m2.d,
        c=m1.c * m2.a + m1.d * m2.c,
        d=m1.c * m2.b + m1.d * m2.d,
        e=m1.e * m2.a + m1.f * m2.c + m2.e,
        f=m1.e * m2.b + m1.f * m2.d + m2.f,
    )


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def equiv(p1: Point, p2: Point) -> bool:
    """Return True if ``p1`` and ``p2`` are equal when rounded to the nearest thousandth."""
    return (
        _round_half_away(p1.x * 1000) == _round_half_away(p2.x * 1000)
        and _round_half_away(p1.y * 1000) == _round_half_away(p2.y * 1000)
    )